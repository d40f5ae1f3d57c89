from __future__ import annotations

import pytest

from forensic_reader.data.store import IndexStore

LOCAL_USERS_CSV = "Name,Admin\nbob,true\nalice,false\nbob,true\n"

DNS_CACHE_CSV = "\n".join(
    [
        "Entry,RecordName,Data",
        "example.com,example.com,93.184.216.34",
        "evil.example,evil.example,10.0.0.66",
        'intranet,"intranet.corp, local",10.1.1.1',
    ]
)


@pytest.fixture
def store() -> IndexStore:
    return IndexStore()


@pytest.fixture
def loaded_store(store: IndexStore) -> IndexStore:
    store.ingest("LocalUsers.csv", LOCAL_USERS_CSV)
    store.ingest("dns_cache.csv", DNS_CACHE_CSV)
    return store
