"""
FastAPI dependencies — IndexStore instance for the running app.
"""
from __future__ import annotations

import threading

from fastapi import HTTPException

from forensic_reader.data.store import IndexStore

# ---------------------------------------------------------------------------
# Store owned by the app (set during startup)
# ---------------------------------------------------------------------------
_store: IndexStore | None = None

# Sync endpoints run in the threadpool and upload runs on the event loop;
# every store call goes through this lock.
store_lock = threading.Lock()


def set_store(store: IndexStore | None) -> None:
    global _store
    _store = store


def get_store() -> IndexStore:
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store
