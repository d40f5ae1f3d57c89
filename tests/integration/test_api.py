from __future__ import annotations

import gzip
import threading
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from forensic_reader.api import router_search
from forensic_reader.api.dependencies import store_lock
from forensic_reader.main import create_app

LOCAL_USERS = b"Name,Admin\nbob,true\nalice,false\nbob,true\n"


@pytest.fixture
def client(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[TestClient]:
    inbox = tmp_path / "inbox"
    inbox.mkdir()
    (inbox / "dns_cache.csv").write_text("Entry,Data\nevil.example,10.0.0.66\n", encoding="utf-8")
    monkeypatch.setattr(router_search, "EXPORTS_FOLDER", tmp_path / "exports")
    with TestClient(create_app(inbox=inbox)) as c:
        yield c


def _upload(client: TestClient, name: str, content: bytes):
    return client.post("/api/upload", files=[("files", (name, content, "text/csv"))])


def test_inbox_is_loaded_at_startup(client: TestClient) -> None:
    health = client.get("/api/health").json()
    assert health["status"] == "ok"
    assert health["indexes"] == 1
    assert health["rows"] == 1

    listing = client.get("/api/indexes").json()
    assert listing["count"] == 1
    assert listing["indexes"][0]["name"] == "DNSCache"
    assert listing["indexes"][0]["columns"] == ["Entry", "Data"]


def test_upload_then_structured_query(client: TestClient) -> None:
    resp = _upload(client, "LocalUsers.csv", LOCAL_USERS)
    assert resp.status_code == 200
    assert resp.json()["files"] == [{"file_name": "LocalUsers.csv", "index": "LocalUsers", "rows": 3}]

    state = client.post("/api/query", json={"query": "index=localusers bob"}).json()
    assert state == {"query": "index=localusers bob", "page": 1, "page_size": 100}

    body = client.get("/api/results").json()
    assert body["total_results"] == 2
    assert body["index_count"] == 1
    assert body["columns"] == ["Name", "Admin"]
    assert [r["row"]["Name"] for r in body["results"]] == ["bob", "bob"]

    client.post("/api/query", json={"query": 'index=localusers name="bob"'})
    body = client.get("/api/results").json()
    assert body["total_results"] == 0
    assert body["message"] == "No results found"


def test_gzip_upload_and_undecodable_upload(client: TestClient) -> None:
    resp = _upload(client, "autorun.csv.gz", gzip.compress(b"Entry\nx\n"))
    assert resp.json()["files"][0]["index"] == "AutoRun"

    resp = _upload(client, "image.csv", b"\x89PNG\x00\x00")
    assert resp.status_code == 400
    assert "image.csv" in resp.json()["detail"]
    assert client.get("/api/health").json()["indexes"] == 2


def test_page_is_stored_verbatim_but_clamped_for_display(client: TestClient) -> None:
    state = client.post("/api/page", json={"page": 9}).json()
    assert state["page"] == 9

    body = client.get("/api/results").json()
    assert body["page"] == 1
    assert body["total_pages"] == 1
    assert len(body["results"]) == 1

    client.post("/api/query", json={"query": "evil"})
    assert client.post("/api/page", json={"page": 1}).json()["page"] == 1


def test_fields_remove_and_clear(client: TestClient) -> None:
    _upload(client, "LocalUsers.csv", LOCAL_USERS)

    fields = client.get("/api/indexes/LocalUsers/fields").json()["fields"]
    assert fields[0] == {"name": "Name", "top_values": [{"value": "bob", "count": 2}, {"value": "alice", "count": 1}]}
    assert client.get("/api/indexes/Nope/fields").status_code == 404

    assert client.delete("/api/indexes/Nope").json() == {"name": "Nope", "removed": False}
    assert client.delete("/api/indexes/LocalUsers").json() == {"name": "LocalUsers", "removed": True}

    client.post("/api/query", json={"query": "evil"})
    assert client.delete("/api/indexes").json() == {"status": "cleared"}
    assert client.get("/api/health").json()["indexes"] == 0
    body = client.get("/api/results").json()
    assert body["query"] == ""
    assert body["total_results"] == 0


def test_export_csv_and_xlsx(client: TestClient, tmp_path: Path) -> None:
    _upload(client, "LocalUsers.csv", LOCAL_USERS)
    client.post("/api/query", json={"query": "alice"})

    resp = client.get("/api/export")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/csv")
    assert "forensic-results-" in resp.headers["content-disposition"]
    assert resp.text == "_index,Name,Admin\nLocalUsers,alice,false"

    resp = client.get("/api/export", params={"format": "xlsx"})
    assert resp.status_code == 200
    assert resp.content[:2] == b"PK"
    assert not list((tmp_path / "exports").glob("*.xlsx"))

    assert client.get("/api/export", params={"format": "pdf"}).status_code == 400


def test_export_file_names_are_unique(client: TestClient) -> None:
    first = client.get("/api/export").headers["content-disposition"]
    second = client.get("/api/export").headers["content-disposition"]

    assert first != second


def test_requests_wait_for_the_store_lock(client: TestClient) -> None:
    responses = []
    worker = threading.Thread(target=lambda: responses.append(client.get("/api/results")))

    with store_lock:
        worker.start()
        worker.join(timeout=0.3)
        assert worker.is_alive()
        assert responses == []

    worker.join(timeout=10)
    assert responses[0].status_code == 200


def test_results_stay_consistent_during_uploads(client: TestClient) -> None:
    errors = []

    def upload_many() -> None:
        for n in range(40):
            try:
                resp = _upload(client, f"Artifact{n}.csv", b"Entry\nx\n")
            except RuntimeError as exc:
                errors.append(exc)
                return
            if resp.status_code != 200:
                errors.append(resp.status_code)

    uploader = threading.Thread(target=upload_many)
    uploader.start()
    while uploader.is_alive():
        resp = client.get("/api/results")
        if resp.status_code != 200:
            errors.append(resp.status_code)
    uploader.join()

    assert errors == []
    assert client.get("/api/health").json()["indexes"] == 41
