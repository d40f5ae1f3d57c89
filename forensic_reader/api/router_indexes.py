"""
Index endpoints: upload, remove, clear, field profiles.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool

from forensic_reader.data.loader import UndecodableContentError, decode_content
from forensic_reader.data.store import IndexStore
from forensic_reader.api.dependencies import get_store, store_lock
from forensic_reader.api.response_models import (
    FieldInfoModel, FieldValueModel, FieldsResponse,
    RemoveResponse, UploadedFile, UploadResponse,
)

router = APIRouter(prefix="/api", tags=["indexes"])


def _ingest_all(store: IndexStore, decoded: list[tuple[str, str]]) -> list[UploadedFile]:
    saved = []
    with store_lock:
        for file_name, text in decoded:
            store.ingest(file_name, text)
            name = store.index_name_for(file_name)
            saved.append(UploadedFile(file_name=file_name, index=name, rows=store.indexes[name].row_count))
    return saved


@router.post("/upload", response_model=UploadResponse)
async def upload_files(files: list[UploadFile] = File(...), store: IndexStore = Depends(get_store)):
    """Ingest one or more exports. Any text file is accepted; .gz is unpacked.

    Every file is decoded before any is ingested, so a rejected upload leaves
    the loaded indexes untouched.
    """
    decoded: list[tuple[str, str]] = []
    for f in files:
        if not f.filename:
            raise HTTPException(400, "Missing filename")
        try:
            decoded.append(decode_content(await f.read(), f.filename))
        except UndecodableContentError as exc:
            raise HTTPException(400, f"Cannot read '{exc.file_name}' as text: {exc.reason}")

    saved = await run_in_threadpool(_ingest_all, store, decoded)

    return UploadResponse(status="uploaded", count=len(saved), files=saved)


@router.delete("/indexes/{name}", response_model=RemoveResponse)
def remove_index(name: str, store: IndexStore = Depends(get_store)):
    """Drop one index. Unknown names are a no-op."""
    with store_lock:
        removed = name in store.indexes
        store.remove(name)
    return RemoveResponse(name=name, removed=removed)


@router.delete("/indexes")
def clear_indexes(store: IndexStore = Depends(get_store)):
    """Drop every index and reset the query and page."""
    with store_lock:
        store.clear_all()
    return {"status": "cleared"}


@router.get("/indexes/{name}/fields", response_model=FieldsResponse)
def index_fields(name: str, store: IndexStore = Depends(get_store)):
    with store_lock:
        if name not in store.indexes:
            raise HTTPException(404, f"Index not found: {name}")
        profiles = store.fields_for_index(name)
    fields = [
        FieldInfoModel(
            name=info.name,
            top_values=[FieldValueModel(value=fv.value, count=fv.count) for fv in info.top_values],
        )
        for info in profiles
    ]
    return FieldsResponse(index=name, fields=fields)
