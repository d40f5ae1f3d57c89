"""
Meta endpoints: health, index listing.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from forensic_reader.data.store import IndexStore
from forensic_reader.api.dependencies import get_store, store_lock
from forensic_reader.api.response_models import HealthResponse, IndexListResponse, IndexSummary

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: IndexStore = Depends(get_store)):
    with store_lock:
        return HealthResponse(
            status="ok",
            indexes=len(store.indexes),
            rows=store.row_count(),
            revision=store.revision,
        )


@router.get("/indexes", response_model=IndexListResponse)
def list_indexes(store: IndexStore = Depends(get_store)):
    with store_lock:
        summaries = [
            IndexSummary(name=idx.name, file_name=idx.file_name, columns=list(idx.columns), rows=idx.row_count)
            for idx in store.indexes.values()
        ]
    return IndexListResponse(indexes=summaries, count=len(summaries))
