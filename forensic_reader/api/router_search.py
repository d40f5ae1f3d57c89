"""
Search endpoints: query/page state, paged results, CSV/Excel export.
"""
from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import FileResponse, Response
from starlette.background import BackgroundTask

from forensic_reader.config import EXPORTS_FOLDER, EXPORT_FILE_PREFIX
from forensic_reader.data.export import export_columns, export_csv
from forensic_reader.data.store import IndexStore
from forensic_reader.excel.writer import export_workbook
from forensic_reader.api.dependencies import get_store, store_lock
from forensic_reader.api.response_models import (
    PageRequest, QueryRequest, QueryStateResponse, ResultRow, ResultsResponse,
)

router = APIRouter(prefix="/api", tags=["search"])

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _state(store: IndexStore) -> QueryStateResponse:
    return QueryStateResponse(query=store.query, page=store.current_page, page_size=store.page_size)


@router.post("/query", response_model=QueryStateResponse)
def set_query(req: QueryRequest, store: IndexStore = Depends(get_store)):
    """Replace the query text (page goes back to 1)."""
    with store_lock:
        store.set_query(req.query)
        return _state(store)


@router.post("/page", response_model=QueryStateResponse)
def set_page(req: PageRequest, store: IndexStore = Depends(get_store)):
    """Move the page cursor. Stored as given; /results clamps when rendering."""
    with store_lock:
        store.set_page(req.page)
        return _state(store)


@router.get("/results", response_model=ResultsResponse)
def results(store: IndexStore = Depends(get_store)):
    """Current page of results for the current query."""
    with store_lock:
        found = store.search_results()
        total_pages = store.total_pages(found)
        page = min(max(store.current_page, 1), total_pages)
        summary = store.result_summary(found)
        rows = [ResultRow(index=r.index, row=r.row) for r in store.page_results(found, page)]
        return ResultsResponse(
            query=store.query,
            page=page,
            total_pages=total_pages,
            page_size=store.page_size,
            total_results=summary["results"],
            index_count=summary["indexes"],
            columns=export_columns(found, store.indexes),
            results=rows,
            message=None if found else "No results found",
        )


@router.get("/export")
def export_results(
    format: str = Query("csv", description="csv|xlsx"),
    store: IndexStore = Depends(get_store),
):
    """Download every result of the current query (not just the current page).

    The .xlsx is written under EXPORTS_FOLDER and deleted once it has been sent.
    """
    if format not in ("csv", "xlsx"):
        raise HTTPException(400, f"Unknown export format: {format}. Valid: ['csv', 'xlsx']")

    stamp = f"{datetime.now().strftime('%Y%m%d_%H%M%S')}-{uuid4().hex[:8]}"

    if format == "csv":
        with store_lock:
            content = export_csv(store.search_results(), store.indexes)
        filename = f"{EXPORT_FILE_PREFIX}-{stamp}.csv"
        return Response(
            content=content,
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )

    with store_lock:
        out = export_workbook(store.search_results(), EXPORTS_FOLDER / f"{EXPORT_FILE_PREFIX}-{stamp}.xlsx", store)
    return FileResponse(
        path=str(out),
        filename=out.name,
        media_type=XLSX_MEDIA_TYPE,
        background=BackgroundTask(out.unlink, missing_ok=True),
    )
