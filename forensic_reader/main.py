"""
Forensic Reader — FastAPI app factory with startup inbox loading.
"""
from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from forensic_reader.config import INBOX_FOLDER
from forensic_reader.data.loader import load_inbox
from forensic_reader.data.store import IndexStore
from forensic_reader.api.dependencies import set_store
from forensic_reader.api.router_meta import router as meta_router
from forensic_reader.api.router_indexes import router as indexes_router
from forensic_reader.api.router_search import router as search_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load whatever sits in the inbox at startup."""
    inbox: Path = app.state.inbox
    inbox.mkdir(parents=True, exist_ok=True)

    store = load_inbox(IndexStore(), inbox)
    set_store(store)

    if store.indexes:
        print(f"\nForensic Reader ready — {len(store.indexes)} indexes, {store.row_count():,} rows\n")
    else:
        print("\nForensic Reader ready — no indexes yet. Upload exports via /api/upload.\n")
    yield
    set_store(None)


def create_app(inbox: Path = INBOX_FOLDER) -> FastAPI:
    app = FastAPI(
        title="Forensic Reader API",
        description="Offline index-and-search over forensic artifact CSV exports",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.inbox = inbox

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(indexes_router)
    app.include_router(search_router)
    return app


app = create_app()
