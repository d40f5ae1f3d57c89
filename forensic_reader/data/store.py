"""
IndexStore — In-memory index map with query text and pagination cursor.

Single writer, no locking. Every read (results, field profiles, index names)
is derived from the current state on demand and never cached.
"""
from __future__ import annotations

import math

from forensic_reader.config import PAGE_SIZE
from forensic_reader.data.fields import extract_fields
from forensic_reader.data.normalize import normalize_index_name
from forensic_reader.data.parser import parse_text
from forensic_reader.data.query import evaluate_query
from forensic_reader.data.schemas import CsvIndex, FieldInfo, SearchResult


class IndexStore:
    """Loaded indexes plus the current query and page."""

    def __init__(self, page_size: int = PAGE_SIZE) -> None:
        self.indexes: dict[str, CsvIndex] = {}
        self.query: str = ""
        self.current_page: int = 1
        self.page_size = page_size
        # Bumped on every index-map change; a result cache would key on
        # (query, revision).
        self.revision = 0

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def index_name_for(self, file_name: str) -> str:
        """Key that ingesting file_name would use.

        Names differing only in case ("a" / "A") share one key, the one that
        was loaded first, since `index=` queries cannot tell them apart.
        """
        name = normalize_index_name(file_name)
        if name in self.indexes:
            return name
        lower = name.lower()
        return next((n for n in self.indexes if n.lower() == lower), name)

    def ingest(self, file_name: str, content: str) -> None:
        """Parse content into an index named after file_name.

        An existing index with the same canonical name is replaced outright.
        Re-ingesting identical content leaves the revision unchanged.
        """
        name = self.index_name_for(file_name)
        table = parse_text(content)
        idx = CsvIndex(
            name=name,
            columns=table.columns,
            records=table.records,
            file_name=file_name,
        )
        if self.indexes.get(name) == idx:
            return
        self.indexes[name] = idx
        self.revision += 1

    def remove(self, name: str) -> None:
        if self.indexes.pop(name, None) is not None:
            self.revision += 1

    def clear_all(self) -> None:
        self.indexes = {}
        self.query = ""
        self.current_page = 1
        self.revision += 1

    def set_query(self, text: str) -> None:
        """Replace the query; the page cursor goes back to 1."""
        self.query = text
        self.current_page = 1

    def set_page(self, page: int) -> None:
        """Store the page as given. Clamping is up to whoever renders it."""
        self.current_page = page

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def search_results(self) -> list[SearchResult]:
        return evaluate_query(self.query, self.indexes)

    def fields_for_index(self, name: str) -> list[FieldInfo]:
        idx = self.indexes.get(name)
        if idx is None:
            return []
        return extract_fields(idx.columns, idx.records)

    def active_indexes(self) -> list[str]:
        return list(self.indexes)

    def row_count(self) -> int:
        return sum(idx.row_count for idx in self.indexes.values())

    # ------------------------------------------------------------------
    # Paging
    # ------------------------------------------------------------------

    def total_pages(self, results: list[SearchResult]) -> int:
        """Page count for a result list, never below 1."""
        return max(1, math.ceil(len(results) / self.page_size))

    def page_results(self, results: list[SearchResult], page: int | None = None) -> list[SearchResult]:
        """Slice of results for a page (the current page by default), unclamped."""
        page = self.current_page if page is None else page
        if page < 1:
            return []
        start = (page - 1) * self.page_size
        return results[start:start + self.page_size]

    def result_summary(self, results: list[SearchResult]) -> dict:
        """Result and distinct-index counts for the stats bar."""
        return {
            "results": len(results),
            "indexes": len({r.index for r in results}),
        }
