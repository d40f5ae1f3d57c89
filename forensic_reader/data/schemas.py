"""
Index, field-profile and search-result schemas.
"""
from __future__ import annotations

from dataclasses import dataclass, field

Record = dict[str, str]


@dataclass(frozen=True)
class ParsedTable:
    """Header + records produced by the delimited-text parser."""
    columns: tuple[str, ...] = ()
    records: tuple[Record, ...] = ()


@dataclass(frozen=True)
class CsvIndex:
    """One ingested file, queried as a unit.

    Never mutated after ingestion; re-ingesting the same name swaps in a new
    instance.
    """
    name: str
    columns: tuple[str, ...]
    records: tuple[Record, ...]
    file_name: str

    @property
    def row_count(self) -> int:
        return len(self.records)


@dataclass(frozen=True)
class FieldValue:
    value: str
    count: int


@dataclass(frozen=True)
class FieldInfo:
    """Top-value frequency profile for one column."""
    name: str
    top_values: list[FieldValue] = field(default_factory=list)


@dataclass(frozen=True)
class SearchResult:
    index: str
    row: Record          # shared with the owning CsvIndex, never copied
