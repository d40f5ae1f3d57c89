"""
Query classification and evaluation across loaded indexes.

Three mutually exclusive modes:
  ""                      → every record of every index
  index=<name> [text]     → one index (name matched case-insensitively),
                            optionally narrowed by a substring
  anything else           → substring search over every index

Matching is plain case-insensitive containment against record values and
column names. There is no boolean composition and no fielded equality:
`user="bob"` is just the literal text `user="bob"`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping

from forensic_reader.data.schemas import CsvIndex, Record, SearchResult

_INDEX_FILTER_RE = re.compile(r"index=(\S+)\s*(.*)", re.IGNORECASE)


class QueryMode(str, Enum):
    ALL = "all"
    INDEX = "index"
    FREE_TEXT = "free_text"


@dataclass(frozen=True)
class ParsedQuery:
    mode: QueryMode
    needle: str = ""         # lower-cased substring; "" means unfiltered
    index_name: str = ""     # lower-cased target for QueryMode.INDEX


def classify_query(query: str) -> ParsedQuery:
    """Decide which mode a query string runs in. Never rejects input."""
    query = query.strip()
    if not query:
        return ParsedQuery(QueryMode.ALL)

    m = _INDEX_FILTER_RE.fullmatch(query)
    if m:
        return ParsedQuery(
            QueryMode.INDEX,
            needle=m.group(2).strip().lower(),
            index_name=m.group(1).lower(),
        )
    return ParsedQuery(QueryMode.FREE_TEXT, needle=query.lower())


def record_matches(record: Record, columns: Iterable[str], needle: str) -> bool:
    """True if any value or any column name contains the lower-cased needle."""
    return (
        any(needle in value.lower() for value in record.values())
        or any(needle in col.lower() for col in columns)
    )


def _scan(indexes: Iterable[CsvIndex], needle: str) -> list[SearchResult]:
    results: list[SearchResult] = []
    for idx in indexes:
        for row in idx.records:
            if not needle or record_matches(row, idx.columns, needle):
                results.append(SearchResult(index=idx.name, row=row))
    return results


def evaluate_query(query: str, indexes: Mapping[str, CsvIndex]) -> list[SearchResult]:
    """Run a query against the index map, keeping index and record order."""
    parsed = classify_query(query)
    if parsed.mode is QueryMode.ALL:
        return _scan(indexes.values(), "")

    if parsed.mode is QueryMode.INDEX:
        matched = [idx for idx in indexes.values() if idx.name.lower() == parsed.index_name]
        return _scan(matched, parsed.needle)

    return _scan(indexes.values(), parsed.needle)
