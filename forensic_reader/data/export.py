"""
Canonical export of search results: `_index` column + the result columns.
"""
from __future__ import annotations

from typing import Mapping, Sequence

import pandas as pd

from forensic_reader.config import EXPORT_INDEX_COLUMN
from forensic_reader.data.parser import DELIMITER, QUOTE
from forensic_reader.data.schemas import CsvIndex, SearchResult

_NEEDS_QUOTING = (DELIMITER, QUOTE, "\n")


def escape_value(value: str) -> str:
    """Quote a value only if it holds a comma, a quote or a newline."""
    text = "" if value is None else str(value)
    if any(ch in text for ch in _NEEDS_QUOTING):
        return QUOTE + text.replace(QUOTE, QUOTE * 2) + QUOTE
    return text


def export_columns(
    results: Sequence[SearchResult],
    indexes: Mapping[str, CsvIndex] | None = None,
) -> list[str]:
    """Data columns for an export, without the leading `_index`.

    A single represented index contributes its own column list; otherwise
    the union of record keys in first-seen order.
    """
    names = list(dict.fromkeys(r.index for r in results))
    if len(names) == 1 and indexes and names[0] in indexes:
        return list(indexes[names[0]].columns)

    cols: dict[str, None] = {}
    for r in results:
        cols.update(dict.fromkeys(r.row))
    return list(cols)


def results_frame(
    results: Sequence[SearchResult],
    indexes: Mapping[str, CsvIndex] | None = None,
) -> pd.DataFrame:
    """Results as a string DataFrame; cells missing from a record are ""."""
    columns = export_columns(results, indexes)
    rows = [[r.index, *(r.row.get(c, "") for c in columns)] for r in results]
    return pd.DataFrame(rows, columns=[EXPORT_INDEX_COLUMN, *columns], dtype=object)


def export_csv(
    results: Sequence[SearchResult],
    indexes: Mapping[str, CsvIndex] | None = None,
) -> str:
    """Render results as delimited text. The header is always present."""
    df = results_frame(results, indexes)
    lines = [DELIMITER.join(escape_value(c) for c in df.columns)]
    for row in df.itertuples(index=False, name=None):
        lines.append(DELIMITER.join(escape_value(v) for v in row))
    return "\n".join(lines)
