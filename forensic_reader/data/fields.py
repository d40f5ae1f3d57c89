"""
Field profiles — per-column top-value frequencies for the field sidebar.
"""
from __future__ import annotations

from typing import Sequence

import pandas as pd

from forensic_reader.config import TOP_VALUES_LIMIT
from forensic_reader.data.schemas import FieldInfo, FieldValue, Record


def top_values(values: pd.Series, limit: int = TOP_VALUES_LIMIT) -> list[FieldValue]:
    """Most frequent non-empty values, ties kept in first-seen order."""
    values = values[values != ""]
    if values.empty:
        return []
    counts = values.groupby(values, sort=False).size()
    counts = counts.sort_values(ascending=False, kind="stable").head(limit)
    return [FieldValue(value=str(v), count=int(n)) for v, n in counts.items()]


def extract_fields(
    columns: Sequence[str],
    records: Sequence[Record],
    limit: int = TOP_VALUES_LIMIT,
) -> list[FieldInfo]:
    """One FieldInfo per column, in column order. Recomputed on every call."""
    if not columns:
        return []
    df = pd.DataFrame.from_records(list(records), columns=list(columns))
    return [FieldInfo(name=col, top_values=top_values(df[col].astype(object), limit)) for col in columns]
