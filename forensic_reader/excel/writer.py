"""
ExcelWriter — helpers for building styled result workbooks, and the
search-results workbook export built on them.
"""
from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pandas as pd
from openpyxl import Workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from forensic_reader.config import EXPORT_INDEX_COLUMN
from forensic_reader.data.export import results_frame
from forensic_reader.data.schemas import SearchResult
from forensic_reader.data.store import IndexStore
from forensic_reader.excel.styles import TITLE_FONT, SUBTITLE_FONT
from forensic_reader.excel.formatters import (
    format_header_row,
    format_data_cell,
    auto_column_width,
    write_text_cell,
)


ColSpec = tuple[str, str, str]  # (key, col_type, label)


class ExcelWriter:
    """Fluent builder for styled Excel workbooks."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._first_sheet = True

    # ------------------------------------------------------------------
    # Sheet management
    # ------------------------------------------------------------------

    def add_sheet(self, title: str) -> Worksheet:
        """Create a new worksheet (re-uses the default sheet for the first call)."""
        if self._first_sheet:
            ws = self.wb.active
            ws.title = title
            self._first_sheet = False
        else:
            ws = self.wb.create_sheet(title=title)
        return ws

    # ------------------------------------------------------------------
    # Title block
    # ------------------------------------------------------------------

    def write_title(self, ws: Worksheet, title: str, subtitle: str, merge_cols: int = 6) -> int:
        """Write title + subtitle rows. Returns next available row."""
        merge_cols = max(merge_cols, 1)
        write_text_cell(ws, 1, 1, title)
        ws.cell(row=1, column=1).font = TITLE_FONT
        write_text_cell(ws, 2, 1, subtitle)
        ws.cell(row=2, column=1).font = SUBTITLE_FONT
        if merge_cols > 1:
            ws.merge_cells(start_row=1, start_column=1, end_row=1, end_column=merge_cols)
            ws.merge_cells(start_row=2, start_column=1, end_row=2, end_column=merge_cols)
        return 4

    # ------------------------------------------------------------------
    # Data tables
    # ------------------------------------------------------------------

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        data: list[dict] | pd.DataFrame,
        freeze: bool = True,
    ) -> int:
        """Write a full table with headers + data rows.

        Returns the row number after the last data row.
        """
        for col_num, (_, _, label) in enumerate(columns, 1):
            write_text_cell(ws, start_row, col_num, label)
        format_header_row(ws, start_row, len(columns))

        if isinstance(data, pd.DataFrame):
            rows = data.itertuples(index=False, name=None)
        else:
            rows = (tuple(d.get(key, "") for key, _, _ in columns) for d in data)

        row = start_row + 1
        for values in rows:
            for col_num, ((_, col_type, _), val) in enumerate(zip(columns, values), 1):
                format_data_cell(ws, row, col_num, val, col_type)
            row += 1

        auto_column_width(ws)
        if freeze:
            ws.freeze_panes = f"{get_column_letter(2)}{start_row + 1}"
        return row

    # ------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------

    def save(self, path: str | Path) -> Path:
        """Save the workbook to disk."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        self.wb.save(path)
        return path


# ---------------------------------------------------------------------------
# Search-results workbook
# ---------------------------------------------------------------------------

def export_workbook(results: Sequence[SearchResult], path: str | Path, store: IndexStore) -> Path:
    """Write results plus field profiles of every represented index to .xlsx.

    "Results" mirrors the CSV export layout; "Fields" lists the top values
    per column of each index that appears in the results.
    """
    writer = ExcelWriter()
    df = results_frame(results, store.indexes)
    summary = store.result_summary(list(results))

    ws = writer.add_sheet("Results")
    query = store.query.strip() or "(all records)"
    subtitle = f"Query: {query}  |  {summary['results']:,} results from {summary['indexes']} index(es)"
    row = writer.write_title(ws, "Forensic Reader — Search Results", subtitle, merge_cols=len(df.columns))
    specs = [(EXPORT_INDEX_COLUMN, "index", EXPORT_INDEX_COLUMN)]
    specs += [(c, "text", c) for c in df.columns[1:]]
    writer.write_table(ws, row, specs, df)

    field_rows = []
    for name in dict.fromkeys(r.index for r in results):
        for info in store.fields_for_index(name):
            for fv in info.top_values:
                field_rows.append({"index": name, "field": info.name, "value": fv.value, "count": fv.count})

    ws = writer.add_sheet("Fields")
    row = writer.write_title(ws, "Field Profiles", "Top values per field (empty values excluded)", merge_cols=4)
    writer.write_table(
        ws,
        row,
        [("index", "index", "Index"), ("field", "text", "Field"), ("value", "text", "Value"), ("count", "number", "Count")],
        field_rows,
    )
    return writer.save(path)
