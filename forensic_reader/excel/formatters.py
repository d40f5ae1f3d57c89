"""
Reusable worksheet cell/row formatting helpers.
"""
from __future__ import annotations

from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from forensic_reader.excel.styles import (
    HEADER_FONT, HEADER_FILL, HEADER_BORDER,
    DATA_FONT, INDEX_FONT,
    THIN_BORDER, ALTERNATE_FILL, INDEX_FILL,
    CENTER, LEFT, RIGHT,
)


# ---------------------------------------------------------------------------
# Plain text cells
# ---------------------------------------------------------------------------

def write_text_cell(ws: Worksheet, row_num: int, col_num: int, value) -> None:
    """Write value as a literal string, never a formula or number.

    Characters openpyxl refuses (control codes) are dropped.
    """
    cell = ws.cell(row=row_num, column=col_num)
    cell.value = ILLEGAL_CHARACTERS_RE.sub("", "" if value is None else str(value))
    cell.data_type = "s"


# ---------------------------------------------------------------------------
# Header row
# ---------------------------------------------------------------------------

def format_header_row(ws: Worksheet, row_num: int, num_cols: int) -> None:
    """Apply header styling to an entire row."""
    for col in range(1, num_cols + 1):
        cell = ws.cell(row=row_num, column=col)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = CENTER
        cell.border = HEADER_BORDER


# ---------------------------------------------------------------------------
# Data cell
# ---------------------------------------------------------------------------

def format_data_cell(
    ws: Worksheet,
    row_num: int,
    col_num: int,
    value,
    col_type: str = "text",
) -> None:
    """Write and format a single data cell.

    col_type: "index" (index badge), "number" (right-aligned count), or "text".
    Text is always written as a string so values like "0012" survive.
    """
    cell = ws.cell(row=row_num, column=col_num)
    cell.border = THIN_BORDER

    if col_type == "number":
        cell.value = value
        cell.font = DATA_FONT
        cell.alignment = RIGHT
        cell.number_format = "#,##0"
    else:
        write_text_cell(ws, row_num, col_num, value)
        cell.alignment = LEFT
        cell.font = INDEX_FONT if col_type == "index" else DATA_FONT

    if col_type == "index":
        cell.fill = INDEX_FILL
    elif row_num % 2 == 0:
        cell.fill = ALTERNATE_FILL


# ---------------------------------------------------------------------------
# Auto column width
# ---------------------------------------------------------------------------

def auto_column_width(ws: Worksheet, min_width: int = 10, max_width: int = 60) -> None:
    """Auto-fit column widths based on content length."""
    for column in ws.columns:
        max_length = 0
        column_letter = get_column_letter(column[0].column)
        for cell in column:
            if cell.value is not None:
                max_length = max(max_length, len(str(cell.value)))
        ws.column_dimensions[column_letter].width = min(max(max_length + 2, min_width), max_width)
