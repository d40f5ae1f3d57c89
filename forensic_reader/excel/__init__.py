"""Excel styling, formatting, and workbook export."""
from .formatters import format_header_row, format_data_cell, auto_column_width, write_text_cell
from .writer import ExcelWriter, export_workbook
