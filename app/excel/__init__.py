"""Excel styling, formatting, and export utilities."""
from .formatters import format_header_row, format_data_cell, auto_column_width, add_kpi_card
from .writer import ExcelWriter
from .export import sales_csv, sales_workbook, export_filename
