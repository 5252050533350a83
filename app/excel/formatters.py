"""
Cell-level formatting for the sales workbook.
"""
from __future__ import annotations

from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from app.excel import styles

# Money is rupees, matching the MRP column of the source exports
NUMBER_FORMATS = {
    "currency": '"₹"#,##0.00',
    "number": "#,##0",
}


def format_header_row(ws: Worksheet, row_num: int, labels: list[str]) -> None:
    """Write column labels styled as a header band."""
    for col, label in enumerate(labels, 1):
        cell = ws.cell(row=row_num, column=col, value=label)
        cell.font = styles.HEADER_FONT
        cell.fill = styles.HEADER_FILL
        cell.border = styles.HEADER_BORDER
        cell.alignment = styles.CENTER


def format_data_cell(
    ws: Worksheet,
    row_num: int,
    col_num: int,
    value,
    col_type: str = "text",
    is_total: bool = False,
) -> None:
    cell = ws.cell(row=row_num, column=col_num, value=value)
    numeric = col_type in NUMBER_FORMATS
    if numeric:
        cell.number_format = NUMBER_FORMATS[col_type]
    cell.alignment = styles.RIGHT if numeric else styles.LEFT

    if is_total:
        cell.font, cell.border, cell.fill = styles.TOTAL_FONT, styles.TOTAL_BORDER, styles.TOTAL_FILL
        return
    cell.font, cell.border = styles.CELL_FONT, styles.CELL_BORDER
    if row_num % 2 == 0:
        cell.fill = styles.STRIPE_FILL


def auto_column_width(ws: Worksheet, min_width: int = 10, max_width: int = 48) -> None:
    """Size each column to its longest value, within bounds."""
    widths: dict[int, int] = {}
    for row in ws.iter_rows():
        for cell in row:
            if cell.value is not None and hasattr(cell, "column"):
                widths[cell.column] = max(widths.get(cell.column, 0), len(str(cell.value)))
    for col, width in widths.items():
        ws.column_dimensions[get_column_letter(col)].width = min(max(width + 2, min_width), max_width)


def add_kpi_card(ws: Worksheet, row: int, col: int, value, label: str, format_type: str = "currency") -> None:
    """Big value with its caption underneath."""
    value_cell = ws.cell(row=row, column=col, value=value)
    value_cell.font = styles.KPI_VALUE_FONT
    value_cell.alignment = styles.CENTER
    if format_type in NUMBER_FORMATS:
        value_cell.number_format = NUMBER_FORMATS[format_type]

    label_cell = ws.cell(row=row + 1, column=col, value=label)
    label_cell.font = styles.KPI_LABEL_FONT
    label_cell.alignment = styles.CENTER
