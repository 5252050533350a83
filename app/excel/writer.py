"""
ExcelWriter: builds the styled sales workbook sheet by sheet.
"""
from __future__ import annotations

import io

from openpyxl import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from app.excel.formatters import add_kpi_card, auto_column_width, format_data_cell, format_header_row
from app.excel.styles import SUBTITLE_FONT, TITLE_FONT

ColSpec = tuple[str, str, str]  # (record key, col_type, header label)

_SUMMED_TYPES = ("currency", "number")


class ExcelWriter:
    """Thin builder over an openpyxl Workbook."""

    def __init__(self) -> None:
        self.wb = Workbook()
        self._fresh = True

    def add_sheet(self, title: str) -> Worksheet:
        # A new Workbook already carries one empty sheet; use it first
        if self._fresh:
            self._fresh = False
            ws = self.wb.active
            ws.title = title
            return ws
        return self.wb.create_sheet(title=title)

    def write_title(self, ws: Worksheet, title: str, subtitle: str, span: int = 7) -> int:
        """Title and subtitle across ``span`` merged columns. Returns the next free row."""
        for row, text, font in ((1, title, TITLE_FONT), (2, subtitle, SUBTITLE_FONT)):
            ws.cell(row=row, column=1, value=text).font = font
            ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=span)
        return 4

    def write_kpi_row(self, ws: Worksheet, row: int, kpis: list[tuple], spacing: int = 2) -> int:
        """KPI cards from ``(value, label, format_type)`` tuples, left to right."""
        for i, (value, label, fmt) in enumerate(kpis):
            add_kpi_card(ws, row, 1 + i * spacing, value, label, fmt)
        return row + 3

    def write_table(
        self,
        ws: Worksheet,
        start_row: int,
        columns: list[ColSpec],
        rows: list[dict],
        freeze: bool = True,
        show_total: bool = False,
    ) -> int:
        """Header band, striped rows, and an optional TOTAL row summing numeric columns.

        Returns the row after the last one written.
        """
        format_header_row(ws, start_row, [label for _, _, label in columns])

        row = start_row
        for row_data in rows:
            row += 1
            for col, (key, col_type, _) in enumerate(columns, 1):
                format_data_cell(ws, row, col, row_data.get(key, ""), col_type)

        if show_total and rows:
            row += 1
            for col, (key, col_type, _) in enumerate(columns, 1):
                if col == 1:
                    value = "TOTAL"
                elif col_type in _SUMMED_TYPES:
                    value = sum(r.get(key) or 0 for r in rows)
                else:
                    value = ""
                format_data_cell(ws, row, col, value, col_type if col > 1 else "text", is_total=True)

        auto_column_width(ws)
        if freeze:
            ws.freeze_panes = ws.cell(row=start_row + 1, column=1)
        return row + 1

    def to_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.wb.save(buf)
        return buf.getvalue()
