"""
Sales table exports: quoted CSV and a styled two-sheet workbook.
"""
from __future__ import annotations

import csv
import datetime as dt
from typing import Sequence

import pandas as pd

from app.config import EXPORT_COLUMNS
from app.data.schemas import Metrics, SalesRecord
from app.excel.writer import ColSpec, ExcelWriter

_COL_TYPES = {"qty_sold": "number", "mrp": "currency"}


def export_filename(extension: str, today: dt.date | None = None) -> str:
    today = today or dt.date.today()
    return f"sales-data-{today.isoformat()}.{extension}"


def _export_rows(records: Sequence[SalesRecord]) -> list[dict]:
    return [
        {key: getattr(r, key) for key, _ in EXPORT_COLUMNS}
        for r in records
    ]


def sales_csv(records: Sequence[SalesRecord]) -> str:
    """Visible table columns as CSV with every field quoted."""
    df = pd.DataFrame(
        [[getattr(r, key) for key, _ in EXPORT_COLUMNS] for r in records],
        columns=[label for _, label in EXPORT_COLUMNS],
    )
    if not df.empty:
        df["Revenue"] = [f"{r.mrp:.2f}" for r in records]
    return df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")


def sales_workbook(records: Sequence[SalesRecord], metrics: Metrics, filter_label: str = "All Data") -> bytes:
    """Summary KPIs on one sheet, the filtered rows with a total on another."""
    writer = ExcelWriter()

    summary = writer.add_sheet("Summary")
    row = writer.write_title(summary, "Sales Summary", f"{filter_label} | {len(records):,} rows")
    writer.write_kpi_row(summary, row, [
        (metrics.total_revenue, "Total Revenue", "currency"),
        (metrics.total_quantity, "Total Quantity", "number"),
        (metrics.top_product or "-", "Top Product", "text"),
        (metrics.top_city or "-", "Top City", "text"),
    ])

    sales = writer.add_sheet("Sales")
    columns: list[ColSpec] = [(key, _COL_TYPES.get(key, "text"), label) for key, label in EXPORT_COLUMNS]
    writer.write_table(sales, 1, columns, _export_rows(records), show_total=True)

    return writer.to_bytes()
