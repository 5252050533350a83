"""
Sales table endpoints: filtered rows, paginated/sorted page, export, clear.
"""
from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, Response

from app.config import DEFAULT_PAGE_SIZE
from app.data.schemas import FilterSpec
from app.data.store import DataStore
from app.analytics.filters import apply_filters
from app.analytics.metrics import compute_metrics
from app.analytics.table import paginate, sort_records
from app.api.dependencies import get_store, parse_filters
from app.api.response_models import MessageResponse, SalesPageResponse, SalesRecordResponse
from app.excel.export import export_filename, sales_csv, sales_workbook

router = APIRouter(prefix="/api", tags=["sales"])

_XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@router.get("/sales", response_model=list[SalesRecordResponse])
def list_sales(
    store: DataStore = Depends(get_store),
    filters: FilterSpec = Depends(parse_filters),
):
    """Every record matching the filters, in dataset order."""
    rows = apply_filters(store.all(), filters)
    return JSONResponse(content=[r.to_dict() for r in rows])


@router.get("/sales/page", response_model=SalesPageResponse)
def sales_page(
    page: int = Query(1, ge=1),
    page_size: int = Query(DEFAULT_PAGE_SIZE, alias="pageSize", ge=1),
    sort_field: Optional[str] = Query(None, alias="sortField"),
    sort_dir: Literal["asc", "desc"] = Query("asc", alias="sortDir"),
    store: DataStore = Depends(get_store),
    filters: FilterSpec = Depends(parse_filters),
):
    """One sorted page of the filtered table."""
    rows = sort_records(apply_filters(store.all(), filters), sort_field, sort_dir)
    return JSONResponse(content=paginate(rows, page, page_size).to_dict())


@router.get("/sales/export")
def export_sales(
    fmt: Literal["csv", "xlsx"] = Query("csv", alias="format"),
    sort_field: Optional[str] = Query(None, alias="sortField"),
    sort_dir: Literal["asc", "desc"] = Query("asc", alias="sortDir"),
    store: DataStore = Depends(get_store),
    filters: FilterSpec = Depends(parse_filters),
):
    """Download the filtered table as CSV or a styled workbook."""
    rows = sort_records(apply_filters(store.all(), filters), sort_field, sort_dir)
    filename = export_filename(fmt)
    headers = {"Content-Disposition": f'attachment; filename="{filename}"'}

    if fmt == "xlsx":
        content = sales_workbook(rows, compute_metrics(rows), filters.label)
        return Response(content=content, media_type=_XLSX_MIME, headers=headers)
    return Response(content=sales_csv(rows), media_type="text/csv", headers=headers)


@router.delete("/sales", response_model=MessageResponse)
def clear_sales(store: DataStore = Depends(get_store)):
    store.clear()
    return MessageResponse(message="All sales data cleared successfully")
