"""
Dashboard endpoints: summary metrics and chart breakdowns.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from app.data.schemas import FilterSpec
from app.data.store import DataStore
from app.analytics.charts import chart_data
from app.analytics.common import sanitize_for_json
from app.analytics.filters import apply_filters
from app.analytics.metrics import compute_metrics
from app.api.dependencies import get_store, parse_filters
from app.api.response_models import MetricsResponse

router = APIRouter(prefix="/api", tags=["dashboard"])


def _safe_json(data: dict) -> JSONResponse:
    return JSONResponse(content=sanitize_for_json(data))


@router.get("/metrics", response_model=MetricsResponse)
def metrics(
    store: DataStore = Depends(get_store),
    filters: FilterSpec = Depends(parse_filters),
):
    """Total revenue and quantity, top product and top city."""
    return compute_metrics(apply_filters(store.all(), filters)).to_dict()


@router.get("/charts")
def charts(
    trend_range: str = Query("all", alias="trendRange", description="all|7days|30days"),
    store: DataStore = Depends(get_store),
    filters: FilterSpec = Depends(parse_filters),
):
    """Revenue trend, city/product performance, and manufacturer share."""
    return _safe_json(chart_data(apply_filters(store.all(), filters), trend_range))
