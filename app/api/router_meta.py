"""
Meta endpoints: health, filter options.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends

from app.data.store import DataStore
from app.analytics.metrics import filter_options
from app.api.dependencies import get_store
from app.api.response_models import FilterOptionsResponse, HealthResponse

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store)):
    return HealthResponse(
        status="ok",
        rows=store.row_count(),
        source=store.source_name,
        loadedAt=store.loaded_at.isoformat() if store.loaded_at else None,
    )


@router.get("/filter-options", response_model=FilterOptionsResponse)
def list_filter_options(store: DataStore = Depends(get_store)):
    """Distinct dropdown values from the unfiltered dataset."""
    return FilterOptionsResponse(**filter_options(store.all()))
