"""
FastAPI dependencies: DataStore singleton, filter parsing.
"""
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Query

from app.data.store import DataStore
from app.data.schemas import FilterSpec

# ---------------------------------------------------------------------------
# Global store singleton (set during startup)
# ---------------------------------------------------------------------------
_store: DataStore | None = None


def set_store(store: DataStore | None) -> None:
    global _store
    _store = store


def get_store() -> DataStore:
    if _store is None:
        raise HTTPException(503, "Server not initialized yet")
    return _store


# ---------------------------------------------------------------------------
# Filter parsing from query params
# ---------------------------------------------------------------------------

def parse_filters(
    date_range: Optional[str] = Query(None, alias="dateRange", description="all|last7|last30|custom"),
    date_from: Optional[str] = Query(None, alias="dateFrom", description="Start date, e.g. 2025-09-01"),
    date_to: Optional[str] = Query(None, alias="dateTo", description="End date, inclusive of the whole day"),
    city: Optional[str] = Query(None),
    manufacturer: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    product: Optional[str] = Query(None, description="Substring of the product name"),
    search: Optional[str] = Query(None, description="Case-insensitive text search"),
) -> FilterSpec:
    """Parse filter query parameters. Unknown or blank values are ignored, never rejected."""
    return FilterSpec.from_params({
        "date_range": date_range,
        "date_from": date_from,
        "date_to": date_to,
        "city": city,
        "manufacturer": manufacturer,
        "category": category,
        "product": product,
        "search": search,
    })
