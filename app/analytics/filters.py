"""
Filter engine: narrows a record snapshot by a FilterSpec.

All predicates are AND-combined boolean masks over a DataFrame view of the
records; the result keeps input order. Bad filter values never raise: they
either disable their predicate or exclude records with unparseable dates.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Optional, Sequence

import pandas as pd
from pandas.errors import OutOfBoundsDatetime

from app.config import ALL_CATEGORIES, ALL_CITIES, ALL_MANUFACTURERS, ALL_PRODUCTS
from app.data.schemas import DateRange, FilterSpec, SalesRecord

_TEXT_COLUMNS = ["item_name", "city_name", "manufacturer_name", "category"]


# ---------------------------------------------------------------------------
# Date parsing
# ---------------------------------------------------------------------------

@lru_cache(maxsize=8192)
def parse_date(value: Optional[str]) -> Optional[pd.Timestamp]:
    """Parse a loosely formatted date string; None when it cannot be read.

    Accepts ISO (2025-09-10) and US month-first (9/10/2025) forms among others.
    Timezone-aware values are converted to naive UTC.
    """
    if value is None or not str(value).strip():
        return None
    try:
        ts = pd.to_datetime(str(value).strip(), errors="coerce", format="mixed", dayfirst=False)
    except (ValueError, TypeError, OverflowError):
        return None
    if ts is None or pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert(None)
    try:
        return ts.as_unit("ns")
    except (OutOfBoundsDatetime, OverflowError):
        # Outside the nanosecond range record_dates works in
        return None


def end_of_day(ts: pd.Timestamp) -> pd.Timestamp:
    """Last representable instant of ``ts``'s calendar day."""
    try:
        return ts.normalize() + pd.Timedelta(days=1) - pd.Timedelta(1, unit="ns")
    except (OutOfBoundsDatetime, OverflowError):
        return pd.Timestamp.max


def record_dates(records: Sequence[SalesRecord]) -> pd.Series:
    """Parsed dates aligned with ``records``; NaT where unparseable."""
    return pd.Series([parse_date(r.date) for r in records], dtype="datetime64[ns]")


# ---------------------------------------------------------------------------
# Masks
# ---------------------------------------------------------------------------

def _records_frame(records: Sequence[SalesRecord]) -> pd.DataFrame:
    return pd.DataFrame(
        {col: [getattr(r, col) for r in records] for col in _TEXT_COLUMNS},
        dtype=object,
    )


def _window_mask(
    dates: pd.Series,
    start: Optional[pd.Timestamp],
    end: Optional[pd.Timestamp],
) -> pd.Series:
    """Inclusive window; unparseable dates never match."""
    mask = dates.notna()
    if start is not None:
        mask &= dates >= start
    if end is not None:
        mask &= dates <= end
    return mask


def _preset_mask(spec: FilterSpec, dates: pd.Series) -> Optional[pd.Series]:
    """Rolling last7/last30 window or a complete custom window."""
    if spec.date_range in (DateRange.LAST7, DateRange.LAST30):
        ref = dates.dropna().max() if dates.notna().any() else None
        if ref is None:
            return pd.Series(False, index=dates.index)
        start = ref - pd.Timedelta(days=spec.date_range.days - 1)
        return _window_mask(dates, start, ref)

    if spec.date_range == DateRange.CUSTOM:
        start = parse_date(spec.date_from)
        end = parse_date(spec.date_to)
        if start is None or end is None:
            return None
        return _window_mask(dates, start, end_of_day(end))

    return None


def _explicit_bounds_mask(spec: FilterSpec, dates: pd.Series) -> Optional[pd.Series]:
    """dateFrom/dateTo honored even without dateRange=custom; open on a bad bound."""
    if not (spec.date_from or spec.date_to):
        return None
    start = parse_date(spec.date_from)
    end = parse_date(spec.date_to)
    return _window_mask(dates, start, end_of_day(end) if end is not None else None)


def _active(value: Optional[str], sentinel: str) -> bool:
    return bool(value) and value != sentinel


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_mask(records: Sequence[SalesRecord], spec: FilterSpec) -> pd.Series:
    """Boolean mask aligned with ``records`` for every predicate in ``spec``."""
    frame = _records_frame(records)
    mask = pd.Series(True, index=frame.index)

    if spec.date_range is not None or spec.date_from or spec.date_to:
        dates = record_dates(records)
        for date_mask in (_preset_mask(spec, dates), _explicit_bounds_mask(spec, dates)):
            if date_mask is not None:
                mask &= date_mask

    if _active(spec.city, ALL_CITIES):
        mask &= frame["city_name"] == spec.city
    if _active(spec.manufacturer, ALL_MANUFACTURERS):
        mask &= frame["manufacturer_name"] == spec.manufacturer
    if _active(spec.category, ALL_CATEGORIES):
        mask &= frame["category"] == spec.category

    if _active(spec.product, ALL_PRODUCTS):
        mask &= frame["item_name"].str.contains(spec.product, regex=False)

    if spec.search:
        needle = spec.search.lower()
        hits = pd.Series(False, index=frame.index)
        for col in _TEXT_COLUMNS:
            hits |= frame[col].str.lower().str.contains(needle, regex=False)
        mask &= hits

    return mask


def apply_filters(records: Sequence[SalesRecord], spec: FilterSpec | None) -> list[SalesRecord]:
    """Order-preserving subset of ``records`` matching every criterion."""
    if not records:
        return []
    if spec is None or spec.is_empty:
        return list(records)
    mask = build_mask(records, spec)
    return [r for r, keep in zip(records, mask.tolist()) if keep]
