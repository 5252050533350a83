"""
Chart breakdowns: revenue trend, city/product performance, manufacturer share.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Sequence

import pandas as pd

from app.analytics.common import pct_of_total
from app.analytics.filters import parse_date
from app.analytics.metrics import group_sum
from app.data.schemas import SalesRecord

TREND_RANGES = {"all": None, "7days": 7, "30days": 30}


def revenue_trend(records: Sequence[SalesRecord], trend_range: str = "all") -> list[dict]:
    """Revenue per date string, oldest first.

    Unparseable dates sort last and are dropped when a rolling range is asked for.
    The rolling window ends at the latest date in the trend.
    """
    by_date = group_sum(records, lambda r: r.date, lambda r: r.mrp)
    points = [(date, parse_date(date), revenue) for date, revenue in by_date.items()]
    points.sort(key=lambda p: (p[1] is None, p[1] if p[1] is not None else pd.Timestamp.min))

    days = TREND_RANGES.get(trend_range)
    if days is not None:
        dated = [p for p in points if p[1] is not None]
        if dated:
            last = dated[-1][1]
            start = last - pd.Timedelta(days=days - 1)
            points = [p for p in dated if start <= p[1] <= last]
        else:
            points = []

    return [{"date": date, "revenue": float(revenue)} for date, _, revenue in points]


def _revenue_quantity(records: Sequence[SalesRecord], attr: str, label: str) -> list[dict]:
    revenue = group_sum(records, lambda r: getattr(r, attr), lambda r: r.mrp)
    quantity = group_sum(records, lambda r: getattr(r, attr), lambda r: r.qty_sold)
    rows = [
        {label: name, "revenue": float(rev), "quantity": quantity[name]}
        for name, rev in sorted(revenue.items(), key=lambda kv: kv[1], reverse=True)
    ]
    return rows


def city_breakdown(records: Sequence[SalesRecord]) -> list[dict]:
    """Revenue and quantity per city, highest revenue first."""
    return _revenue_quantity(records, "city_name", "city")


def product_breakdown(records: Sequence[SalesRecord], limit: int | None = None) -> list[dict]:
    """Revenue and quantity per product, highest revenue first."""
    rows = _revenue_quantity(records, "item_name", "product")
    return rows[:limit] if limit else rows


def manufacturer_share(records: Sequence[SalesRecord]) -> list[dict]:
    """Revenue per manufacturer with its percent of total revenue."""
    revenue = group_sum(records, lambda r: r.manufacturer_name, lambda r: r.mrp)
    total = sum(revenue.values(), Decimal("0"))
    return [
        {
            "name": name,
            "value": float(rev),
            "percentage": round(pct_of_total(float(rev), float(total)), 1),
        }
        for name, rev in revenue.items()
    ]


def chart_data(records: Sequence[SalesRecord], trend_range: str = "all") -> dict:
    """Everything the charts section renders, in one payload."""
    return {
        "revenueTrend": revenue_trend(records, trend_range),
        "cityBreakdown": city_breakdown(records),
        "productBreakdown": product_breakdown(records),
        "manufacturerShare": manufacturer_share(records),
    }
