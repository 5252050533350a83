"""
Aggregator: summary metrics and distinct values over a record subset.

Money is summed as Decimal end to end; floats only appear at the JSON edge.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Callable, Hashable, Iterable, Sequence, TypeVar

from app.data.schemas import Metrics, SalesRecord

N = TypeVar("N", int, Decimal)

DISTINCT_FIELDS = {
    "cities": "city_name",
    "manufacturers": "manufacturer_name",
    "categories": "category",
    "products": "item_name",
}


def group_sum(
    records: Iterable[SalesRecord],
    key: Callable[[SalesRecord], Hashable],
    value: Callable[[SalesRecord], N],
) -> dict:
    """Sum ``value`` per ``key``. Dict order is order of first appearance."""
    totals: dict = {}
    for r in records:
        k = key(r)
        totals[k] = totals.get(k, 0) + value(r)
    return totals


def top_entry(totals: dict, zero: N) -> tuple[str, N]:
    """Entry with the largest total; ties keep the earliest.

    Seeded with ("", zero), so only a strictly positive total can win.
    """
    best_name, best_value = "", zero
    for name, total in totals.items():
        if total > best_value:
            best_name, best_value = name, total
    return best_name, best_value


def compute_metrics(records: Sequence[SalesRecord]) -> Metrics:
    """Total revenue/quantity plus top product (by qty) and top city (by revenue)."""
    if not records:
        return Metrics()

    total_revenue = sum((r.mrp for r in records), Decimal("0"))
    total_quantity = sum(r.qty_sold for r in records)

    product_qty = group_sum(records, lambda r: r.item_name, lambda r: r.qty_sold)
    city_revenue = group_sum(records, lambda r: r.city_name, lambda r: r.mrp)

    top_product, top_product_qty = top_entry(product_qty, 0)
    top_city, top_city_revenue = top_entry(city_revenue, Decimal("0"))

    return Metrics(
        total_revenue=total_revenue,
        total_quantity=total_quantity,
        top_product=top_product,
        top_product_quantity=top_product_qty,
        top_city=top_city,
        top_city_revenue=top_city_revenue,
    )


def distinct_values(records: Iterable[SalesRecord], field: str) -> list[str]:
    """Unique values of a categorical field in order of first appearance."""
    if field not in DISTINCT_FIELDS.values():
        raise ValueError(f"Not a categorical field: {field}")
    return list(dict.fromkeys(getattr(r, field) for r in records))


def filter_options(records: Sequence[SalesRecord]) -> dict[str, list[str]]:
    """Dropdown values for every categorical filter."""
    return {name: distinct_values(records, field) for name, field in DISTINCT_FIELDS.items()}
