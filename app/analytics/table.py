"""
Table view: sorting and pagination for the sales data table.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Sequence

from app.config import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from app.data.schemas import SalesRecord

SORTABLE_FIELDS = {
    "item_name", "city_name", "manufacturer_name", "category",
    "date", "qty_sold", "mrp", "item_id", "city_id", "manufacturer_id",
}


@dataclass
class Page:
    rows: list[SalesRecord] = field(default_factory=list)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE
    total: int = 0

    @property
    def total_pages(self) -> int:
        return max(1, math.ceil(self.total / self.page_size))

    def to_dict(self) -> dict:
        return {
            "rows": [r.to_dict() for r in self.rows],
            "page": self.page,
            "pageSize": self.page_size,
            "total": self.total,
            "totalPages": self.total_pages,
        }


def sort_records(
    records: Sequence[SalesRecord],
    sort_field: str | None,
    direction: str = "asc",
) -> list[SalesRecord]:
    """Stable sort by a visible column. Text compares case-insensitively.

    Unknown or missing fields leave the input order untouched.
    """
    if not sort_field or sort_field not in SORTABLE_FIELDS:
        return list(records)

    def _key(r: SalesRecord):
        value = getattr(r, sort_field)
        return value.lower() if isinstance(value, str) else value

    return sorted(records, key=_key, reverse=(direction or "").lower() == "desc")


def paginate(records: Sequence[SalesRecord], page: int = 1, page_size: int = DEFAULT_PAGE_SIZE) -> Page:
    """Slice one page; page and size are clamped to valid ranges."""
    page_size = max(1, min(MAX_PAGE_SIZE, page_size or DEFAULT_PAGE_SIZE))
    total = len(records)
    last_page = max(1, math.ceil(total / page_size))
    page = max(1, min(last_page, page or 1))

    start = (page - 1) * page_size
    return Page(rows=list(records[start:start + page_size]), page=page, page_size=page_size, total=total)
