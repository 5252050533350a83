"""
Record, filter, and metrics schemas shared by ingest and analytics.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from decimal import Decimal
from enum import Enum
from typing import Optional


class DateRange(str, Enum):
    ALL = "all"
    LAST7 = "last7"
    LAST30 = "last30"
    CUSTOM = "custom"

    @property
    def days(self) -> Optional[int]:
        """Window length for the rolling presets."""
        return {DateRange.LAST7: 7, DateRange.LAST30: 30}.get(self)


@dataclass(frozen=True)
class SalesRecord:
    """One normalized sales row. ``id`` is empty until the store assigns it."""
    item_id: int = 0
    item_name: str = ""
    manufacturer_id: int = 0
    manufacturer_name: str = ""
    city_id: int = 0
    city_name: str = ""
    category: str = ""
    date: str = ""                      # source text, parsed at query time
    qty_sold: int = 0
    mrp: Decimal = Decimal("0.00")      # fixed 2-place amount
    id: str = ""

    def with_id(self, record_id: str) -> "SalesRecord":
        return replace(self, id=record_id)

    def to_dict(self) -> dict:
        """JSON-ready dict; money goes out as a fixed-precision string."""
        d = asdict(self)
        d["mrp"] = f"{self.mrp:.2f}"
        return {"id": d.pop("id"), **d}


@dataclass
class FilterSpec:
    """Optional query criteria narrowing the dataset. All None = everything."""
    date_range: Optional[DateRange] = None
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    city: Optional[str] = None
    manufacturer: Optional[str] = None
    category: Optional[str] = None
    product: Optional[str] = None
    search: Optional[str] = None

    @classmethod
    def from_params(cls, params: dict) -> "FilterSpec":
        """Build from loosely-typed params. Blank strings and unknown ranges are dropped."""
        def _clean(key: str) -> Optional[str]:
            value = params.get(key)
            if value is None:
                return None
            value = str(value).strip()
            return value or None

        def _raw(key: str) -> Optional[str]:
            # Substring matchers keep surrounding whitespace
            value = params.get(key)
            return str(value) if _clean(key) else None

        raw_range = _clean("dateRange") or _clean("date_range")
        try:
            date_range = DateRange(raw_range) if raw_range else None
        except ValueError:
            date_range = None

        return cls(
            date_range=date_range,
            date_from=_clean("dateFrom") or _clean("date_from"),
            date_to=_clean("dateTo") or _clean("date_to"),
            city=_clean("city"),
            manufacturer=_clean("manufacturer"),
            category=_clean("category"),
            product=_raw("product"),
            search=_raw("search"),
        )

    @property
    def is_empty(self) -> bool:
        return all(v is None for v in asdict(self).values())

    @property
    def label(self) -> str:
        """Human-readable summary for export subtitles."""
        parts = []
        if self.date_range == DateRange.LAST7:
            parts.append("Last 7 days")
        elif self.date_range == DateRange.LAST30:
            parts.append("Last 30 days")
        if self.date_from or self.date_to:
            parts.append(f"{self.date_from or '?'} to {self.date_to or '?'}")
        for value in (self.city, self.manufacturer, self.category, self.product):
            if value:
                parts.append(value)
        if self.search:
            parts.append(f'search "{self.search}"')
        return ", ".join(parts) if parts else "All Data"


@dataclass
class Metrics:
    """Summary statistics over a dataset view."""
    total_revenue: Decimal = Decimal("0")
    total_quantity: int = 0
    top_product: str = ""
    top_product_quantity: int = 0
    top_city: str = ""
    top_city_revenue: Decimal = Decimal("0")

    def to_dict(self) -> dict:
        return {
            "totalRevenue": float(self.total_revenue),
            "totalQuantity": self.total_quantity,
            "topProduct": self.top_product,
            "topProductQuantity": self.top_product_quantity,
            "topCity": self.top_city,
            "topCityRevenue": float(self.top_city_revenue),
        }


@dataclass
class NormalizedBatch:
    """Output of row normalization: surviving records plus the drop count."""
    records: list[SalesRecord] = field(default_factory=list)
    dropped: int = 0


@dataclass
class DecodedTable:
    headers: list[str]
    rows: list[list[str]]
