"""
Header presence check, per-field coercion, row → SalesRecord normalization.
"""
from __future__ import annotations

import logging
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Iterable, Sequence

from app.config import EXPECTED_COLUMNS, MONEY_QUANTUM
from app.data.errors import StructureError, ValidationError
from app.data.schemas import NormalizedBatch, SalesRecord

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"^\s*([+-]?\d+)")
_DECIMAL_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

_ZERO_MONEY = Decimal("0").quantize(MONEY_QUANTUM)


# ---------------------------------------------------------------------------
# Header check
# ---------------------------------------------------------------------------

def missing_headers(headers: Sequence[str]) -> list[str]:
    """Expected column tokens that appear in no header (case-insensitive substring)."""
    lowered = [str(h).lower() for h in headers]
    return [col for col in EXPECTED_COLUMNS if not any(col in h for h in lowered)]


def check_headers(headers: Sequence[str]) -> None:
    """Reject the whole upload when any required column token is absent."""
    missing = missing_headers(headers)
    if missing:
        raise StructureError(
            f"File must contain the required columns: {', '.join(EXPECTED_COLUMNS)} "
            f"(missing: {', '.join(missing)})"
        )


# ---------------------------------------------------------------------------
# Field coercion: every parser has an explicit default
# ---------------------------------------------------------------------------

def parse_int(value: object, default: int = 0) -> int:
    """Leading-integer parse: "12abc" → 12, "3.7" → 3, "" → default."""
    if value is None:
        return default
    m = _INT_RE.match(str(value))
    return int(m.group(1)) if m else default


def parse_money(value: object, default: Decimal = _ZERO_MONEY) -> Decimal:
    """Leading-decimal parse quantized to cents. Never returns a float."""
    if value is None:
        return default
    m = _DECIMAL_RE.match(str(value))
    if not m:
        return default
    try:
        amount = Decimal(m.group(1))
    except InvalidOperation:
        return default
    if not amount.is_finite():
        return default
    try:
        return amount.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        # More digits than the decimal context can hold at cent precision
        return default


def parse_text(value: object) -> str:
    return "" if value is None else str(value)


# ---------------------------------------------------------------------------
# Row normalization
# ---------------------------------------------------------------------------

def normalize_row(headers: Sequence[str], cells: Sequence[object]) -> SalesRecord:
    """Map one raw row to a SalesRecord by fixed column position.

    Raises ValidationError when the cell count does not match the header count.
    The returned record has no id; the store assigns one on insert.
    """
    if len(cells) != len(headers):
        raise ValidationError(f"Expected {len(headers)} cells, found {len(cells)}")
    if len(cells) < len(EXPECTED_COLUMNS):
        raise ValidationError(f"Row has {len(cells)} cells, need {len(EXPECTED_COLUMNS)}")

    return SalesRecord(
        item_id=parse_int(cells[0]),
        item_name=parse_text(cells[1]),
        manufacturer_id=parse_int(cells[2]),
        manufacturer_name=parse_text(cells[3]),
        city_id=parse_int(cells[4]),
        city_name=parse_text(cells[5]),
        category=parse_text(cells[6]),
        date=parse_text(cells[7]),
        qty_sold=parse_int(cells[8]),
        mrp=parse_money(cells[9]),
    )


def normalize_rows(headers: Sequence[str], rows: Iterable[Sequence[object]]) -> NormalizedBatch:
    """Normalize every row, dropping (and counting) the malformed ones."""
    batch = NormalizedBatch()
    for line_no, cells in enumerate(rows, start=2):
        try:
            batch.records.append(normalize_row(headers, cells))
        except ValidationError as exc:
            batch.dropped += 1
            logger.debug("Skipping malformed row %d: %s", line_no, exc)
    return batch
