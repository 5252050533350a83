from __future__ import annotations

from decimal import Decimal

import pytest

from app.config import EXPECTED_COLUMNS
from app.data.errors import StructureError, ValidationError
from app.data.normalize import (
    check_headers,
    missing_headers,
    normalize_row,
    normalize_rows,
    parse_int,
    parse_money,
)

from conftest import HEADER, KETTLE_ROW

HEADERS = HEADER.split(",")


@pytest.mark.parametrize("raw,expected", [
    ("12", 12),
    ("12abc", 12),
    ("3.7", 3),
    ("  -5", -5),
    ("+8", 8),
    ("abc", 0),
    ("", 0),
    (None, 0),
])
def test_parse_int(raw, expected):
    assert parse_int(raw) == expected


@pytest.mark.parametrize("raw,expected", [
    ("99", "99.00"),
    ("12.345", "12.35"),
    ("12.344", "12.34"),
    (".5", "0.50"),
    ("1e2", "100.00"),
    ("45.5rs", "45.50"),
    ("1e30", "0.00"),
    ("1" * 29, "0.00"),
    ("abc", "0.00"),
    ("", "0.00"),
    (None, "0.00"),
])
def test_parse_money(raw, expected):
    value = parse_money(raw)
    assert isinstance(value, Decimal)
    assert str(value) == expected


def test_normalize_row_by_position():
    record = normalize_row(HEADERS, KETTLE_ROW.split(","))
    assert record.item_id == 10167070
    assert record.item_name == "Kettle Studio Tabasco Sauce Flavour Potato Chips"
    assert record.manufacturer_id == 66
    assert record.manufacturer_name == "Indo Nissin"
    assert record.city_id == 334
    assert record.city_name == "Bhavnagar"
    assert record.category == "Organic & Premium"
    assert record.date == "9/10/2025"
    assert record.qty_sold == 1
    assert record.mrp == Decimal("99.00")
    assert record.id == ""


def test_normalize_row_defaults_for_blank_cells():
    record = normalize_row(HEADERS, [""] * 10)
    assert (record.item_id, record.qty_sold, record.mrp) == (0, 0, Decimal("0.00"))
    assert record.item_name == record.city_name == record.date == ""


def test_normalize_row_rejects_cell_count_mismatch():
    with pytest.raises(ValidationError):
        normalize_row(HEADERS, KETTLE_ROW.split(",")[:9])


def test_normalize_rows_drops_malformed():
    good = KETTLE_ROW.split(",")
    rows = [good, good[:9], good, good + ["extra"], good, good]
    batch = normalize_rows(HEADERS, rows)
    assert len(batch.records) == 4
    assert batch.dropped == 2


def test_check_headers_accepts_contract():
    check_headers(HEADERS)


def test_check_headers_is_case_insensitive_substring():
    decorated = [f"Sales {h.upper()} (raw)" for h in HEADERS]
    check_headers(decorated)


def test_check_headers_reports_missing():
    headers = [h for h in HEADERS if h != "mrp"]
    assert missing_headers(headers) == ["mrp"]
    with pytest.raises(StructureError, match="mrp"):
        check_headers(headers)


def test_every_contract_column_required():
    assert missing_headers([]) == EXPECTED_COLUMNS
