from __future__ import annotations

from decimal import Decimal

import pytest

from app.analytics.metrics import compute_metrics, distinct_values, filter_options
from app.data.schemas import Metrics


def test_three_row_scenario(make_record):
    records = [
        make_record("P1", "CityA", qty_sold=50, mrp="500.00"),
        make_record("P2", "CityB", qty_sold=30, mrp="300.00"),
        make_record("P1", "CityA", qty_sold=20, mrp="200.00"),
    ]
    m = compute_metrics(records)
    assert m.total_quantity == 100
    assert m.total_revenue == Decimal("1000.00")
    assert (m.top_product, m.top_product_quantity) == ("P1", 70)
    assert (m.top_city, m.top_city_revenue) == ("CityA", Decimal("700.00"))


def test_empty_subset_is_all_zero():
    m = compute_metrics([])
    assert m == Metrics()
    assert m.to_dict() == {
        "totalRevenue": 0.0,
        "totalQuantity": 0,
        "topProduct": "",
        "topProductQuantity": 0,
        "topCity": "",
        "topCityRevenue": 0.0,
    }


def test_top_product_tie_goes_to_first_seen(make_record):
    records = [
        make_record("P2", "CityB", qty_sold=5, mrp="10.00"),
        make_record("P1", "CityA", qty_sold=5, mrp="10.00"),
    ]
    for _ in range(3):
        m = compute_metrics(records)
        assert m.top_product == "P2"
        assert m.top_city == "CityB"


def test_later_strictly_greater_total_wins(make_record):
    records = [
        make_record("P1", qty_sold=5),
        make_record("P2", qty_sold=4),
        make_record("P2", qty_sold=2),
    ]
    assert compute_metrics(records).top_product == "P2"


def test_zero_quantities_leave_top_product_blank(make_record):
    m = compute_metrics([make_record("P1", qty_sold=0, mrp="0.00")])
    assert m.top_product == ""
    assert m.top_product_quantity == 0
    assert m.top_city == ""


def test_money_sums_exactly(make_record):
    records = [make_record(mrp="0.10")] * 10_000
    m = compute_metrics(records)
    assert m.total_revenue == Decimal("1000.00")
    assert m.top_city_revenue == Decimal("1000.00")


def test_distinct_values_in_first_seen_order(sample_records):
    assert distinct_values(sample_records, "city_name") == ["Bhavnagar", "Surat", "Pune"]
    assert distinct_values(sample_records, "manufacturer_name") == ["Indo Nissin", "Lays", "Frooti", "Amul"]


def test_distinct_values_rejects_non_categorical_field(sample_records):
    with pytest.raises(ValueError):
        distinct_values(sample_records, "qty_sold")


def test_filter_options(sample_records):
    options = filter_options(sample_records)
    assert set(options) == {"cities", "manufacturers", "categories", "products"}
    assert options["categories"] == ["Organic & Premium", "Snacks", "Beverages", "Sweets"]
    assert len(options["products"]) == 5
    assert filter_options([]) == {"cities": [], "manufacturers": [], "categories": [], "products": []}
