from __future__ import annotations

import itertools
import warnings

import pandas as pd
import pytest

from app.analytics.filters import apply_filters, end_of_day, parse_date
from app.data.schemas import DateRange, FilterSpec


def names(records):
    return [r.item_name for r in records]


def test_no_filters_returns_everything(sample_records):
    assert apply_filters(sample_records, FilterSpec()) == sample_records
    assert apply_filters(sample_records, None) == sample_records


def test_empty_input():
    assert apply_filters([], FilterSpec(city="Pune")) == []


@pytest.mark.parametrize("value,expected", [
    ("2025-09-10", pd.Timestamp(2025, 9, 10)),
    ("9/10/2025", pd.Timestamp(2025, 9, 10)),
    ("2025-09-10 18:30", pd.Timestamp(2025, 9, 10, 18, 30)),
    ("not a date", None),
    ("", None),
    (None, None),
])
def test_parse_date(value, expected):
    assert parse_date(value) == expected


def test_end_of_day():
    assert end_of_day(pd.Timestamp(2025, 9, 8, 10)) == pd.Timestamp("2025-09-08 23:59:59.999999999")


class TestDateWindows:
    def test_last7_relative_to_latest_record(self, sample_records):
        result = apply_filters(sample_records, FilterSpec(date_range=DateRange.LAST7))
        assert names(result) == ["Tabasco Chips", "Salted Chips"]

    def test_last30(self, sample_records):
        result = apply_filters(sample_records, FilterSpec(date_range=DateRange.LAST30))
        assert names(result) == ["Tabasco Chips", "Salted Chips", "Mango Juice", "Orange Juice"]

    def test_rolling_window_boundary_is_inclusive(self, make_record):
        records = [make_record(f"D{day}", date=f"2025-09-{day:02d}") for day in range(1, 11)]
        result = apply_filters(records, FilterSpec(date_range=DateRange.LAST7))
        assert names(result) == [f"D{day}" for day in range(4, 11)]

    def test_rolling_window_without_parseable_dates(self, make_record):
        records = [make_record(date="soon"), make_record(date="")]
        assert apply_filters(records, FilterSpec(date_range=DateRange.LAST30)) == []

    def test_custom_window(self, sample_records):
        spec = FilterSpec(date_range=DateRange.CUSTOM, date_from="2025-09-01", date_to="2025-09-08")
        assert names(apply_filters(sample_records, spec)) == ["Salted Chips", "Mango Juice"]

    def test_date_to_includes_whole_day(self, make_record):
        records = [
            make_record("Morning", date="2025-09-08 00:00"),
            make_record("Evening", date="2025-09-08 18:30"),
            make_record("Next day", date="2025-09-09"),
        ]
        spec = FilterSpec(date_range=DateRange.CUSTOM, date_from="2025-09-01", date_to="2025-09-08")
        assert names(apply_filters(records, spec)) == ["Morning", "Evening"]
        assert names(apply_filters(records, FilterSpec(date_to="2025-09-08"))) == ["Morning", "Evening"]

    def test_bounds_apply_without_custom_range(self, sample_records):
        result = apply_filters(sample_records, FilterSpec(date_from="2025-09-05"))
        assert names(result) == ["Tabasco Chips", "Salted Chips"]

    def test_bounds_compound_with_preset(self, sample_records):
        spec = FilterSpec(date_range=DateRange.LAST30, date_to="2025-09-01")
        assert names(apply_filters(sample_records, spec)) == ["Mango Juice", "Orange Juice"]

    def test_custom_with_one_bound_uses_that_bound(self, sample_records):
        spec = FilterSpec(date_range=DateRange.CUSTOM, date_from="2025-09-05")
        assert names(apply_filters(sample_records, spec)) == ["Tabasco Chips", "Salted Chips"]

    def test_unparseable_bound_is_open_but_bad_dates_excluded(self, sample_records):
        result = apply_filters(sample_records, FilterSpec(date_from="garbage"))
        assert "Dark Chocolate" not in names(result)
        assert len(result) == 4

    def test_unparseable_dates_kept_without_date_filter(self, sample_records):
        assert "Dark Chocolate" in names(apply_filters(sample_records, FilterSpec(city="Surat")))
        assert len(apply_filters(sample_records, FilterSpec(date_range=DateRange.ALL))) == 5


class TestFieldFilters:
    def test_city_exact(self, sample_records):
        assert names(apply_filters(sample_records, FilterSpec(city="Bhavnagar"))) == ["Tabasco Chips", "Mango Juice"]
        assert apply_filters(sample_records, FilterSpec(city="bhavnagar")) == []

    def test_manufacturer_and_category(self, sample_records):
        spec = FilterSpec(manufacturer="Frooti", category="Beverages")
        assert names(apply_filters(sample_records, spec)) == ["Mango Juice", "Orange Juice"]

    @pytest.mark.parametrize("spec", [
        FilterSpec(city="All Cities"),
        FilterSpec(manufacturer="All Manufacturers"),
        FilterSpec(category="All Categories"),
        FilterSpec(product="All Products"),
    ])
    def test_sentinels_disable_filter(self, sample_records, spec):
        assert apply_filters(sample_records, spec) == sample_records

    def test_product_is_substring_match(self, sample_records):
        assert names(apply_filters(sample_records, FilterSpec(product="Chips"))) == ["Tabasco Chips", "Salted Chips"]

    def test_product_match_is_case_sensitive(self, sample_records):
        assert apply_filters(sample_records, FilterSpec(product="chips")) == []

    @pytest.mark.parametrize("query,expected", [
        ("JUICE", ["Mango Juice", "Orange Juice"]),
        ("frooti", ["Mango Juice", "Orange Juice"]),
        ("sweets", ["Dark Chocolate"]),
        ("surat", ["Salted Chips", "Dark Chocolate"]),
        ("nothing-matches", []),
    ])
    def test_search_any_text_field(self, sample_records, query, expected):
        assert names(apply_filters(sample_records, FilterSpec(search=query))) == expected


def test_filters_compose_as_and(sample_records):
    cities = ["Bhavnagar", "Surat", "Pune", "Nowhere"]
    categories = ["Snacks", "Beverages", "Sweets", "Organic & Premium"]
    for city, category in itertools.product(cities, categories):
        chained = apply_filters(apply_filters(sample_records, FilterSpec(city=city)), FilterSpec(category=category))
        combined = apply_filters(sample_records, FilterSpec(city=city, category=category))
        assert chained == combined


def test_from_params_ignores_blank_and_unknown_values():
    spec = FilterSpec.from_params({"dateRange": "bogus", "city": "  ", "search": "   ", "dateTo": " 2025-09-08 "})
    assert spec.date_range is None
    assert spec.city is None
    assert spec.search is None
    assert spec.date_to == "2025-09-08"
    assert FilterSpec.from_params({}).is_empty


def test_from_params_keeps_substring_whitespace(sample_records):
    spec = FilterSpec.from_params({"product": " Chips", "search": "juice "})
    assert spec.product == " Chips"
    assert spec.search == "juice "
    assert names(apply_filters(sample_records, FilterSpec.from_params({"product": " Chips"}))) == [
        "Tabasco Chips", "Salted Chips",
    ]
    assert apply_filters(sample_records, FilterSpec.from_params({"product": "Chips "})) == []


def test_dates_beyond_nanosecond_range_are_unparseable(make_record):
    assert parse_date("2300-01-01") is None
    records = [make_record("Now", date="2025-09-10"), make_record("Far", date="2300-01-01")]
    assert names(apply_filters(records, FilterSpec(date_range=DateRange.LAST7))) == ["Now"]
    assert names(apply_filters(records, FilterSpec(date_from="2025-01-01"))) == ["Now"]
    assert names(apply_filters(records, FilterSpec(date_from="2300-01-01"))) == ["Now"]


def test_day_first_string_parses_quietly():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        assert parse_date("31/12/2024") == pd.Timestamp(2024, 12, 31)
