from __future__ import annotations

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from app.data.schemas import SalesRecord
from app.main import create_app

HEADER = "item_id,item_name,manufacturer_id,manufacturer_name,city_id,city_name,category,date,qty_sold,mrp"

KETTLE_ROW = (
    "10167070,Kettle Studio Tabasco Sauce Flavour Potato Chips,66,Indo Nissin,"
    "334,Bhavnagar,Organic & Premium,9/10/2025,1,99"
)


def _csv_bytes(*rows: str, header: str = HEADER) -> bytes:
    return "\n".join([header, *rows]).encode("utf-8")


def _record(
    item_name: str = "P1",
    city_name: str = "CityA",
    qty_sold: int = 1,
    mrp: str = "10.00",
    date: str = "2025-09-10",
    manufacturer_name: str = "M1",
    category: str = "Snacks",
    **extra,
) -> SalesRecord:
    return SalesRecord(
        item_name=item_name,
        city_name=city_name,
        qty_sold=qty_sold,
        mrp=Decimal(mrp),
        date=date,
        manufacturer_name=manufacturer_name,
        category=category,
        **extra,
    )


@pytest.fixture
def csv_bytes():
    return _csv_bytes


@pytest.fixture
def make_record():
    return _record


@pytest.fixture
def sample_records():
    return [
        _record("Tabasco Chips", "Bhavnagar", 3, "99.00", "9/10/2025", "Indo Nissin", "Organic & Premium"),
        _record("Salted Chips", "Surat", 2, "40.00", "2025-09-08", "Lays", "Snacks"),
        _record("Mango Juice", "Bhavnagar", 5, "120.50", "2025-09-01", "Frooti", "Beverages"),
        _record("Orange Juice", "Pune", 1, "60.00", "2025-08-15", "Frooti", "Beverages"),
        _record("Dark Chocolate", "Surat", 4, "250.00", "not a date", "Amul", "Sweets"),
    ]


@pytest.fixture
def client():
    app = create_app()
    with TestClient(app) as c:
        yield c


def upload(client: TestClient, content: bytes, filename: str = "sales.csv", mime: str = "text/csv"):
    return client.post("/api/upload", files={"csvFile": (filename, content, mime)})


@pytest.fixture
def do_upload():
    return upload
