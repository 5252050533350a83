"""
Pydantic response schemas for the API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    rows: int
    source: Optional[str] = None
    loadedAt: Optional[str] = None


class UploadResponse(BaseModel):
    message: str
    count: int


class ValidateResponse(BaseModel):
    valid: bool


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
    kind: str


class MetricsResponse(BaseModel):
    totalRevenue: float
    totalQuantity: int
    topProduct: str
    topProductQuantity: int
    topCity: str
    topCityRevenue: float


class FilterOptionsResponse(BaseModel):
    cities: list[str]
    manufacturers: list[str]
    categories: list[str]
    products: list[str]


class SalesRecordResponse(BaseModel):
    id: str
    item_id: int
    item_name: str
    manufacturer_id: int
    manufacturer_name: str
    city_id: int
    city_name: str
    category: str
    date: str
    qty_sold: int
    mrp: str


class SalesPageResponse(BaseModel):
    rows: list[SalesRecordResponse]
    page: int
    pageSize: int
    total: int
    totalPages: int
