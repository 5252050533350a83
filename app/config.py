"""
Sales Dashboard configuration: limits, column contract, file types, sentinels.
"""
import logging
import os
from decimal import Decimal

# ---------------------------------------------------------------------------
# Runtime: override with SALES_DASHBOARD_* env vars for deployment
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("SALES_DASHBOARD_LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [
    o.strip() for o in os.environ.get("SALES_DASHBOARD_CORS_ORIGINS", "*").split(",") if o.strip()
]

# ---------------------------------------------------------------------------
# Upload limits
# ---------------------------------------------------------------------------
MAX_UPLOAD_BYTES = int(float(os.environ.get("SALES_DASHBOARD_MAX_UPLOAD_MB", "10")) * 1024 * 1024)
UPLOAD_FIELD = "csvFile"

# Pre-upload structure check only looks at the head of the file
VALIDATE_PREFIX_BYTES = 1024

# ---------------------------------------------------------------------------
# Column contract with upstream exports (position matters, not header text)
# ---------------------------------------------------------------------------
EXPECTED_COLUMNS = [
    "item_id",
    "item_name",
    "manufacturer_id",
    "manufacturer_name",
    "city_id",
    "city_name",
    "category",
    "date",
    "qty_sold",
    "mrp",
]
EXPECTED_COLUMN_COUNT = len(EXPECTED_COLUMNS)

# ---------------------------------------------------------------------------
# Accepted file types
# ---------------------------------------------------------------------------
SPREADSHEET_EXTENSIONS = (".xlsx", ".xls")
ALLOWED_EXTENSIONS = (".csv",) + SPREADSHEET_EXTENSIONS
ALLOWED_MIME_TYPES = {
    "text/csv",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
}

# ---------------------------------------------------------------------------
# Money
# ---------------------------------------------------------------------------
MONEY_QUANTUM = Decimal("0.01")

# ---------------------------------------------------------------------------
# Filter sentinels sent by the dashboard dropdowns
# ---------------------------------------------------------------------------
ALL_CITIES = "All Cities"
ALL_MANUFACTURERS = "All Manufacturers"
ALL_CATEGORIES = "All Categories"
ALL_PRODUCTS = "All Products"

# ---------------------------------------------------------------------------
# Table view
# ---------------------------------------------------------------------------
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 500

# Visible table columns → export header labels
EXPORT_COLUMNS = [
    ("item_name", "Product"),
    ("city_name", "City"),
    ("manufacturer_name", "Manufacturer"),
    ("category", "Category"),
    ("date", "Date"),
    ("qty_sold", "Quantity"),
    ("mrp", "Revenue"),
]


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
