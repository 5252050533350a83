"""Data ingestion, normalization, and the in-memory dataset store."""
from .decoder import decode, validate_structure
from .loader import ingest_upload, IngestResult
from .store import DataStore
from .schemas import SalesRecord, FilterSpec, DateRange, Metrics
from .normalize import check_headers, normalize_row, normalize_rows, parse_int, parse_money
