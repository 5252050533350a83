"""
DataStore: In-memory holder for the current sales dataset.

Loaded on upload, queried on every request. The dataset is an immutable tuple
swapped under a lock, so a reader always sees one whole generation.
Swapping to a database later only changes this class.
"""
from __future__ import annotations

import datetime as dt
import logging
import threading
import uuid
from typing import Iterable, Optional

from app.data.schemas import SalesRecord

logger = logging.getLogger(__name__)


class DataStore:
    """Single-dataset record store with replace/insert/clear semantics."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: tuple[SalesRecord, ...] = ()
        self.source_name: Optional[str] = None
        self.loaded_at: Optional[dt.datetime] = None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    @staticmethod
    def _stamp(records: Iterable[SalesRecord]) -> list[SalesRecord]:
        return [r.with_id(uuid.uuid4().hex) for r in records]

    def replace_all(self, records: Iterable[SalesRecord], source_name: str | None = None) -> list[SalesRecord]:
        """Discard the current dataset and install ``records`` with fresh ids."""
        stamped = self._stamp(records)
        with self._lock:
            self._records = tuple(stamped)
            self.source_name = source_name
            self.loaded_at = dt.datetime.now(dt.timezone.utc)
        logger.info("Dataset replaced: %d rows from %s", len(stamped), source_name or "<unknown>")
        return stamped

    def insert(self, records: Iterable[SalesRecord]) -> list[SalesRecord]:
        """Append records without clearing."""
        stamped = self._stamp(records)
        with self._lock:
            self._records = self._records + tuple(stamped)
            self.loaded_at = dt.datetime.now(dt.timezone.utc)
        return stamped

    def clear(self) -> None:
        with self._lock:
            self._records = ()
            self.source_name = None
            self.loaded_at = None
        logger.info("Dataset cleared")

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def all(self) -> tuple[SalesRecord, ...]:
        """Point-in-time snapshot of every stored record."""
        with self._lock:
            return self._records

    def row_count(self) -> int:
        return len(self.all())

    @property
    def is_empty(self) -> bool:
        return not self.all()
