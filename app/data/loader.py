"""
Upload ingest: decode → header check → normalize → replace the dataset.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from app.config import ALLOWED_EXTENSIONS, ALLOWED_MIME_TYPES, MAX_UPLOAD_BYTES
from app.data.decoder import decode
from app.data.errors import EmptyDatasetError, UnsupportedFileError, UploadTooLargeError
from app.data.normalize import check_headers, normalize_rows
from app.data.store import DataStore

logger = logging.getLogger(__name__)


@dataclass
class IngestResult:
    count: int
    dropped: int
    filename: str | None = None

    @property
    def message(self) -> str:
        return f"Successfully uploaded {self.count} records"


def check_file_type(filename: str | None, mime_type: str | None) -> None:
    """Accept by extension or by mime type, like the browser picker does."""
    by_ext = (filename or "").lower().endswith(ALLOWED_EXTENSIONS)
    by_mime = (mime_type or "").lower() in ALLOWED_MIME_TYPES
    if not (by_ext or by_mime):
        raise UnsupportedFileError("Only CSV or Excel files are allowed")


def check_size(content: bytes, limit: int | None = None) -> None:
    limit = MAX_UPLOAD_BYTES if limit is None else limit
    if len(content) > limit:
        raise UploadTooLargeError(f"File exceeds the upload limit of {limit:,} bytes")


def ingest_upload(
    store: DataStore,
    content: bytes,
    filename: str | None = None,
    mime_type: str | None = None,
) -> IngestResult:
    """Parse an uploaded file and replace the store's dataset.

    Any IngestError is raised before the store is touched, so a failed
    upload leaves the previous dataset in place.
    """
    check_file_type(filename, mime_type)
    check_size(content)

    table = decode(content, filename, mime_type)
    check_headers(table.headers)

    batch = normalize_rows(table.headers, table.rows)
    if not batch.records:
        raise EmptyDatasetError(
            f"No valid records found in uploaded file ({len(table.rows)} rows, {batch.dropped} malformed)"
        )

    inserted = store.replace_all(batch.records, source_name=filename)
    if batch.dropped:
        logger.info("Upload %s: dropped %d malformed rows", filename, batch.dropped)
    return IngestResult(count=len(inserted), dropped=batch.dropped, filename=filename)
