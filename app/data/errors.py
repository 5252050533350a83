"""
Ingest error taxonomy. Every error carries a machine-readable ``kind``.
"""
from __future__ import annotations


class IngestError(ValueError):
    """Base class for upload failures that must leave the store untouched."""

    kind = "ingest"
    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DecodeError(IngestError):
    """File unreadable, too short, or the wrong shape."""

    kind = "decode"


class StructureError(IngestError):
    """Required header tokens are missing."""

    kind = "structure"


class ValidationError(IngestError):
    """A single row could not be normalized. Dropped by the normalizer."""

    kind = "validation"


class EmptyDatasetError(IngestError):
    """No row survived normalization."""

    kind = "empty"


class UnsupportedFileError(IngestError):
    kind = "unsupported_file"


class UploadTooLargeError(IngestError):
    kind = "too_large"
    status_code = 413


class MissingFileError(IngestError):
    kind = "missing_file"
