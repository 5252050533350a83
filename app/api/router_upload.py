"""
Upload endpoints: replace the dataset from a CSV/Excel file, pre-check structure.
"""
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile
from starlette.concurrency import run_in_threadpool

from app.config import MAX_UPLOAD_BYTES, UPLOAD_FIELD
from app.data.decoder import validate_structure
from app.data.errors import MissingFileError
from app.data.loader import check_file_type, check_size, ingest_upload
from app.data.store import DataStore
from app.api.dependencies import get_store
from app.api.response_models import ErrorResponse, UploadResponse, ValidateResponse

router = APIRouter(prefix="/api", tags=["upload"])
logger = logging.getLogger(__name__)

_ERRORS = {400: {"model": ErrorResponse}, 413: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}


async def _read_capped(upload: Optional[UploadFile]) -> bytes:
    """Read at most one byte past the ceiling so oversize files fail fast."""
    if upload is None or not upload.filename:
        raise MissingFileError("No file uploaded")
    check_file_type(upload.filename, upload.content_type)
    content = await upload.read(MAX_UPLOAD_BYTES + 1)
    check_size(content)
    return content


@router.post("/upload", response_model=UploadResponse, responses=_ERRORS)
async def upload_sales(
    csvFile: Optional[UploadFile] = File(None, alias=UPLOAD_FIELD),
    store: DataStore = Depends(get_store),
):
    """Parse an uploaded sales file and replace the current dataset with it."""
    content = await _read_capped(csvFile)
    # Decoding is CPU-bound; keep it off the event loop
    result = await run_in_threadpool(ingest_upload, store, content, csvFile.filename, csvFile.content_type)
    logger.info("Upload %s: %d records stored, %d dropped", result.filename, result.count, result.dropped)
    return UploadResponse(message=result.message, count=result.count)


@router.post("/upload/validate", response_model=ValidateResponse, responses=_ERRORS)
async def validate_upload(csvFile: Optional[UploadFile] = File(None, alias=UPLOAD_FIELD)):
    """Check the head of a file before uploading it (column count, data rows)."""
    content = await _read_capped(csvFile)
    return ValidateResponse(valid=validate_structure(content, csvFile.filename, csvFile.content_type))
