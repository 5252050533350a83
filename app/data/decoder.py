"""
Tabular decoding: uploaded CSV / Excel bytes → header list + raw string rows.
"""
from __future__ import annotations

import io
import logging

import pandas as pd

from app.config import EXPECTED_COLUMN_COUNT, SPREADSHEET_EXTENSIONS, VALIDATE_PREFIX_BYTES
from app.data.errors import DecodeError, UnsupportedFileError
from app.data.schemas import DecodedTable

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Format detection
# ---------------------------------------------------------------------------

def is_spreadsheet(filename: str | None, mime_type: str | None) -> bool:
    """True when the extension or mime type names an Excel workbook."""
    name = (filename or "").lower()
    mime = (mime_type or "").lower()
    if name.endswith(SPREADSHEET_EXTENSIONS):
        return True
    return "spreadsheet" in mime or mime == "application/vnd.ms-excel"


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

def _split_line(line: str) -> list[str]:
    # Naive comma split: quoted commas are not supported
    return [cell.strip().replace('"', "") for cell in line.split(",")]


def _text_lines(content: bytes, errors: str = "strict") -> list[str]:
    try:
        text = content.decode("utf-8", errors=errors)
    except UnicodeDecodeError as exc:
        raise DecodeError(f"File is not valid UTF-8 text: {exc.reason}") from exc
    text = text.lstrip("\ufeff").strip()
    return text.split("\n") if text else []


def decode_text(content: bytes) -> DecodedTable:
    """Split comma-delimited text into headers + rows."""
    lines = _text_lines(content)
    if len(lines) < 2:
        raise DecodeError("File must contain at least a header row and one data row")
    headers = _split_line(lines[0])
    rows = [_split_line(line) for line in lines[1:]]
    return DecodedTable(headers=headers, rows=rows)


# ---------------------------------------------------------------------------
# Spreadsheet
# ---------------------------------------------------------------------------

def decode_spreadsheet(content: bytes) -> DecodedTable:
    """Read the first sheet of an Excel workbook with every cell as text."""
    try:
        df = pd.read_excel(io.BytesIO(content), sheet_name=0, dtype=str, keep_default_na=False)
    except ImportError as exc:
        raise UnsupportedFileError(f"No Excel reader available for this file: {exc}") from exc
    except Exception as exc:
        raise DecodeError(f"Could not read spreadsheet: {exc}") from exc

    df = df.fillna("").astype(str)
    # Blank rows carry no data; the text path never produces them either
    df = df[(df != "").any(axis=1)]
    if df.empty:
        raise DecodeError("Excel file has no rows")

    headers = [str(h).strip() for h in df.columns]
    rows = df.values.tolist()
    return DecodedTable(headers=headers, rows=[[str(v) for v in row] for row in rows])


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def decode(content: bytes, filename: str | None = None, mime_type: str | None = None) -> DecodedTable:
    """Decode an uploaded file's bytes into headers and ordered raw rows."""
    if is_spreadsheet(filename, mime_type):
        table = decode_spreadsheet(content)
    else:
        table = decode_text(content)
    logger.debug("Decoded %s: %d headers, %d rows", filename or "<upload>", len(table.headers), len(table.rows))
    return table


def validate_structure(content: bytes, filename: str | None = None, mime_type: str | None = None) -> bool:
    """Cheap pre-upload check on the head of a text file.

    Spreadsheets are accepted here and validated in full on upload.
    """
    if is_spreadsheet(filename, mime_type):
        return True

    # The prefix may cut a multi-byte character in half
    lines = _text_lines(content[:VALIDATE_PREFIX_BYTES], errors="ignore")
    if len(lines) < 2:
        raise DecodeError("File must contain at least a header row and one data row")

    headers = _split_line(lines[0])
    if len(headers) != EXPECTED_COLUMN_COUNT:
        raise DecodeError(f"Expected {EXPECTED_COLUMN_COUNT} columns, found {len(headers)}")
    return True
