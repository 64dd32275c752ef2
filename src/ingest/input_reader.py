"""Source file readers for ingestion.

This module loads whole files into memory and classifies their format.
It reports unreadable or undecodable files as one ingest error.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

from core.config import ChronotabConfig
from core.constants import (
    FORMAT_DELIMITED_TEXT,
    FORMAT_SPREADSHEET,
    LEGACY_SPREADSHEET_EXTENSIONS,
    SPREADSHEET_EXTENSIONS,
)
from core.errors import ChronotabIngestError
from core.types import SourceContent


def read_source(source_path: str | Path, config: ChronotabConfig) -> SourceContent:
    """Load a source file for extraction.

    Args:
        source_path: Local ``.csv`` or ``.xlsx`` file.
        config: Runtime configuration with the text encoding.

    Returns:
        Source content with decoded text or raw workbook bytes.

    Raises:
        ChronotabIngestError: If the file is missing, unreadable, or undecodable.
    """
    path = Path(source_path).expanduser()
    source_format = detect_source_format(path)
    payload = _read_bytes(path)
    if source_format == FORMAT_SPREADSHEET:
        return SourceContent(source_name=path.name, source_format=source_format, content=payload)
    text = _decode_text(path, payload, config.source_encoding)
    return SourceContent(source_name=path.name, source_format=source_format, text=text)


async def read_source_async(source_path: str | Path, config: ChronotabConfig) -> SourceContent:
    """Load a source file without blocking the running event loop."""
    return await asyncio.to_thread(read_source, source_path, config)


def detect_source_format(path: Path) -> str:
    """Classify a path as spreadsheet or delimited text by suffix.

    Raises:
        ChronotabIngestError: For legacy ``.xls`` workbooks.
    """
    suffix = path.suffix.lower()
    if suffix in SPREADSHEET_EXTENSIONS:
        return FORMAT_SPREADSHEET
    if suffix in LEGACY_SPREADSHEET_EXTENSIONS:
        raise ChronotabIngestError(
            f"Unsupported spreadsheet format for {path}: legacy .xls workbooks cannot be read. "
            "Save the workbook as .xlsx or export it as CSV."
        )
    return FORMAT_DELIMITED_TEXT


def _read_bytes(path: Path) -> bytes:
    if not path.is_file():
        raise ChronotabIngestError(
            f"Failed to read source at {path}: file does not exist. "
            "Provide an existing .csv or .xlsx file."
        )
    try:
        return path.read_bytes()
    except OSError as error:
        raise ChronotabIngestError(f"Failed to read source at {path}: {error}.") from error


def _decode_text(path: Path, payload: bytes, encoding: str) -> str:
    try:
        return payload.decode(encoding)
    except UnicodeDecodeError as error:
        raise ChronotabIngestError(
            f"Failed to decode {path} as {encoding}: {error.reason} at byte {error.start}. "
            "Set CHRONOTAB_SOURCE_ENCODING to the file's encoding."
        ) from error
