"""Ingest orchestration.

This module runs extraction, coercion, time-axis detection, and sorting
to turn one source file into a canonical table. Ingestion is atomic: it
returns a complete table, possibly empty, or raises.
"""

from __future__ import annotations

import time
from pathlib import Path

from core.config import ChronotabConfig
from core.constants import FORMAT_SPREADSHEET
from core.logging_config import get_logger
from core.types import RawTable, SourceContent, Table
from ingest.cell_extractor import extract_delimited_text, extract_spreadsheet
from ingest.input_reader import read_source, read_source_async
from ingest.time_axis import detect_time_axis
from ingest.type_coercion import coerce_rows
from transforms.time_sort import sort_table

_LOGGER = get_logger(__name__)


def ingest_file(source_path: str | Path, config: ChronotabConfig) -> Table:
    """Read and normalize one source file.

    Args:
        source_path: Local ``.csv`` or ``.xlsx`` file.
        config: Runtime configuration.

    Returns:
        Canonical table.

    Raises:
        ChronotabIngestError: If the file cannot be read or decoded.
    """
    return build_table_from_source(read_source(source_path, config))


async def ingest_file_async(source_path: str | Path, config: ChronotabConfig) -> Table:
    """Read a source file asynchronously, then normalize it."""
    source = await read_source_async(source_path, config)
    return build_table_from_source(source)


def build_table_from_source(source: SourceContent) -> Table:
    """Extract and normalize already-loaded source content."""
    if source.source_format == FORMAT_SPREADSHEET:
        raw_table = extract_spreadsheet(source.content or b"")
    else:
        raw_table = extract_delimited_text(source.text or "")
    return build_table(raw_table, source.source_name)


def build_table(raw_table: RawTable, source_name: str | None = None) -> Table:
    """Coerce, detect the time axis, and sort a raw table.

    Args:
        raw_table: Extractor output.
        source_name: Optional origin label.

    Returns:
        Canonical table; empty when the raw table has no headers.
    """
    if not raw_table.headers:
        _LOGGER.warning("empty_source", source_name=source_name)
        return Table.empty(source_name)
    records = coerce_rows(raw_table.headers, raw_table.rows)
    time_axis = detect_time_axis(raw_table.headers)
    table = Table(
        headers=raw_table.headers,
        rows=tuple(records),
        source_name=source_name,
        ingested_at=int(time.time() * 1000),
        has_time_axis=time_axis.has_time_axis,
    )
    table = sort_table(table, time_axis)
    _LOGGER.info(
        "table_ingested",
        source_name=source_name,
        raw_row_count=len(raw_table.rows),
        row_count=len(table.rows),
        header_count=len(table.headers),
        has_time_axis=time_axis.has_time_axis,
        axis_header=time_axis.axis_header,
    )
    return table
