"""Dataset merge transform.

This module combines an existing canonical table with an incoming one.
Union mode widens the header set; strict mode rejects tables that
share no columns.
"""

from __future__ import annotations

import time

from core.constants import MERGE_MODE_STRICT, MERGE_MODE_UNION
from core.errors import ChronotabConfigError, ChronotabMergeError
from core.logging_config import get_logger
from core.types import Record, Table
from ingest.time_axis import detect_time_axis
from transforms.time_sort import sort_rows_by_time

_LOGGER = get_logger(__name__)


def merge_tables(existing: Table, incoming: Table, mode: str = MERGE_MODE_UNION) -> Table:
    """Merge two canonical tables into a new table.

    Args:
        existing: Receiving table whose identity is preserved.
        incoming: Table appended after the existing rows.
        mode: ``union`` (default) or ``strict``.

    Returns:
        New table with unioned headers and concatenated, re-sorted rows.

    Raises:
        ChronotabMergeError: If strict mode finds no shared headers.
        ChronotabConfigError: If mode is unknown.
    """
    _validate_merge_mode(existing, incoming, mode)
    merged_headers = merge_headers(existing.headers, incoming.headers)
    merged_rows: list[Record] = [dict(record) for record in existing.rows]
    merged_rows.extend(dict(record) for record in incoming.rows)
    time_axis = detect_time_axis(merged_headers)
    if time_axis.axis_header is not None:
        merged_rows = sort_rows_by_time(merged_rows, time_axis.axis_header)
    merged = Table(
        headers=merged_headers,
        rows=tuple(merged_rows),
        source_name=existing.source_name,
        ingested_at=int(time.time() * 1000),
        has_time_axis=existing.has_time_axis or incoming.has_time_axis,
    )
    _LOGGER.info(
        "tables_merged",
        source_name=merged.source_name,
        incoming_source_name=incoming.source_name,
        mode=mode,
        existing_row_count=len(existing.rows),
        incoming_row_count=len(incoming.rows),
        header_count=len(merged_headers),
        axis_header=time_axis.axis_header,
    )
    return merged


def merge_headers(existing: tuple[str, ...], incoming: tuple[str, ...]) -> tuple[str, ...]:
    """Return existing headers followed by unseen incoming headers."""
    merged = list(existing)
    seen = set(existing)
    for header in incoming:
        if header not in seen:
            seen.add(header)
            merged.append(header)
    return tuple(merged)


def _validate_merge_mode(existing: Table, incoming: Table, mode: str) -> None:
    if mode == MERGE_MODE_UNION:
        return
    if mode != MERGE_MODE_STRICT:
        raise ChronotabConfigError(
            f"Unsupported merge mode '{mode}'. Use '{MERGE_MODE_UNION}' or '{MERGE_MODE_STRICT}'."
        )
    if not existing.headers or not incoming.headers:
        return
    if set(existing.headers).isdisjoint(incoming.headers):
        raise ChronotabMergeError(
            f"Cannot merge '{incoming.source_name or 'incoming table'}' into "
            f"'{existing.source_name or 'existing table'}': the tables share no columns. "
            "Check that both files describe the same dataset."
        )
