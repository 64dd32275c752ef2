"""Inclusive date-range filtering.

This module derives a row view bounded by ``YYYY-MM-DD`` strings. Only
ISO-shaped text axis values are constrained; every other axis value
passes through untouched.
"""

from __future__ import annotations

from core.date_formats import is_iso_date_bound, is_iso_date_text
from core.errors import ChronotabTransformError
from core.types import Record, Table, TextCell


def filter_rows_by_range(
    table: Table,
    axis_header: str,
    start: str = "",
    end: str = "",
) -> list[Record]:
    """Filter table rows to an inclusive date range.

    Args:
        table: Canonical table, left untouched.
        axis_header: Column holding the date values.
        start: Inclusive lower bound, empty for unbounded.
        end: Inclusive upper bound, empty for unbounded.

    Returns:
        New list of retained records in table order.

    Raises:
        ChronotabTransformError: If a bound is not ``YYYY-MM-DD`` shaped.
    """
    _validate_bound("start", start)
    _validate_bound("end", end)
    if not start and not end:
        return list(table.rows)
    return [record for record in table.rows if _in_range(record, axis_header, start, end)]


def _in_range(record: Record, axis_header: str, start: str, end: str) -> bool:
    cell = record.get(axis_header)
    if not isinstance(cell, TextCell) or not is_iso_date_text(cell.value):
        return True
    if start and cell.value < start:
        return False
    if end and cell.value > end:
        return False
    return True


def _validate_bound(name: str, bound: str) -> None:
    if bound and not is_iso_date_bound(bound):
        raise ChronotabTransformError(
            f"Invalid filter {name} '{bound}': expected an empty string or a "
            "YYYY-MM-DD date."
        )
