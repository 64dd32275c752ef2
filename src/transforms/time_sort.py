"""Canonical timestamps and stable time ordering.

This module converts axis cells into comparable epoch-millisecond values
and stably sorts records by them. Unparsable values map to ``0`` and
therefore sort first while keeping their relative order.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any, Callable, Iterable

from dateutil import parser as date_parser

from core.constants import UNPARSABLE_TIMESTAMP
from core.date_formats import DATE_FORMATS, DateFormat, local_midnight_millis
from core.types import NumericCell, Record, Table, TextCell, TimeAxis

_GENERIC_PARSE_DEFAULT = datetime(1970, 1, 1)


@dataclass(frozen=True)
class TimestampParser:
    """One ordered timestamp parsing strategy.

    Attributes:
        name: Strategy identifier.
        accepts: Predicate over the unwrapped value.
        parse: Returns epoch millis, or None to defer to later strategies.
    """

    name: str
    accepts: Callable[[Any], bool]
    parse: Callable[[Any], float | None]


def _is_temporal(value: Any) -> bool:
    return isinstance(value, (datetime, date))


def _temporal_millis(value: date) -> float | None:
    if isinstance(value, datetime):
        return _datetime_millis(value)
    return local_midnight_millis(value.year, value.month, value.day)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _date_format_parser(date_format: DateFormat) -> TimestampParser:
    def accepts(value: Any) -> bool:
        return isinstance(value, str) and date_format.match(value) is not None

    def parse(value: str) -> float | None:
        match = date_format.match(value)
        if match is None:
            return None
        year, month, day = date_format.components(match)
        return local_midnight_millis(year, month, day)

    return TimestampParser(name=date_format.name, accepts=accepts, parse=parse)


def _generic_millis(value: str) -> float | None:
    try:
        parsed = date_parser.parse(value, default=_GENERIC_PARSE_DEFAULT)
    except (ValueError, OverflowError):
        return None
    return _datetime_millis(parsed)


def _datetime_millis(value: datetime) -> float | None:
    try:
        return value.timestamp() * 1000.0
    except (ValueError, OverflowError, OSError):
        return None


# Priority order, first successful parse wins.
TIMESTAMP_PARSERS: tuple[TimestampParser, ...] = (
    TimestampParser(name="temporal", accepts=_is_temporal, parse=_temporal_millis),
    TimestampParser(name="numeric", accepts=_is_number, parse=float),
    *(_date_format_parser(date_format) for date_format in DATE_FORMATS),
    TimestampParser(
        name="generic", accepts=lambda value: isinstance(value, str), parse=_generic_millis
    ),
)


def canonical_timestamp(value: Any) -> float:
    """Return the sortable epoch-millis value of an axis cell.

    Args:
        value: Cell, plain value, date object, or None.

    Returns:
        Epoch millis; numbers pass through unchanged; ``0`` when unparsable.
    """
    if isinstance(value, (NumericCell, TextCell)):
        value = value.value
    for timestamp_parser in TIMESTAMP_PARSERS:
        if not timestamp_parser.accepts(value):
            continue
        parsed = timestamp_parser.parse(value)
        if parsed is not None:
            return parsed
    return UNPARSABLE_TIMESTAMP


def sort_rows_by_time(rows: Iterable[Record], axis_header: str) -> list[Record]:
    """Stably sort records ascending by the axis column's timestamp.

    Args:
        rows: Records in input order.
        axis_header: Chronological axis column.

    Returns:
        New list; equal timestamps keep their input order.
    """
    return sorted(rows, key=lambda record: canonical_timestamp(record.get(axis_header)))


def sort_table(table: Table, time_axis: TimeAxis) -> Table:
    """Return a time-sorted copy of a table, or the table itself without an axis."""
    if not time_axis.has_time_axis or time_axis.axis_header is None:
        return table
    sorted_rows = sort_rows_by_time(table.rows, time_axis.axis_header)
    return replace(table, rows=tuple(sorted_rows))
