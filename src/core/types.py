"""Shared typed models.

This module defines immutable data models used by ingest, transforms,
store, and SDK layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Mapping, Sequence, Union

from core.constants import DEFAULT_STROKE_WIDTH


@dataclass(frozen=True)
class NumericCell:
    """Finite numeric cell value."""

    value: float


@dataclass(frozen=True)
class TextCell:
    """Text cell value, including date-shaped strings."""

    value: str


Cell = Union[NumericCell, TextCell]
Record = Mapping[str, Cell]
RawValue = Union[str, int, float, bool, date, datetime, None]
RawRow = Union[Sequence[RawValue], Mapping[str, RawValue]]


def cell_value(cell: Cell | None) -> float | str | None:
    """Return the plain Python value of a cell, or None when absent."""
    if cell is None:
        return None
    return cell.value


def record_to_plain(record: Record) -> dict[str, float | str]:
    """Convert a record into a plain column-to-value mapping."""
    return {column: cell.value for column, cell in record.items()}


@dataclass(frozen=True)
class RawTable:
    """Untyped extractor output.

    Attributes:
        headers: Unique column names in source order.
        rows: Positional or header-keyed raw rows.
    """

    headers: tuple[str, ...]
    rows: tuple[RawRow, ...]

    @classmethod
    def empty(cls) -> "RawTable":
        """Return the extractor result for empty or malformed input."""
        return cls(headers=(), rows=())


@dataclass(frozen=True)
class Table:
    """Canonical normalized dataset.

    Attributes:
        headers: Unique column names, display and merge order.
        rows: Sparse records in authoritative order.
        source_name: Optional origin label, usually the file name.
        ingested_at: Epoch millis of the last parse or merge.
        has_time_axis: Whether a chronological axis column was detected.
    """

    headers: tuple[str, ...]
    rows: tuple[Record, ...]
    source_name: str | None = None
    ingested_at: int | None = None
    has_time_axis: bool = False

    @classmethod
    def empty(cls, source_name: str | None = None) -> "Table":
        """Return an empty table carrying an optional source label."""
        return cls(headers=(), rows=(), source_name=source_name)

    @property
    def is_empty(self) -> bool:
        """Return whether the table has no headers or no rows."""
        return not self.headers or not self.rows


@dataclass(frozen=True)
class TimeAxis:
    """Time-axis detection result.

    Attributes:
        has_time_axis: Whether any header matched a time keyword.
        axis_header: Matching header when detected.
    """

    has_time_axis: bool
    axis_header: str | None = None


@dataclass(frozen=True)
class SourceContent:
    """Raw file content loaded for extraction.

    Attributes:
        source_name: File name used as the table's origin label.
        source_format: ``delimited_text`` or ``spreadsheet``.
        text: Decoded text for delimited sources.
        content: Raw bytes for spreadsheet sources.
    """

    source_name: str
    source_format: str
    text: str | None = None
    content: bytes | None = None


@dataclass(frozen=True)
class ChartConfig:
    """Display configuration handed to rendering and export collaborators.

    Attributes:
        axis_header: Column used as the chart x-axis.
        active_columns: Series columns currently displayed.
        show_grid: Whether the chart grid is drawn.
        smoothing_window: Moving-average window, 0 or 1 disables it.
        stroke_width: Line width for series.
        filter_start: Inclusive ``YYYY-MM-DD`` lower bound or empty.
        filter_end: Inclusive ``YYYY-MM-DD`` upper bound or empty.
    """

    axis_header: str = ""
    active_columns: tuple[str, ...] = field(default_factory=tuple)
    show_grid: bool = True
    smoothing_window: int = 0
    stroke_width: int = DEFAULT_STROKE_WIDTH
    filter_start: str = ""
    filter_end: str = ""


@dataclass(frozen=True)
class ProjectDocument:
    """Persisted project payload.

    Attributes:
        version: Project format version.
        type: Project format identifier.
        data: Canonical table.
        config: Chart configuration.
        saved_at: ISO-8601 UTC save timestamp.
    """

    version: str
    type: str
    data: Table
    config: ChartConfig
    saved_at: str
