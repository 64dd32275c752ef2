"""Python SDK for table operations.

This module exposes high-level APIs for ingest, merge, derived views,
and project persistence. Every call returns new values, so callers can
keep earlier tables around as snapshots.
"""

from __future__ import annotations

from pathlib import Path

from core.config import ChronotabConfig
from core.constants import DEFAULT_ACTIVE_COLUMN_LIMIT
from core.types import ChartConfig, NumericCell, ProjectDocument, Record, Table
from ingest.pipeline import ingest_file, ingest_file_async
from ingest.time_axis import detect_time_axis
from store.project_io import load_project, save_project
from transforms.dataset_merge import merge_tables
from transforms.moving_average import smooth_rows
from transforms.range_filter import filter_rows_by_range


class ChronotabClient:
    """Primary SDK entry point for table workflows."""

    def __init__(self, config: ChronotabConfig | None = None) -> None:
        """Create SDK client.

        Args:
            config: Optional runtime configuration.
        """
        self._config = config or ChronotabConfig.from_env()

    @property
    def config(self) -> ChronotabConfig:
        """Runtime configuration used by this client."""
        return self._config

    def load(self, source_path: str | Path) -> Table:
        """Ingest one source file into a canonical table.

        Raises:
            ChronotabIngestError: If the file cannot be read or decoded.
        """
        return ingest_file(source_path, self._config)

    async def load_async(self, source_path: str | Path) -> Table:
        """Ingest one source file, reading it off the event loop."""
        return await ingest_file_async(source_path, self._config)

    def append(self, table: Table, source_path: str | Path, mode: str | None = None) -> Table:
        """Ingest a file and merge it into an existing table.

        Args:
            table: Receiving table, left unchanged.
            source_path: File to ingest and append.
            mode: Merge mode override; config default when omitted.

        Returns:
            New merged table.

        Raises:
            ChronotabIngestError: If the file cannot be read.
            ChronotabMergeError: If a strict merge finds no shared headers.
        """
        incoming = self.load(source_path)
        return merge_tables(table, incoming, mode or self._config.merge_mode)

    def merge(self, existing: Table, incoming: Table, mode: str | None = None) -> Table:
        """Merge two canonical tables with the configured policy."""
        return merge_tables(existing, incoming, mode or self._config.merge_mode)

    def default_chart_config(self, table: Table) -> ChartConfig:
        """Build the chart configuration shown right after loading a table."""
        return default_chart_config(table)

    def filtered_rows(self, table: Table, chart_config: ChartConfig) -> list[Record]:
        """Return rows within the configured date range, for display or export."""
        return filter_rows_by_range(
            table,
            chart_config.axis_header,
            chart_config.filter_start,
            chart_config.filter_end,
        )

    def display_rows(self, table: Table, chart_config: ChartConfig) -> list[Record]:
        """Return filtered rows with smoothing applied to the active columns.

        Active columns missing from the table headers are not smoothed, so
        derived rows never carry keys outside the header set.
        """
        rows = self.filtered_rows(table, chart_config)
        columns = [column for column in chart_config.active_columns if column in table.headers]
        return smooth_rows(rows, columns, chart_config.smoothing_window)

    def save_project(
        self,
        project_path: str | Path,
        table: Table,
        chart_config: ChartConfig,
    ) -> Path:
        """Persist a table and its chart configuration."""
        return save_project(project_path, table, chart_config)

    def load_project(self, project_path: str | Path) -> ProjectDocument:
        """Load a persisted project document.

        Raises:
            ChronotabProjectError: If the file is not a valid project.
        """
        return load_project(project_path)


def default_chart_config(
    table: Table,
    column_limit: int = DEFAULT_ACTIVE_COLUMN_LIMIT,
) -> ChartConfig:
    """Pick the display axis and initial numeric series for a table.

    Args:
        table: Canonical table.
        column_limit: Maximum number of initially active series.

    Returns:
        Chart configuration with no filter and no smoothing.
    """
    time_axis = detect_time_axis(table.headers)
    if time_axis.axis_header is not None:
        axis_header = time_axis.axis_header
    else:
        axis_header = table.headers[0] if table.headers else ""
    numeric_columns = [
        header
        for header in table.headers
        if header != axis_header and _first_present_is_numeric(table, header)
    ]
    return ChartConfig(axis_header=axis_header, active_columns=tuple(numeric_columns[:column_limit]))


def _first_present_is_numeric(table: Table, header: str) -> bool:
    for record in table.rows:
        cell = record.get(header)
        if cell is not None:
            return isinstance(cell, NumericCell)
    return False
