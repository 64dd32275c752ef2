"""Project document persistence.

This module serializes a canonical table and its chart configuration
into the JSON project document and reads it back without loss.
"""

from __future__ import annotations

import json
import math
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from core.constants import PROJECT_FILE_TYPE, PROJECT_FILE_VERSION
from core.errors import ChronotabProjectError
from core.logging_config import get_logger
from core.types import (
    Cell,
    ChartConfig,
    NumericCell,
    ProjectDocument,
    Record,
    Table,
    TextCell,
    record_to_plain,
)

_LOGGER = get_logger(__name__)


def save_project(project_path: str | Path, table: Table, chart_config: ChartConfig) -> Path:
    """Write a project document to disk.

    Args:
        project_path: Destination JSON path.
        table: Canonical table to persist.
        chart_config: Chart configuration to persist.

    Returns:
        Written path.
    """
    path = Path(project_path).expanduser()
    document = ProjectDocument(
        version=PROJECT_FILE_VERSION,
        type=PROJECT_FILE_TYPE,
        data=table,
        config=chart_config,
        saved_at=datetime.now(timezone.utc).isoformat(),
    )
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(project_to_payload(document), indent=2) + "\n", encoding="utf-8")
    _LOGGER.info(
        "project_saved",
        project_path=str(path),
        source_name=table.source_name,
        row_count=len(table.rows),
    )
    return path


def load_project(project_path: str | Path) -> ProjectDocument:
    """Read and validate a project document.

    Args:
        project_path: Project JSON path.

    Returns:
        Parsed project document.

    Raises:
        ChronotabProjectError: If the file is unreadable or not a project.
    """
    path = Path(project_path).expanduser()
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as error:
        raise ChronotabProjectError(f"Failed to read project file {path}: {error}.") from error
    except json.JSONDecodeError as error:
        raise ChronotabProjectError(
            f"Failed to parse project file {path}: {error.msg} at line {error.lineno}."
        ) from error
    return project_from_payload(payload)


def project_to_payload(document: ProjectDocument) -> dict[str, Any]:
    """Convert a project document into its JSON payload."""
    return {
        "version": document.version,
        "type": document.type,
        "data": table_to_payload(document.data),
        "config": chart_config_to_payload(document.config),
        "savedAt": document.saved_at,
    }


def project_from_payload(payload: Any) -> ProjectDocument:
    """Build a project document from its JSON payload.

    Raises:
        ChronotabProjectError: If the payload is not a valid project.
    """
    if not isinstance(payload, dict) or payload.get("type") != PROJECT_FILE_TYPE:
        raise ChronotabProjectError(
            f"Invalid project format: expected type '{PROJECT_FILE_TYPE}'. "
            "Open a file saved by Chronotab."
        )
    if not isinstance(payload.get("data"), dict):
        raise ChronotabProjectError("Invalid project format: missing 'data' table payload.")
    return ProjectDocument(
        version=str(payload.get("version", PROJECT_FILE_VERSION)),
        type=PROJECT_FILE_TYPE,
        data=table_from_payload(payload["data"]),
        config=chart_config_from_payload(payload.get("config") or {}),
        saved_at=str(payload.get("savedAt", "")),
    )


def table_to_payload(table: Table) -> dict[str, Any]:
    """Convert a table into the canonical JSON shape."""
    payload: dict[str, Any] = {
        "headers": list(table.headers),
        "rows": [record_to_plain(record) for record in table.rows],
        "hasTimeAxis": table.has_time_axis,
    }
    if table.source_name is not None:
        payload["sourceName"] = table.source_name
    if table.ingested_at is not None:
        payload["ingestedAt"] = table.ingested_at
    return payload


def table_from_payload(payload: Mapping[str, Any]) -> Table:
    """Build a table from the canonical JSON shape.

    Raises:
        ChronotabProjectError: If headers or rows are malformed.
    """
    headers = payload.get("headers", [])
    rows = payload.get("rows", [])
    if not isinstance(headers, list) or not all(isinstance(item, str) for item in headers):
        raise ChronotabProjectError("Invalid project table: 'headers' must be a list of strings.")
    if len(set(headers)) != len(headers):
        raise ChronotabProjectError("Invalid project table: 'headers' contains duplicates.")
    if not isinstance(rows, list):
        raise ChronotabProjectError("Invalid project table: 'rows' must be a list.")
    known_headers = set(headers)
    records = tuple(_record_from_payload(row, known_headers, index) for index, row in enumerate(rows))
    ingested_at = payload.get("ingestedAt")
    source_name = payload.get("sourceName")
    return Table(
        headers=tuple(headers),
        rows=records,
        source_name=str(source_name) if source_name is not None else None,
        ingested_at=int(ingested_at) if isinstance(ingested_at, (int, float)) else None,
        has_time_axis=bool(payload.get("hasTimeAxis", False)),
    )


def chart_config_to_payload(chart_config: ChartConfig) -> dict[str, Any]:
    """Convert a chart configuration into its JSON shape."""
    return {
        "xAxisKey": chart_config.axis_header,
        "activeLines": list(chart_config.active_columns),
        "showGrid": chart_config.show_grid,
        "smoothing": chart_config.smoothing_window,
        "strokeWidth": chart_config.stroke_width,
        "filterStart": chart_config.filter_start,
        "filterEnd": chart_config.filter_end,
    }


def chart_config_from_payload(payload: Mapping[str, Any]) -> ChartConfig:
    """Build a chart configuration, defaulting missing keys.

    Raises:
        ChronotabProjectError: If a present key has the wrong type.
    """
    defaults = ChartConfig()
    try:
        return ChartConfig(
            axis_header=str(payload.get("xAxisKey", defaults.axis_header)),
            active_columns=tuple(str(item) for item in payload.get("activeLines", ())),
            show_grid=bool(payload.get("showGrid", defaults.show_grid)),
            smoothing_window=int(payload.get("smoothing", defaults.smoothing_window)),
            stroke_width=int(payload.get("strokeWidth", defaults.stroke_width)),
            filter_start=str(payload.get("filterStart", defaults.filter_start)),
            filter_end=str(payload.get("filterEnd", defaults.filter_end)),
        )
    except (TypeError, ValueError) as error:
        raise ChronotabProjectError(f"Invalid project config: {error}.") from error


def _record_from_payload(row: Any, known_headers: set[str], index: int) -> Record:
    if not isinstance(row, dict):
        raise ChronotabProjectError(f"Invalid project row {index}: expected an object.")
    record: dict[str, Cell] = {}
    for column, value in row.items():
        if column not in known_headers:
            raise ChronotabProjectError(
                f"Invalid project row {index}: column '{column}' is not in headers."
            )
        record[column] = _cell_from_payload(value, index, column)
    return record


def _cell_from_payload(value: Any, index: int, column: str) -> Cell:
    if isinstance(value, str):
        return TextCell(value)
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return NumericCell(float(value))
    raise ChronotabProjectError(
        f"Invalid project row {index}: column '{column}' must hold a string or finite number."
    )
