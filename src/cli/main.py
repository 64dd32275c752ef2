"""Chronotab CLI entry points.
This module exposes commands to inspect, view, and save ingested tables.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
import csv
import sys
from dataclasses import replace
from pathlib import Path
from typing import Any, Sequence

from core.config import ChronotabConfig, parse_merge_mode
from core.constants import SUPPORTED_MERGE_MODES
from core.errors import ChronotabError
from core.logging_config import configure_logging
from core.types import ChartConfig, Record, Table
from store.table_sdk import ChronotabClient

_PROJECT_SUFFIX = ".json"


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="chronotab", description="Chronotab table CLI")
    parser.add_argument(
        "--merge-mode",
        choices=SUPPORTED_MERGE_MODES,
        help="Override CHRONOTAB_MERGE_MODE for this command",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_inspect_command(subparsers)
    _add_view_command(subparsers)
    _add_save_project_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Chronotab CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    client = _build_client(args.merge_mode)
    try:
        if args.command == "inspect":
            return _run_inspect_command(client, args)
        if args.command == "view":
            return _run_view_command(client, args)
        if args.command == "save-project":
            return _run_save_project_command(client, args)
    except ChronotabError as error:
        print(f"error={error}", file=sys.stderr)
        return 1
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(merge_mode: str | None) -> ChronotabClient:
    """Build SDK client with optional merge-mode override."""
    config = ChronotabConfig.from_env()
    if merge_mode:
        config = replace(config, merge_mode=parse_merge_mode(merge_mode))
    configure_logging(config.log_level)
    return ChronotabClient(config)


def _load_table(client: ChronotabClient, args: argparse.Namespace) -> tuple[Table, ChartConfig]:
    """Load the source table or project, then merge any appended files."""
    if Path(args.source).suffix.lower() == _PROJECT_SUFFIX:
        document = client.load_project(args.source)
        table, chart_config = document.data, document.config
    else:
        table = client.load(args.source)
        chart_config = None
    for append_path in args.append:
        table = client.append(table, append_path)
    return table, chart_config or client.default_chart_config(table)


def _run_inspect_command(client: ChronotabClient, args: argparse.Namespace) -> int:
    """Handle inspect command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    table, chart_config = _load_table(client, args)
    print(f"source_name={table.source_name or '-'}")
    print(f"row_count={len(table.rows)}")
    print(f"headers={','.join(table.headers)}")
    print(f"has_time_axis={str(table.has_time_axis).lower()}")
    print(f"axis_header={chart_config.axis_header or '-'}")
    print(f"active_columns={','.join(chart_config.active_columns) or '-'}")
    return 0 if table.headers else 1


def _run_view_command(client: ChronotabClient, args: argparse.Namespace) -> int:
    """Handle view command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    table, chart_config = _load_table(client, args)
    chart_config = _apply_view_overrides(chart_config, args)
    rows = client.display_rows(table, chart_config)
    if chart_config.axis_header and args.columns:
        columns = [chart_config.axis_header, *chart_config.active_columns]
    else:
        columns = list(table.headers)
    _write_csv_rows(columns, rows)
    return 0


def _run_save_project_command(client: ChronotabClient, args: argparse.Namespace) -> int:
    """Handle save-project command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    table, chart_config = _load_table(client, args)
    project_path = client.save_project(args.output, table, chart_config)
    print(project_path)
    return 0


def _apply_view_overrides(chart_config: ChartConfig, args: argparse.Namespace) -> ChartConfig:
    """Layer CLI view options over a chart configuration."""
    overrides: dict[str, Any] = {}
    if args.axis:
        overrides["axis_header"] = args.axis
    if args.columns:
        overrides["active_columns"] = tuple(args.columns)
    if args.smoothing is not None:
        overrides["smoothing_window"] = args.smoothing
    if args.start is not None:
        overrides["filter_start"] = args.start
    if args.end is not None:
        overrides["filter_end"] = args.end
    return replace(chart_config, **overrides)


def _write_csv_rows(columns: list[str], rows: list[Record]) -> None:
    """Write derived rows to stdout as CSV."""
    writer = csv.writer(sys.stdout, lineterminator="\n")
    writer.writerow(columns)
    for record in rows:
        writer.writerow([_format_cell_value(record, column) for column in columns])


def _format_cell_value(record: Record, column: str) -> str:
    cell = record.get(column)
    if cell is None:
        return ""
    value = cell.value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("source", help="Source .csv/.xlsx file or saved .json project")
    parser.add_argument(
        "--append",
        action="append",
        default=[],
        metavar="FILE",
        help="Additional file merged into the source (repeatable)",
    )


def _add_inspect_command(subparsers: Any) -> None:
    """Register inspect subcommand."""
    parser = subparsers.add_parser("inspect", help="Print a summary of an ingested table")
    _add_source_arguments(parser)


def _add_view_command(subparsers: Any) -> None:
    """Register view subcommand."""
    parser = subparsers.add_parser("view", help="Print filtered and smoothed rows as CSV")
    _add_source_arguments(parser)
    parser.add_argument("--axis", help="Axis column used for date filtering")
    parser.add_argument("--columns", nargs="+", help="Series columns to show and smooth")
    parser.add_argument("--smoothing", type=int, help="Moving-average window, 0 disables")
    parser.add_argument("--start", help="Inclusive start date, YYYY-MM-DD")
    parser.add_argument("--end", help="Inclusive end date, YYYY-MM-DD")


def _add_save_project_command(subparsers: Any) -> None:
    """Register save-project subcommand."""
    parser = subparsers.add_parser("save-project", help="Save a table and chart config as JSON")
    _add_source_arguments(parser)
    parser.add_argument("--output", required=True, help="Project JSON output path")
