"""Public SDK surface for Chronotab.

This module provides a stable import path for library users.
It re-exports the client, typed models, and pure transforms.
"""

from __future__ import annotations

from core.config import ChronotabConfig
from core.errors import (
    ChronotabError,
    ChronotabIngestError,
    ChronotabMergeError,
    ChronotabProjectError,
    ChronotabTransformError,
)
from core.types import ChartConfig, NumericCell, ProjectDocument, Table, TextCell, TimeAxis
from ingest.pipeline import build_table, ingest_file, ingest_file_async
from ingest.time_axis import detect_time_axis
from store.table_sdk import ChronotabClient, default_chart_config
from transforms.dataset_merge import merge_tables
from transforms.moving_average import smooth_rows
from transforms.range_filter import filter_rows_by_range
from transforms.time_sort import canonical_timestamp, sort_rows_by_time

__all__ = [
    "ChartConfig",
    "ChronotabClient",
    "ChronotabConfig",
    "ChronotabError",
    "ChronotabIngestError",
    "ChronotabMergeError",
    "ChronotabProjectError",
    "ChronotabTransformError",
    "NumericCell",
    "ProjectDocument",
    "Table",
    "TextCell",
    "TimeAxis",
    "build_table",
    "canonical_timestamp",
    "default_chart_config",
    "detect_time_axis",
    "filter_rows_by_range",
    "ingest_file",
    "ingest_file_async",
    "merge_tables",
    "smooth_rows",
    "sort_rows_by_time",
]
