"""Core constants used across Chronotab modules.

This module centralizes non-domain-specific constants.
Keeping values here avoids magic literals in business logic.
"""

from __future__ import annotations

TIME_AXIS_KEYWORDS = ("datum", "date", "zeit", "time", "timestamp", "created", "index")
SPREADSHEET_EXTENSIONS = (".xlsx", ".xlsm")
LEGACY_SPREADSHEET_EXTENSIONS = (".xls",)
FORMAT_DELIMITED_TEXT = "delimited_text"
FORMAT_SPREADSHEET = "spreadsheet"
MERGE_MODE_UNION = "union"
MERGE_MODE_STRICT = "strict"
SUPPORTED_MERGE_MODES = (MERGE_MODE_UNION, MERGE_MODE_STRICT)
DEFAULT_MERGE_MODE = MERGE_MODE_UNION
DEFAULT_SOURCE_ENCODING = "utf-8-sig"
DEFAULT_LOG_LEVEL = "INFO"
SUPPORTED_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
EMPTY_HEADER_PREFIX = "column_"
UNPARSABLE_TIMESTAMP = 0.0
SMOOTHING_DECIMALS = 2
DEFAULT_ACTIVE_COLUMN_LIMIT = 5
DEFAULT_STROKE_WIDTH = 2
PROJECT_FILE_VERSION = "1.0"
PROJECT_FILE_TYPE = "chronotab-project"
