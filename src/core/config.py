"""Runtime configuration model for Chronotab.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import codecs
import os

from core.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MERGE_MODE,
    DEFAULT_SOURCE_ENCODING,
    SUPPORTED_LOG_LEVELS,
    SUPPORTED_MERGE_MODES,
)
from core.errors import ChronotabConfigError


@dataclass(frozen=True)
class ChronotabConfig:
    """Validated runtime configuration.

    Attributes:
        merge_mode: Default merge policy, ``union`` or ``strict``.
        source_encoding: Text encoding used to decode delimited files.
        log_level: Minimum structured log level.
    """

    merge_mode: str = DEFAULT_MERGE_MODE
    source_encoding: str = DEFAULT_SOURCE_ENCODING
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "ChronotabConfig":
        """Build config from process environment variables.

        Returns:
            A validated config object.

        Raises:
            ChronotabConfigError: If environment values are invalid.
        """
        merge_mode = parse_merge_mode(os.getenv("CHRONOTAB_MERGE_MODE", DEFAULT_MERGE_MODE))
        source_encoding = _parse_encoding(
            os.getenv("CHRONOTAB_SOURCE_ENCODING", DEFAULT_SOURCE_ENCODING)
        )
        log_level = _parse_log_level(os.getenv("CHRONOTAB_LOG_LEVEL", DEFAULT_LOG_LEVEL))
        return cls(merge_mode=merge_mode, source_encoding=source_encoding, log_level=log_level)


def parse_merge_mode(raw_value: str) -> str:
    """Parse and validate a merge mode value.

    Args:
        raw_value: Raw mode string from environment or CLI.

    Returns:
        Normalized merge mode.

    Raises:
        ChronotabConfigError: If mode is not supported.
    """
    merge_mode = raw_value.strip().lower()
    if merge_mode not in SUPPORTED_MERGE_MODES:
        raise ChronotabConfigError(
            f"Invalid merge mode '{raw_value}': expected one of {SUPPORTED_MERGE_MODES}. "
            "Set CHRONOTAB_MERGE_MODE to 'union' or 'strict'."
        )
    return merge_mode


def _parse_encoding(raw_value: str) -> str:
    """Validate that the configured text encoding is known to Python."""
    try:
        codecs.lookup(raw_value)
    except LookupError as error:
        raise ChronotabConfigError(
            f"Invalid CHRONOTAB_SOURCE_ENCODING value: unknown encoding '{raw_value}'. "
            "Use a codec name such as 'utf-8-sig' or 'latin-1'."
        ) from error
    return raw_value


def _parse_log_level(raw_value: str) -> str:
    """Validate the configured log level name."""
    log_level = raw_value.strip().upper()
    if log_level not in SUPPORTED_LOG_LEVELS:
        raise ChronotabConfigError(
            f"Invalid CHRONOTAB_LOG_LEVEL value: expected one of {SUPPORTED_LOG_LEVELS}, "
            f"got '{raw_value}'."
        )
    return log_level
