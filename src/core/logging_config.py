"""Structured logging configuration.

This module initializes structlog with a stable JSON line format.
Events go to stderr so command output on stdout stays machine-readable.
Callers obtain module loggers through ``get_logger``.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from core.constants import DEFAULT_LOG_LEVEL

_CONFIGURED_LEVEL = DEFAULT_LOG_LEVEL


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure structlog processors and minimum level.

    Args:
        level: Log level name such as ``INFO`` or ``DEBUG``.
    """
    global _CONFIGURED_LEVEL
    _CONFIGURED_LEVEL = level.upper()
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(_CONFIGURED_LEVEL)
        ),
        logger_factory=_stderr_logger_factory,
    )


def get_logger(name: str) -> Any:
    """Return a module logger instance.

    Args:
        name: Logger name, usually __name__.

    Returns:
        A structlog logger with structured output.
    """
    if not structlog.is_configured():
        configure_logging(_CONFIGURED_LEVEL)
    return structlog.get_logger(name)


def _stderr_logger_factory(*_args: Any) -> structlog.PrintLogger:
    # Resolve sys.stderr per logger so redirected streams are honored.
    return structlog.PrintLogger(sys.stderr)
