"""Chronotab exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each subsystem raises a specific error type for debuggability.
"""

from __future__ import annotations


class ChronotabError(Exception):
    """Base exception for all Chronotab failures."""


class ChronotabConfigError(ChronotabError):
    """Raised for invalid runtime configuration."""


class ChronotabIngestError(ChronotabError):
    """Raised for unreadable or undecodable source files."""


class ChronotabTransformError(ChronotabError):
    """Raised for invalid derived-view or merge requests."""


class ChronotabMergeError(ChronotabTransformError):
    """Raised when a strict merge finds no shared headers."""


class ChronotabProjectError(ChronotabError):
    """Raised for invalid or unreadable project documents."""


class ChronotabDependencyError(ChronotabError):
    """Raised when an optional runtime dependency is missing."""
