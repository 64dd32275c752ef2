"""Recognized date text formats.

This module holds the ordered list of date shapes shared by type
coercion, time sorting, and range filtering. New shapes are added by
appending an entry to ``DATE_FORMATS``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Callable

from dateutil.relativedelta import relativedelta

_TIME_SUFFIX = r"(?:[T ].+)?"


@dataclass(frozen=True)
class DateFormat:
    """One recognized date text shape.

    Attributes:
        name: Short format identifier.
        pattern: Full-match pattern with year, month, day groups.
        components: Extracts ``(year, month, day)`` from a match.
    """

    name: str
    pattern: re.Pattern[str]
    components: Callable[[re.Match[str]], tuple[int, int, int]]

    def match(self, text: str) -> re.Match[str] | None:
        """Return a full match for text, or None."""
        return self.pattern.fullmatch(text)


def _year_first(match: re.Match[str]) -> tuple[int, int, int]:
    return int(match.group(1)), int(match.group(2)), int(match.group(3))


def _day_first(match: re.Match[str]) -> tuple[int, int, int]:
    return int(match.group(3)), int(match.group(2)), int(match.group(1))


ISO_DATE = DateFormat(
    name="iso",
    pattern=re.compile(r"(\d{4})-(\d{2})-(\d{2})" + _TIME_SUFFIX, re.DOTALL),
    components=_year_first,
)
DOTTED_DATE = DateFormat(
    name="dotted",
    pattern=re.compile(r"(\d{2})\.(\d{2})\.(\d{4})" + _TIME_SUFFIX, re.DOTALL),
    components=_day_first,
)
SLASHED_DATE = DateFormat(
    name="slashed",
    pattern=re.compile(r"(\d{4})/(\d{2})/(\d{2})" + _TIME_SUFFIX, re.DOTALL),
    components=_year_first,
)

# Priority order, first match wins.
DATE_FORMATS: tuple[DateFormat, ...] = (ISO_DATE, DOTTED_DATE, SLASHED_DATE)

_ISO_BOUND_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def match_date_format(text: str) -> tuple[DateFormat, re.Match[str]] | None:
    """Find the first date format matching text.

    Args:
        text: Trimmed cell text.

    Returns:
        Matching format and match object, or None.
    """
    for date_format in DATE_FORMATS:
        match = date_format.match(text)
        if match is not None:
            return date_format, match
    return None


def is_date_text(text: str) -> bool:
    """Return whether text has any recognized date shape."""
    return match_date_format(text) is not None


def is_iso_date_text(text: str) -> bool:
    """Return whether text starts with an ISO ``YYYY-MM-DD`` date."""
    return ISO_DATE.match(text) is not None


def is_iso_date_bound(text: str) -> bool:
    """Return whether text is exactly a ``YYYY-MM-DD`` bound."""
    return _ISO_BOUND_PATTERN.fullmatch(text) is not None


def local_midnight_millis(year: int, month: int, day: int) -> float | None:
    """Return epoch millis of local midnight for year/month/day components.

    Out-of-range months and days roll over into the following or preceding
    period, so ``2024-02-30`` resolves to 2024-03-01 and month ``13`` to
    January of the next year.

    Args:
        year: Calendar year.
        month: Month number, rolled over when outside ``1..12``.
        day: Day of month, rolled over when outside the month.

    Returns:
        Epoch millis, or None when the year is outside the supported range.
    """
    try:
        local_midnight = datetime(year, 1, 1) + relativedelta(months=month - 1, days=day - 1)
        return local_midnight.timestamp() * 1000.0
    except (ValueError, OverflowError, OSError):
        return None
