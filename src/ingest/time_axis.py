"""Time-axis detection from header names."""

from __future__ import annotations

from typing import Iterable

from core.constants import TIME_AXIS_KEYWORDS
from core.types import TimeAxis


def detect_time_axis(
    headers: Iterable[str],
    keywords: Iterable[str] = TIME_AXIS_KEYWORDS,
) -> TimeAxis:
    """Pick the first header whose lower-cased name contains a time keyword.

    Args:
        headers: Column names in original order.
        keywords: Lower-case substrings marking a chronological column.

    Returns:
        Detection result with the axis header when found.
    """
    keyword_list = tuple(keywords)
    for header in headers:
        lowered = header.lower()
        if any(keyword in lowered for keyword in keyword_list):
            return TimeAxis(has_time_axis=True, axis_header=header)
    return TimeAxis(has_time_axis=False)
