"""Moving-average smoothing for display views.

Each selected column is replaced by the mean over a left-anchored window
that shrinks near the start. Non-numeric and absent cells add ``0`` to
the sum but still count toward the divisor.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from core.constants import SMOOTHING_DECIMALS
from core.types import Cell, NumericCell, Record


def smooth_rows(rows: Sequence[Record], columns: Iterable[str], window: int) -> list[Record]:
    """Apply a running mean to selected columns.

    Args:
        rows: Records in display order, never mutated.
        columns: Numeric columns to smooth. Every output row receives a
            value for each of them, including rows where the cell was absent,
            so callers pass only columns from the table headers.
        window: Window size; values of 1 or less disable smoothing.

    Returns:
        New list of shallow-copied records.
    """
    if window <= 1:
        return list(rows)
    selected = tuple(columns)
    smoothed: list[Record] = []
    for index, record in enumerate(rows):
        window_rows = rows[max(0, index - window + 1) : index + 1]
        smoothed_record: dict[str, Cell] = dict(record)
        for column in selected:
            total = sum(_numeric_or_zero(window_row.get(column)) for window_row in window_rows)
            smoothed_record[column] = NumericCell(
                round(total / len(window_rows), SMOOTHING_DECIMALS)
            )
        smoothed.append(smoothed_record)
    return smoothed


def _numeric_or_zero(cell: Cell | None) -> float:
    if isinstance(cell, NumericCell):
        return cell.value
    return 0.0
