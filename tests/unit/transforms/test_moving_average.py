"""Unit tests for moving-average smoothing."""

from __future__ import annotations

import pytest

from core.types import NumericCell, TextCell
from transforms.moving_average import smooth_rows


def _rows(*values: object) -> list[dict]:
    rows = []
    for index, value in enumerate(values):
        record = {"Tag": TextCell(f"2024-01-0{index + 1}")}
        if isinstance(value, (int, float)):
            record["Wert"] = NumericCell(float(value))
        elif isinstance(value, str):
            record["Wert"] = TextCell(value)
        rows.append(record)
    return rows


@pytest.mark.parametrize("window", [0, 1, -3])
def test_small_windows_are_identity(window: int) -> None:
    """Windows of one or less should leave every value unchanged."""
    rows = _rows(1, 2, 3)

    smoothed = smooth_rows(rows, ["Wert"], window)

    assert smoothed == rows and len(smoothed) == len(rows)


def test_window_shrinks_near_start() -> None:
    """Early rows should average only the rows seen so far."""
    smoothed = smooth_rows(_rows(3, 6, 9, 12), ["Wert"], 3)

    assert [record["Wert"].value for record in smoothed] == [3.0, 4.5, 6.0, 9.0]


def test_non_numeric_cells_count_as_zero() -> None:
    """Text and absent cells add nothing but still widen the divisor."""
    smoothed = smooth_rows(_rows(4, "n/a", None, 8), ["Wert"], 2)

    # Excluding non-numeric cells from the divisor would give 4.0 for the second row.
    assert [record["Wert"].value for record in smoothed] == [4.0, 2.0, 0.0, 4.0]


def test_results_are_rounded_to_two_decimals() -> None:
    """Smoothed values should carry at most two decimals."""
    smoothed = smooth_rows(_rows(1, 1, 2), ["Wert"], 3)

    assert smoothed[2]["Wert"] == NumericCell(1.33)


def test_input_rows_are_not_mutated() -> None:
    """Smoothing should copy rows and keep unselected columns."""
    rows = _rows(2, 4)

    smoothed = smooth_rows(rows, ["Wert"], 2)

    assert rows[1]["Wert"] == NumericCell(4.0)
    assert smoothed[1]["Wert"] == NumericCell(3.0)
    assert smoothed[1]["Tag"] is rows[1]["Tag"]
