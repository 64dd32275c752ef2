"""Unit tests for canonical timestamps and time sorting."""

from __future__ import annotations

from datetime import date, datetime

from core.types import NumericCell, Table, TextCell, TimeAxis
from transforms.time_sort import canonical_timestamp, sort_rows_by_time, sort_table


def _millis(year: int, month: int, day: int) -> float:
    return datetime(year, month, day).timestamp() * 1000.0


def test_iso_and_dotted_dates_use_local_midnight() -> None:
    """Explicit date shapes should ignore time parts and use local midnight."""
    assert canonical_timestamp(TextCell("2024-01-02")) == _millis(2024, 1, 2)
    assert canonical_timestamp(TextCell("2024-01-02T23:59:00")) == _millis(2024, 1, 2)
    assert canonical_timestamp(TextCell("02.01.2024")) == _millis(2024, 1, 2)
    assert canonical_timestamp(TextCell("2024/01/02")) == _millis(2024, 1, 2)


def test_numbers_and_date_objects_pass_through() -> None:
    """Numbers stay as-is and date objects use their epoch value."""
    assert canonical_timestamp(NumericCell(45293.0)) == 45293.0
    assert canonical_timestamp(datetime(2024, 1, 2, 6)) == datetime(2024, 1, 2, 6).timestamp() * 1000
    assert canonical_timestamp(date(2024, 1, 2)) == _millis(2024, 1, 2)


def test_generic_text_falls_back_to_date_parser() -> None:
    """Other recognizable date text should parse through the generic parser."""
    assert canonical_timestamp(TextCell("March 5, 2024")) == _millis(2024, 3, 5)


def test_unparsable_values_map_to_zero() -> None:
    """Free text and absent cells should map to zero."""
    values = [TextCell("kein Datum"), None]

    assert [canonical_timestamp(value) for value in values] == [0.0, 0.0]


def test_out_of_range_dates_roll_over() -> None:
    """Overflowing day and month components should resolve to a real date."""
    assert canonical_timestamp(TextCell("2024-02-30")) == _millis(2024, 3, 1)
    assert canonical_timestamp(TextCell("31.04.2024")) == _millis(2024, 5, 1)
    assert canonical_timestamp(TextCell("2024-13-45")) == _millis(2025, 2, 14)


def test_sort_is_stable_for_equal_timestamps() -> None:
    """Rows with equal or unparsable timestamps should keep input order."""
    rows = [
        {"Datum": TextCell("2024-01-02"), "id": NumericCell(1.0)},
        {"Datum": TextCell("unbekannt"), "id": NumericCell(2.0)},
        {"Datum": TextCell("2024-01-02 08:00"), "id": NumericCell(3.0)},
        {"id": NumericCell(4.0)},
        {"Datum": TextCell("2024-01-01"), "id": NumericCell(5.0)},
    ]

    ordered = sort_rows_by_time(rows, "Datum")

    assert [record["id"].value for record in ordered] == [2.0, 4.0, 5.0, 1.0, 3.0]


def test_sorting_sorted_rows_is_idempotent_and_monotonic() -> None:
    """Re-sorting should not move rows and timestamps should never decrease."""
    rows = [{"Datum": TextCell(text)} for text in ("03.02.2024", "2024-01-05", "2024-01-05", "x")]

    once = sort_rows_by_time(rows, "Datum")
    twice = sort_rows_by_time(once, "Datum")
    stamps = [canonical_timestamp(record.get("Datum")) for record in once]

    assert twice == once
    assert all(left <= right for left, right in zip(stamps, stamps[1:]))


def test_sort_table_without_axis_returns_same_table() -> None:
    """Tables without a time axis should be returned unchanged."""
    table = Table(headers=("A",), rows=({"A": TextCell("b")}, {"A": TextCell("a")}))

    assert sort_table(table, TimeAxis(has_time_axis=False)) is table
