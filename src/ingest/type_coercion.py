"""Raw cell type coercion.

This module classifies raw values as numeric or text cells. Text
coercion runs an ordered list of strategies so date-shaped strings are
claimed before the numeric check can turn them into numbers.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Callable, Mapping, Sequence

from core.date_formats import is_date_text
from core.types import Cell, NumericCell, RawRow, RawValue, Record, TextCell
from ingest.cell_extractor import strip_wrapping_quotes

_NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass(frozen=True)
class TextCoercer:
    """One ordered text coercion strategy.

    Attributes:
        name: Strategy identifier.
        accepts: Predicate over the cleaned text.
        build: Cell constructor for accepted text.
    """

    name: str
    accepts: Callable[[str], bool]
    build: Callable[[str], Cell]


def _is_finite_number_text(text: str) -> bool:
    return _NUMBER_PATTERN.fullmatch(text) is not None and math.isfinite(float(text))


TEXT_COERCERS: tuple[TextCoercer, ...] = (
    TextCoercer(name="date", accepts=is_date_text, build=TextCell),
    TextCoercer(
        name="number",
        accepts=_is_finite_number_text,
        build=lambda text: NumericCell(float(text)),
    ),
    TextCoercer(name="text", accepts=lambda text: True, build=TextCell),
)


def coerce_value(value: RawValue) -> Cell | None:
    """Coerce one raw value into a cell.

    Args:
        value: Raw value from the extractor.

    Returns:
        Numeric or text cell, or None when the value is absent.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return _coerce_text(value)
    if isinstance(value, bool):
        return TextCell("TRUE" if value else "FALSE")
    if isinstance(value, (int, float)):
        number = float(value)
        if math.isfinite(number):
            return NumericCell(number)
        return TextCell(str(value))
    if isinstance(value, datetime):
        # Workbooks store plain dates as midnight datetimes.
        if value.time() == time(0, 0):
            return TextCell(value.date().isoformat())
        return TextCell(value.isoformat(timespec="seconds"))
    if isinstance(value, (date, time)):
        return TextCell(value.isoformat())
    return TextCell(str(value))


def coerce_rows(headers: Sequence[str], raw_rows: Sequence[RawRow]) -> list[Record]:
    """Coerce raw rows into sparse records, dropping empty rows.

    Args:
        headers: Unique column names.
        raw_rows: Positional or header-keyed raw rows.

    Returns:
        Records holding only present cells.
    """
    records: list[Record] = []
    for raw_row in raw_rows:
        record: dict[str, Cell] = {}
        for index, header in enumerate(headers):
            cell = coerce_value(_raw_value_at(raw_row, header, index))
            if cell is not None:
                record[header] = cell
        if record:
            records.append(record)
    return records


def _coerce_text(value: str) -> Cell | None:
    text = strip_wrapping_quotes(value.strip())
    if not text:
        return None
    for coercer in TEXT_COERCERS:
        if coercer.accepts(text):
            return coercer.build(text)
    return TextCell(text)


def _raw_value_at(raw_row: RawRow, header: str, index: int) -> RawValue:
    if isinstance(raw_row, Mapping):
        return raw_row.get(header)
    if index < len(raw_row):
        return raw_row[index]
    return None
