"""Cell extraction for delimited text and spreadsheets.

This module turns raw file content into a header list and untyped rows.
It never interprets cell types; that is the coercion stage's job.
"""

from __future__ import annotations

import io
import re
import zipfile
from typing import Any, Iterable, Sequence

from core.constants import EMPTY_HEADER_PREFIX
from core.errors import ChronotabDependencyError, ChronotabIngestError
from core.types import RawRow, RawTable, RawValue

_LINE_BREAK_PATTERN = re.compile(r"\r\n|\n")
# A comma separates fields only when an even number of quotes follows it.
_FIELD_SEPARATOR_PATTERN = re.compile(r',(?=(?:(?:[^"]*"){2})*[^"]*$)')


def extract_delimited_text(text: str) -> RawTable:
    """Extract headers and positional rows from comma-delimited text.

    Args:
        text: Decoded file content.

    Returns:
        Raw table; empty when fewer than two lines remain.
    """
    lines = _LINE_BREAK_PATTERN.split(text.strip())
    if len(lines) < 2:
        return RawTable.empty()
    headers = repair_headers(split_delimited_line(lines[0]))
    rows: list[RawRow] = []
    for line in lines[1:]:
        if not line.strip():
            continue
        rows.append(tuple(split_delimited_line(line)))
    return RawTable(headers=headers, rows=tuple(rows))


def split_delimited_line(line: str) -> list[str]:
    """Split one line on unquoted commas and clean each field.

    Args:
        line: One line of delimited text.

    Returns:
        Trimmed fields with one layer of wrapping quotes removed.
    """
    return [strip_wrapping_quotes(field.strip()) for field in _FIELD_SEPARATOR_PATTERN.split(line)]


def strip_wrapping_quotes(value: str) -> str:
    """Remove one layer of wrapping double quotes when both ends carry one."""
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def extract_spreadsheet(content: bytes) -> RawTable:
    """Extract headers and positional rows from a workbook's first sheet.

    Args:
        content: Raw ``.xlsx`` bytes.

    Returns:
        Raw table; empty when the sheet has fewer than two rows.

    Raises:
        ChronotabIngestError: If the workbook cannot be opened.
        ChronotabDependencyError: If openpyxl is missing.
    """
    sheet_rows = _read_first_sheet_rows(content)
    if len(sheet_rows) < 2:
        return RawTable.empty()
    header_cells = _trim_trailing_empty(sheet_rows[0])
    headers = repair_headers(_header_text(cell) for cell in header_cells)
    rows = tuple(tuple(row) for row in sheet_rows[1:] if not _is_empty_row(row))
    return RawTable(headers=headers, rows=rows)


def repair_headers(raw_headers: Iterable[str]) -> tuple[str, ...]:
    """Name empty headers by position and suffix duplicates.

    Args:
        raw_headers: Cleaned header texts in source order.

    Returns:
        Unique header names.
    """
    headers: list[str] = []
    seen: set[str] = set()
    for position, raw_header in enumerate(raw_headers, 1):
        base_name = raw_header or f"{EMPTY_HEADER_PREFIX}{position}"
        header = base_name
        suffix = 2
        while header in seen:
            header = f"{base_name}_{suffix}"
            suffix += 1
        seen.add(header)
        headers.append(header)
    return tuple(headers)


def _read_first_sheet_rows(content: bytes) -> list[Sequence[RawValue]]:
    """Load cached cell values of the first worksheet."""
    load_workbook, invalid_file_error = _import_openpyxl()
    try:
        workbook = load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    except (invalid_file_error, zipfile.BadZipFile, KeyError, OSError) as error:
        raise ChronotabIngestError(
            f"Failed to open spreadsheet: {error}. "
            "Provide a valid .xlsx workbook or export the sheet as CSV."
        ) from error
    try:
        if not workbook.sheetnames:
            return []
        worksheet = workbook[workbook.sheetnames[0]]
        return [tuple(row) for row in worksheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def _import_openpyxl() -> tuple[Any, type[Exception]]:
    """Import openpyxl lazily with a descriptive failure."""
    try:
        from openpyxl import load_workbook
        from openpyxl.utils.exceptions import InvalidFileException
    except ImportError as error:
        raise ChronotabDependencyError(
            "Spreadsheet support requires openpyxl, but it is not installed. "
            "Install openpyxl to ingest .xlsx files."
        ) from error
    return load_workbook, InvalidFileException


def _header_text(cell: RawValue) -> str:
    if cell is None:
        return ""
    return str(cell).strip()


def _trim_trailing_empty(cells: Sequence[RawValue]) -> list[RawValue]:
    trimmed = list(cells)
    while trimmed and _header_text(trimmed[-1]) == "":
        trimmed.pop()
    return trimmed


def _is_empty_row(row: Sequence[RawValue]) -> bool:
    return all(cell is None or cell == "" for cell in row)
