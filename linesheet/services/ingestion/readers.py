"""File readers turning CSV text and Excel workbooks into raw string tables."""

import io
import logging
import re
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time
from typing import Any

import xlrd
from openpyxl import load_workbook

from .constants import DELIMITER_CANDIDATES
from .errors import IngestionError, ReadFailureError, UnsupportedFormatError

logger = logging.getLogger(__name__)

RawTable = list[list[str]]

_LINE_BREAK = re.compile(r"\r?\n")


def get_file_extension(filename: str | None) -> str:
    """Extract the lowercase file extension from a filename."""
    if not filename:
        return ""
    return filename.rsplit(".", 1)[-1].lower() if "." in filename else ""


# =============================================================================
# Delimited text
# =============================================================================


def decode_text(content: bytes) -> str:
    """Decode uploaded text, trying UTF-8 (with or without BOM) then Latin-1."""
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.debug("Text is not valid UTF-8, falling back to Latin-1")
        return content.decode("latin-1")


def detect_delimiter(line: str) -> str:
    """Pick the delimiter that occurs most often in a line.

    Candidates are comma, tab, semicolon and pipe. A count must beat the
    previous best outright, so comma wins when nothing occurs.
    """
    best = ","
    best_count = 0
    for candidate in DELIMITER_CANDIDATES:
        count = line.count(candidate)
        if count > best_count:
            best = candidate
            best_count = count
    return best


def _strip_cell(value: str) -> str:
    value = value.strip()
    if value[:1] in ("'", '"'):
        value = value[1:]
    if value[-1:] in ("'", '"'):
        value = value[:-1]
    return value.strip()


def split_delimited_line(line: str, delimiter: str) -> list[str]:
    """Split one line into cells, honoring double-quoted fields.

    A double quote toggles quoting and is not kept; the delimiter only
    separates cells outside quotes.
    """
    cells: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            cells.append(_strip_cell("".join(current)))
            current = []
        else:
            current.append(char)
    cells.append(_strip_cell("".join(current)))
    return cells


def read_delimited_text(text: str) -> RawTable:
    """Parse CSV-like text into a raw table.

    Blank lines are dropped and the delimiter is sniffed from the first
    remaining line.

    Args:
        text: Decoded file text.

    Returns:
        Rows of string cells, or an empty table when fewer than two
        lines remain.
    """
    lines = [line for line in _LINE_BREAK.split(text) if line.strip()]
    if len(lines) < 2:
        return []

    delimiter = detect_delimiter(lines[0])
    logger.debug("Detected delimiter %r", delimiter)
    return [split_delimited_line(line, delimiter) for line in lines]


# =============================================================================
# Workbooks
# =============================================================================


def _cell_to_text(value: Any) -> str:
    """Render a workbook cell value as text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value).strip()


def _to_table(rows: Iterable[Sequence[Any]]) -> RawTable:
    """Convert row values to a string table, keeping blank rows."""
    return [[_cell_to_text(value) for value in row] for row in rows]


def _drop_blank_rows(table: RawTable) -> RawTable:
    """Remove fully blank rows and pad the rest to one width."""
    table = [row for row in table if any(cell for cell in row)]
    width = max((len(row) for row in table), default=0)
    return [row + [""] * (width - len(row)) for row in table]


def _read_xlsx_sheets(content: bytes) -> list[tuple[str, RawTable]]:
    wb = load_workbook(filename=io.BytesIO(content), read_only=True, data_only=True)
    try:
        return [(ws.title, _to_table(ws.iter_rows(values_only=True))) for ws in wb.worksheets]
    finally:
        wb.close()


def _xls_cell_value(cell: Any, datemode: int) -> Any:
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate_as_datetime(cell.value, datemode)
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
        return None
    return cell.value


def _read_xls_sheets(content: bytes) -> list[tuple[str, RawTable]]:
    book = xlrd.open_workbook(file_contents=content)
    try:
        sheets = []
        for sheet in book.sheets():
            rows = (
                [_xls_cell_value(sheet.cell(r, c), book.datemode) for c in range(sheet.ncols)]
                for r in range(sheet.nrows)
            )
            sheets.append((sheet.name, _to_table(rows)))
        return sheets
    finally:
        book.release_resources()


def select_best_sheet(sheets: Sequence[tuple[str, RawTable]]) -> RawTable:
    """Pick the sheet with the most rows; ties keep workbook order.

    Args:
        sheets: (sheet name, table) pairs in workbook order.

    Returns:
        The chosen table, or an empty table when there are no sheets.
    """
    if not sheets:
        return []

    best_name, best_table = sheets[0]
    for name, table in sheets[1:]:
        if len(table) > len(best_table):
            best_name, best_table = name, table

    logger.debug("Selected sheet '%s' with %d rows", best_name, len(best_table))
    return best_table


def read_workbook(content: bytes, extension: str) -> RawTable:
    """Read an Excel workbook into a raw table from its richest sheet.

    Args:
        content: Raw workbook bytes.
        extension: "xlsx" (read with openpyxl) or "xls" (read with xlrd).

    Returns:
        Rows of string cells, or an empty table when the chosen sheet has
        fewer than two rows.

    Raises:
        UnsupportedFormatError: If the extension is not a workbook type.
        ReadFailureError: If the workbook cannot be opened or read.
    """
    try:
        if extension == "xlsx":
            sheets = _read_xlsx_sheets(content)
        elif extension == "xls":
            sheets = _read_xls_sheets(content)
        else:
            raise UnsupportedFormatError()
    except IngestionError:
        raise
    except Exception as e:
        raise ReadFailureError(e) from e

    # Blank spacer rows still count towards the row total of each sheet
    table = select_best_sheet(sheets)
    if len(table) < 2:
        return []
    return _drop_blank_rows(table)
