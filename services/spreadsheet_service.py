"""
Spreadsheet Service - Workbook decoding and generation.

Reads the first sheet of an uploaded workbook into row dictionaries keyed by
the header row, and writes single-sheet workbooks for templates and exports.
"""

import io
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import openpyxl
import xlrd
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from services.exceptions import SpreadsheetParseError

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def _clean_header(value: Any) -> Optional[str]:
    if value is None:
        return None
    header = str(value).strip()
    return header or None


def _clean_value(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, str) and value == '':
        return None
    return value


def _rows_to_dicts(raw_rows: List[Sequence[Any]]) -> List[Dict[str, Any]]:
    """
    Convert raw sheet rows into dictionaries keyed by the header row.

    Empty cells are left out of each dictionary and rows without any value
    are skipped, so a blank line in the sheet does not produce a record.
    """
    if not raw_rows:
        return []

    headers = [_clean_header(value) for value in raw_rows[0]]
    records = []

    for raw in raw_rows[1:]:
        record = {}
        for header, value in zip(headers, raw):
            value = _clean_value(value)
            if header is None or value is None:
                continue
            record[header] = value
        if record:
            records.append(record)

    return records


def _read_xlsx(content: bytes) -> List[Sequence[Any]]:
    workbook = openpyxl.load_workbook(io.BytesIO(content), read_only=True, data_only=True)
    try:
        sheet = workbook.worksheets[0]
        return [row for row in sheet.iter_rows(values_only=True)]
    finally:
        workbook.close()


def _read_xls(content: bytes) -> List[Sequence[Any]]:
    book = xlrd.open_workbook(file_contents=content)
    sheet = book.sheet_by_index(0)
    rows = []
    for row_idx in range(sheet.nrows):
        row = []
        for cell in sheet.row(row_idx):
            if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK):
                row.append(None)
            elif cell.ctype == xlrd.XL_CELL_BOOLEAN:
                row.append(bool(cell.value))
            else:
                row.append(cell.value)
        rows.append(row)
    return rows


def read_first_sheet_rows(content: bytes, filename: str) -> List[Dict[str, Any]]:
    """
    Decode the first sheet of a workbook into row dictionaries.

    Args:
        content: Raw workbook bytes
        filename: Original filename; its extension selects the reader

    Returns:
        Rows in sheet order, keyed by header. An empty list means the sheet
        has no data rows.

    Raises:
        SpreadsheetParseError: If the workbook cannot be decoded
    """
    ext = Path(filename or '').suffix.lower()

    try:
        if ext == '.xls':
            raw_rows = _read_xls(content)
        else:
            raw_rows = _read_xlsx(content)
    except Exception as e:
        logger.error(f"Failed to parse workbook {filename}: {e}")
        raise SpreadsheetParseError(f"Could not read workbook '{filename}': {e}") from e

    rows = _rows_to_dicts(raw_rows)
    logger.info(f"Parsed {len(rows)} data rows from {filename}")
    return rows


def build_workbook(
    rows: List[Dict[str, Any]],
    sheet_title: str,
    column_widths: Optional[Sequence[int]] = None,
    headers: Optional[Sequence[str]] = None
) -> bytes:
    """
    Write rows to a single-sheet .xlsx workbook.

    Args:
        rows: Row dictionaries; values are written in header order
        sheet_title: Worksheet name
        column_widths: Optional widths (characters) per column
        headers: Column order; defaults to the keys of the first row

    Returns:
        Workbook bytes
    """
    if headers is None:
        headers = list(rows[0].keys()) if rows else []

    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = sheet_title

    sheet.append(list(headers))
    for cell in sheet[1]:
        cell.font = Font(bold=True)

    for row in rows:
        sheet.append([row.get(header) for header in headers])

    for idx, width in enumerate(column_widths or [], start=1):
        sheet.column_dimensions[get_column_letter(idx)].width = width

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
