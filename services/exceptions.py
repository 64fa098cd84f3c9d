"""Exceptions raised by the spreadsheet import pipeline."""

from typing import List


class WorkbookImportError(Exception):
    """Base exception for spreadsheet import failures."""


class SpreadsheetParseError(WorkbookImportError):
    """Raised when an uploaded workbook cannot be decoded."""


class EmptyWorkbookError(WorkbookImportError):
    """Raised when the first sheet of a workbook has no data rows."""


class ImportValidationError(WorkbookImportError):
    """Raised when one or more rows fail validation; nothing was persisted."""

    def __init__(self, errors: List[str], processed_count: int, total_rows: int):
        super().__init__(f"{len(errors)} row(s) failed validation")
        self.errors = errors
        self.processed_count = processed_count
        self.total_rows = total_rows
