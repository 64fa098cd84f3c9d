"""
Import Service - Spreadsheet import orchestration.

Sequences parsing, validation, invitation code assignment and persistence for
the two spreadsheet uploads:

- guest invitations: all-or-nothing validation, codes assigned, records
  returned to the caller who persists them one by one;
- entourage members: validated, then inserted one record at a time with
  per-record failures reported and the remaining rows still inserted.
"""

import logging
import random
from typing import Any, Callable, Dict, List, Optional, Set

from services.exceptions import EmptyWorkbookError, ImportValidationError
from services.field_mapping import to_camel_keys
from services.invitation_codes import assign_invitation_codes
from services.spreadsheet_service import read_first_sheet_rows
from services.validation_service import validate_entourage_rows, validate_guest_rows

logger = logging.getLogger(__name__)

GUEST_EMPTY_MESSAGE = 'Excel file is empty or has no data'
ENTOURAGE_EMPTY_MESSAGE = 'Excel file is empty'


class ImportService:
    """
    Framework-agnostic spreadsheet import service.

    The repository only needs ``create_entourage_member(data)`` for entourage
    imports and ``existing_invitation_codes()`` when stored codes are checked.
    """

    def __init__(
        self,
        repository,
        progress_callback: Optional[Callable[[str, float, str], None]] = None,
        check_existing_codes: bool = False,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize import service.

        Args:
            repository: Persistence adapter (see ``WeddingRepository``)
            progress_callback: Optional callback for progress updates
                              Signature: callback(stage: str, percent: float, message: str)
            check_existing_codes: Also avoid invitation codes already stored
            rng: Random source for invitation codes (tests pass a seeded one)
        """
        self.repository = repository
        self.progress_callback = progress_callback or (lambda *args: None)
        self.check_existing_codes = check_existing_codes
        self.rng = rng

    def _emit_progress(self, stage: str, percent: float, message: str):
        """Emit progress update via callback."""
        self.progress_callback(stage, percent, message)
        logger.info(f"Import progress: {stage} ({percent:.1f}%) - {message}")

    def _parse(self, content: bytes, filename: str, empty_message: str) -> List[Dict[str, Any]]:
        self._emit_progress('parsing', 0, f'Reading {filename}')
        rows = read_first_sheet_rows(content, filename)
        if not rows:
            raise EmptyWorkbookError(empty_message)
        return rows

    # Guests

    def import_guest_workbook(self, content: bytes, filename: str) -> Dict[str, Any]:
        """Parse and prepare a guest invitation workbook (nothing is persisted)."""
        rows = self._parse(content, filename, GUEST_EMPTY_MESSAGE)
        return self.import_guest_rows(rows)

    def import_guest_rows(self, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Validate guest rows and assign invitation codes.

        Returns:
            {'guests': [...camelCase guests...], 'total_processed': int}

        Raises:
            ImportValidationError: If any row is invalid (no guest is returned)
        """
        self._emit_progress('validating', 30, f'Validating {len(rows)} guest rows')
        result = validate_guest_rows(rows)

        if result.errors:
            raise ImportValidationError(result.errors, processed_count=0, total_rows=len(rows))

        exclusion: Set[str] = set()
        if self.check_existing_codes:
            exclusion |= self.repository.existing_invitation_codes()

        self._emit_progress('assigning_codes', 70, f'Assigning codes to {len(result.records)} guests')
        guests = assign_invitation_codes(result.records, exclusion, self.rng)

        self._emit_progress('complete', 100, f'{len(guests)} guests ready')
        return {
            'guests': [to_camel_keys(guest) for guest in guests],
            'total_processed': len(guests),
        }

    # Entourage

    def import_entourage_workbook(self, content: bytes, filename: str) -> Dict[str, Any]:
        """Parse, validate and insert an entourage workbook."""
        rows = self._parse(content, filename, ENTOURAGE_EMPTY_MESSAGE)
        return self.import_entourage_rows(rows)

    def import_entourage_rows(self, rows: List[Dict[str, Any]]) -> Dict[str, Any]:
        """
        Validate entourage rows and insert each valid member.

        Returns:
            Summary dictionary:
            {
                'inserted_count': int,
                'total_processed': int,
                'errors': [...insert failures...],
                'members': [...inserted members...]
            }

        Raises:
            ImportValidationError: If any row is invalid (nothing is inserted)
        """
        self._emit_progress('validating', 20, f'Validating {len(rows)} entourage rows')
        result = validate_entourage_rows(rows)

        if result.errors:
            raise ImportValidationError(
                result.errors,
                processed_count=len(result.records),
                total_rows=len(rows)
            )

        inserted: List[Dict[str, Any]] = []
        insert_errors: List[str] = []
        total = len(result.records)

        for idx, member in enumerate(result.records):
            try:
                inserted.append(self.repository.create_entourage_member(member))
            except Exception as e:
                logger.error(f"Error inserting {member['name']}: {e}")
                insert_errors.append(f"Failed to insert {member['name']}: {e}")

            self._emit_progress(
                'inserting',
                20 + 80 * (idx + 1) / total,
                f'Inserted {len(inserted)}/{total} members'
            )

        return {
            'inserted_count': len(inserted),
            'total_processed': total,
            'errors': insert_errors,
            'members': inserted,
        }
