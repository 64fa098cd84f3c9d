"""
Validation Service - Row validation for spreadsheet imports.

Each domain (guest invitations, entourage members) declares an ordered list
of ``(predicate, message)`` rules. Rows are checked in sheet order; the first
failing rule is the only error reported for that row. Validators never raise:
errors are accumulated as ``"Row N: <message>"`` strings where N is the
spreadsheet row number (data index + 2, for the header row and 1-based rows).
"""

import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from backend.models.schema import ENTOURAGE_CATEGORIES, ENTOURAGE_SIDES, SIDES_BY_CATEGORY
from services.invitation_codes import CODE_ALPHABET, CODE_LENGTH

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r'\S+@\S+\.\S+')
INVITATION_CODE_PATTERN = re.compile(rf'^[{CODE_ALPHABET}]{{{CODE_LENGTH}}}$')

# Header row plus 1-based numbering
ROW_NUMBER_OFFSET = 2

Rule = Tuple[Callable[[Dict[str, Any]], bool], str]


@dataclass
class ValidationResult:
    """Outcome of validating a batch of rows."""

    records: List[Dict[str, Any]] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def is_text(value: Any) -> bool:
    """True for strings with non-blank content."""
    return isinstance(value, str) and value.strip() != ''


def is_number(value: Any) -> bool:
    """True for finite ints/floats; booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def to_number(value: Any) -> Optional[float]:
    """Coerce numbers and numeric strings; ``None`` when not numeric."""
    if is_number(value):
        return value
    if is_text(value):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def optional_text(value: Any) -> Optional[str]:
    """Trimmed string, or ``None`` for blank/non-string values."""
    return value.strip() if is_text(value) else None


class RowValidator:
    """
    Base rule-chain validator.

    Subclasses define ``rules`` and ``normalize``. When ``all_or_nothing`` is
    set, a batch with any error yields no records at all.
    """

    rules: List[Rule] = []
    all_or_nothing = False
    label = 'row'

    def normalize(self, row: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError

    def first_error(self, row: Dict[str, Any]) -> Optional[str]:
        """Return the message of the first failing rule, if any."""
        for predicate, message in self.rules:
            if not predicate(row):
                return message
        return None

    def validate(self, rows: List[Dict[str, Any]]) -> ValidationResult:
        """
        Validate rows in order, collecting records and per-row errors.

        Args:
            rows: Row dictionaries as read from the spreadsheet

        Returns:
            ValidationResult with normalized records and error strings
        """
        result = ValidationResult()

        for index, row in enumerate(rows):
            row_number = index + ROW_NUMBER_OFFSET
            message = self.first_error(row)

            if message:
                result.errors.append(f"Row {row_number}: {message}")
                continue

            result.records.append(self.normalize(row))

        if result.errors:
            logger.warning(
                f"{self.label} validation: {len(result.errors)} of {len(rows)} rows rejected"
            )
            if self.all_or_nothing:
                result.records = []
        else:
            logger.info(f"{self.label} validation: all {len(rows)} rows accepted")

        return result


def _seats_valid(row: Dict[str, Any]) -> bool:
    seats = row.get('allocatedSeats')
    return is_number(seats) and float(seats).is_integer() and seats >= 1


def _email_valid(row: Dict[str, Any]) -> bool:
    email = row.get('email')
    if not is_text(email):
        return True
    return EMAIL_PATTERN.search(email.strip()) is not None


def _code_valid(row: Dict[str, Any]) -> bool:
    code = row.get('invitationCode')
    if code is None or (isinstance(code, str) and code.strip() == ''):
        return True
    return isinstance(code, str) and INVITATION_CODE_PATTERN.match(code.strip()) is not None


def _sort_order_valid(row: Dict[str, Any]) -> bool:
    number = to_number(row.get('sortOrder'))
    return number is not None and float(number).is_integer()


class GuestRowValidator(RowValidator):
    """Validator for guest invitation rows (all-or-nothing)."""

    label = 'Guest'
    all_or_nothing = True
    rules: List[Rule] = [
        (lambda row: is_text(row.get('name')), 'Name is required'),
        (_seats_valid, 'Allocated seats must be a number greater than 0'),
        (_email_valid, 'Invalid email format'),
        (_code_valid, f'Invitation code must be {CODE_LENGTH} characters (A-Z, 0-9)'),
    ]

    def validate(self, rows: List[Dict[str, Any]]) -> ValidationResult:
        self.seen_codes = set()
        return super().validate(rows)

    def first_error(self, row: Dict[str, Any]) -> Optional[str]:
        message = super().first_error(row)
        if message:
            return message

        # Explicit codes must also be unique within the sheet
        code = optional_text(row.get('invitationCode'))
        if code:
            if code in self.seen_codes:
                return f'Duplicate invitation code {code}'
            self.seen_codes.add(code)
        return None

    def normalize(self, row: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'invitation_code': optional_text(row.get('invitationCode')),
            'name': row['name'].strip(),
            'email': optional_text(row.get('email')),
            'allocated_seats': int(row['allocatedSeats']),
            'notes': optional_text(row.get('notes')),
        }


def entourage_category(row: Dict[str, Any]) -> Any:
    """Category of a row, defaulting to ``other`` when blank or missing."""
    category = row.get('category')
    if category is None or (isinstance(category, str) and category.strip() == ''):
        return 'other'
    return category.strip() if isinstance(category, str) else category


def _side(row: Dict[str, Any]) -> Any:
    side = row.get('side')
    return side.strip() if isinstance(side, str) else side


def _side_rule(category: str) -> Callable[[Dict[str, Any]], bool]:
    allowed = SIDES_BY_CATEGORY[category]

    def predicate(row: Dict[str, Any]) -> bool:
        return entourage_category(row) != category or _side(row) in allowed
    return predicate


class EntourageRowValidator(RowValidator):
    """Validator for entourage rows; valid rows are kept alongside errors."""

    label = 'Entourage'
    rules: List[Rule] = [
        (lambda row: is_text(row.get('name')), 'Name is required'),
        (lambda row: is_text(row.get('role')), 'Role is required'),
        (
            lambda row: entourage_category(row) in ENTOURAGE_CATEGORIES,
            'Category must be "parents", "sponsors", or "other"'
        ),
        (_side_rule('parents'), 'For parents, side must be "bride" or "groom"'),
        (_side_rule('sponsors'), 'For sponsors, side must be "male" or "female"'),
        (_side_rule('other'), 'Side must be one of: ' + ', '.join(ENTOURAGE_SIDES)),
        (_sort_order_valid, 'sortOrder must be a number'),
    ]

    def normalize(self, row: Dict[str, Any]) -> Dict[str, Any]:
        description = row.get('description')
        return {
            'name': row['name'].strip(),
            'role': row['role'].strip(),
            'side': _side(row),
            'category': entourage_category(row),
            'description': str(description).strip() if description is not None else '',
            'sort_order': int(to_number(row['sortOrder'])),
        }


def validate_guest_rows(rows: List[Dict[str, Any]]) -> ValidationResult:
    """Validate guest invitation rows (all-or-nothing)."""
    return GuestRowValidator().validate(rows)


def validate_entourage_rows(rows: List[Dict[str, Any]]) -> ValidationResult:
    """Validate entourage rows (valid rows kept alongside errors)."""
    return EntourageRowValidator().validate(rows)
