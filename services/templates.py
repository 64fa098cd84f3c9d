"""
Downloadable spreadsheet templates and the RSVP export workbook.
"""

from typing import Any, Dict, List

from services.spreadsheet_service import build_workbook

GUEST_TEMPLATE_COLUMNS = ['name', 'email', 'allocatedSeats', 'notes']
GUEST_TEMPLATE_WIDTHS = [25, 30, 15, 30]
GUEST_TEMPLATE_FILENAME = 'guest-invitation-template.xlsx'

ENTOURAGE_TEMPLATE_COLUMNS = ['name', 'role', 'category', 'side', 'description', 'sortOrder']
ENTOURAGE_TEMPLATE_WIDTHS = [30, 25, 15, 12, 40, 12]
ENTOURAGE_TEMPLATE_FILENAME = 'wedding-entourage-template.xlsx'

RSVP_EXPORT_COLUMNS = [
    'id', 'name', 'email', 'phone', 'willAttend', 'numberOfGuests',
    'dietaryRequirements', 'songRequest', 'message', 'invitationCode', 'createdAt'
]
RSVP_EXPORT_FILENAME = 'rsvp-data.xlsx'

GUEST_SAMPLE_ROWS: List[Dict[str, Any]] = [
    {'name': 'John & Jane Smith', 'email': 'john.smith@email.com', 'allocatedSeats': 2,
     'notes': 'Couple from work'},
    {'name': 'The Johnson Family', 'email': 'johnson.family@email.com', 'allocatedSeats': 4,
     'notes': 'Parents + 2 children'},
    {'name': 'Maria Garcia', 'email': '', 'allocatedSeats': 1, 'notes': 'No email available'},
]

# Parents use bride/groom, sponsors use male/female, everyone else any side
ENTOURAGE_SAMPLE_ROWS: List[Dict[str, Any]] = [
    {'name': 'Josefina Igaya', 'role': 'Mother of the Bride', 'category': 'parents',
     'side': 'bride', 'description': '', 'sortOrder': 1},
    {'name': 'Rafael Gutierrez', 'role': 'Father of the Groom', 'category': 'parents',
     'side': 'groom', 'description': '', 'sortOrder': 2},
    {'name': 'Ponciano Rivera', 'role': 'Principal Sponsor', 'category': 'sponsors',
     'side': 'male', 'description': '', 'sortOrder': 1},
    {'name': 'Milagros Gutierrez', 'role': 'Principal Sponsor', 'category': 'sponsors',
     'side': 'female', 'description': '', 'sortOrder': 1},
    {'name': 'Rommel Columbano', 'role': 'Best Man', 'category': 'other',
     'side': 'both', 'description': '', 'sortOrder': 1},
    {'name': 'Kylie Gwyn Aguirre', 'role': 'Flower Girl', 'category': 'other',
     'side': 'both', 'description': '', 'sortOrder': 2},
]


def guest_template() -> bytes:
    """Guest invitation template with sample rows."""
    return build_workbook(
        GUEST_SAMPLE_ROWS,
        'Guest Invitations',
        column_widths=GUEST_TEMPLATE_WIDTHS,
        headers=GUEST_TEMPLATE_COLUMNS
    )


def entourage_template() -> bytes:
    """Entourage template with one sample row per category and side rule."""
    return build_workbook(
        ENTOURAGE_SAMPLE_ROWS,
        'Wedding Entourage',
        column_widths=ENTOURAGE_TEMPLATE_WIDTHS,
        headers=ENTOURAGE_TEMPLATE_COLUMNS
    )


def rsvp_export(rsvps: List[Dict[str, Any]]) -> bytes:
    """All RSVPs (camelCase dictionaries) as a single-sheet workbook."""
    return build_workbook(rsvps, 'RSVPs', headers=RSVP_EXPORT_COLUMNS)
