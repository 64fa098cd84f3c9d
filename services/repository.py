"""
Repository - Persistence adapter for the wedding RSVP service.

Wraps a SQLAlchemy session with the CRUD operations used by the API, the
import orchestrator and the CLI. Inputs are snake_case dictionaries (column
names); outputs are the camelCase dictionaries produced by ``to_dict()``.
Writes are flushed but not committed: the caller owns the transaction.
"""

import logging
from typing import Any, Dict, List, Optional, Set, Type

from sqlalchemy import case, func
from sqlalchemy.orm import Session

from backend.models.schema import (
    Base, Guest, RSVP, WeddingEvent, EntourageMember,
    WeddingAttire, WeddingLocation, PrenupPhoto
)

logger = logging.getLogger(__name__)

CONTENT_MODELS: Dict[str, Type[Base]] = {
    'schedule': WeddingEvent,
    'entourage': EntourageMember,
    'attire': WeddingAttire,
    'locations': WeddingLocation,
    'prenup': PrenupPhoto,
}

_CATEGORY_RANK = case(
    (EntourageMember.category == 'parents', 1),
    (EntourageMember.category == 'sponsors', 2),
    else_=3
)

CONTENT_ORDERING = {
    'schedule': (WeddingEvent.sort_order.asc(), WeddingEvent.event_time.asc()),
    'entourage': (_CATEGORY_RANK, EntourageMember.side.asc(), EntourageMember.sort_order.asc()),
    'attire': (WeddingAttire.sort_order.asc(), WeddingAttire.id.asc()),
    'locations': (WeddingLocation.sort_order.asc(), WeddingLocation.id.asc()),
    'prenup': (PrenupPhoto.sort_order.asc(), PrenupPhoto.created_at.asc(), PrenupPhoto.id.asc()),
}

# Columns managed by the database
_READ_ONLY_COLUMNS = {'id', 'created_at', 'updated_at'}


def _writable_fields(model: Type[Base], data: Dict[str, Any]) -> Dict[str, Any]:
    columns = {column.key for column in model.__table__.columns} - _READ_ONLY_COLUMNS
    return {key: value for key, value in data.items() if key in columns}


class WeddingRepository:
    """
    SQLAlchemy-backed store for guests, RSVPs and wedding content.
    """

    def __init__(self, session: Session):
        self.session = session

    # Guests

    def list_guests(self) -> List[Dict[str, Any]]:
        guests = self.session.query(Guest).order_by(Guest.created_at.desc(), Guest.name.asc()).all()
        return [guest.to_dict() for guest in guests]

    def get_guest(self, invitation_code: str) -> Optional[Dict[str, Any]]:
        guest = self.session.get(Guest, invitation_code)
        return guest.to_dict() if guest else None

    def existing_invitation_codes(self) -> Set[str]:
        """All invitation codes currently stored."""
        return {code for (code,) in self.session.query(Guest.invitation_code).all()}

    def create_guest(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert a guest invitation.

        Args:
            data: snake_case fields; ``invitation_code`` must be set

        Returns:
            Created guest (camelCase)
        """
        guest = Guest(**_writable_fields(Guest, data))
        self.session.add(guest)
        self.session.flush()
        self.session.refresh(guest)
        logger.info(f"Created guest {guest.invitation_code} ({guest.name})")
        return guest.to_dict()

    def update_guest(self, invitation_code: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Replace the editable fields of a guest; the code itself never changes."""
        guest = self.session.get(Guest, invitation_code)
        if not guest:
            return None

        fields = _writable_fields(Guest, data)
        fields.pop('invitation_code', None)
        for key, value in fields.items():
            setattr(guest, key, value)

        self.session.flush()
        self.session.refresh(guest)
        return guest.to_dict()

    def delete_guest(self, invitation_code: str) -> Optional[Dict[str, Any]]:
        """Delete a guest; RSVPs referencing it keep their data but lose the link."""
        guest = self.session.get(Guest, invitation_code)
        if not guest:
            return None

        deleted = guest.to_dict()
        self.session.query(RSVP).filter(RSVP.invitation_code == invitation_code)\
            .update({RSVP.invitation_code: None}, synchronize_session=False)
        self.session.delete(guest)
        self.session.flush()
        logger.info(f"Deleted guest {invitation_code}")
        return deleted

    def total_seats(self) -> int:
        return int(self.session.query(func.coalesce(func.sum(Guest.allocated_seats), 0)).scalar() or 0)

    # RSVPs

    def create_rsvp(self, data: Dict[str, Any]) -> Dict[str, Any]:
        rsvp = RSVP(**_writable_fields(RSVP, data))
        self.session.add(rsvp)
        self.session.flush()
        self.session.refresh(rsvp)
        logger.info(f"Recorded RSVP {rsvp.id} from {rsvp.name} ({rsvp.will_attend})")
        return rsvp.to_dict()

    def list_rsvps(self) -> List[Dict[str, Any]]:
        rsvps = self.session.query(RSVP).order_by(RSVP.created_at.desc(), RSVP.id.desc()).all()
        return [rsvp.to_dict() for rsvp in rsvps]

    def find_rsvp_by_invitation_code(self, invitation_code: str) -> Optional[Dict[str, Any]]:
        rsvp = self.session.query(RSVP)\
            .filter(RSVP.invitation_code == invitation_code)\
            .order_by(RSVP.created_at.desc(), RSVP.id.desc())\
            .first()
        return rsvp.to_dict() if rsvp else None

    def rsvp_stats(self) -> Dict[str, Dict[str, int]]:
        """Count RSVPs and guests per answer."""
        rows = self.session.query(
            RSVP.will_attend,
            func.count(RSVP.id),
            func.coalesce(func.sum(RSVP.number_of_guests), 0)
        ).group_by(RSVP.will_attend).all()

        stats = {
            'attending': {'count': 0, 'totalGuests': 0},
            'notAttending': {'count': 0, 'totalGuests': 0},
        }
        for will_attend, count, total_guests in rows:
            key = 'attending' if will_attend == 'yes' else 'notAttending'
            stats[key] = {'count': int(count), 'totalGuests': int(total_guests)}

        return stats

    def clear_rsvps(self) -> int:
        """Delete every RSVP; returns the number deleted."""
        deleted = self.session.query(RSVP).delete(synchronize_session=False)
        self.session.flush()
        logger.info(f"Cleared {deleted} RSVPs")
        return deleted

    # Wedding content

    def list_content(self, kind: str) -> List[Dict[str, Any]]:
        model = CONTENT_MODELS[kind]
        rows = self.session.query(model).order_by(*CONTENT_ORDERING[kind]).all()
        return [row.to_dict() for row in rows]

    def get_content(self, kind: str, item_id: int) -> Optional[Dict[str, Any]]:
        row = self.session.get(CONTENT_MODELS[kind], item_id)
        return row.to_dict() if row else None

    def create_content(self, kind: str, data: Dict[str, Any]) -> Dict[str, Any]:
        model = CONTENT_MODELS[kind]
        row = model(**_writable_fields(model, data))
        self.session.add(row)
        self.session.flush()
        self.session.refresh(row)
        logger.info(f"Created {kind} item {row.id}")
        return row.to_dict()

    def update_content(self, kind: str, item_id: int, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        model = CONTENT_MODELS[kind]
        row = self.session.get(model, item_id)
        if not row:
            return None

        for key, value in _writable_fields(model, data).items():
            setattr(row, key, value)

        self.session.flush()
        self.session.refresh(row)
        return row.to_dict()

    def delete_content(self, kind: str, item_id: int) -> Optional[Dict[str, Any]]:
        model = CONTENT_MODELS[kind]
        row = self.session.get(model, item_id)
        if not row:
            return None

        deleted = row.to_dict()
        self.session.delete(row)
        self.session.flush()
        logger.info(f"Deleted {kind} item {item_id}")
        return deleted

    def create_entourage_member(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Insert one entourage member inside a savepoint.

        A failing insert rolls back only its own savepoint, so the session
        stays usable for the remaining members of an import.
        """
        with self.session.begin_nested():
            member = EntourageMember(**_writable_fields(EntourageMember, data))
            self.session.add(member)
            self.session.flush()
        self.session.refresh(member)
        return member.to_dict()
