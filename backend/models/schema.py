"""
SQLAlchemy models for the wedding RSVP service.

This module defines the database schema using SQLAlchemy ORM. Column names
are snake_case; every model exposes ``to_dict()`` which renders the
camelCase shape used on the wire.
"""

from sqlalchemy import (
    JSON, Column, Integer, String, Text, Time, TIMESTAMP,
    ForeignKey, CheckConstraint, Index, func, text
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import declarative_base, relationship

from services.field_mapping import snake_to_camel

Base = declarative_base()

ENTOURAGE_CATEGORIES = ('parents', 'sponsors', 'other')
ENTOURAGE_SIDES = ('bride', 'groom', 'male', 'female', 'both')
RSVP_ANSWERS = ('yes', 'no')

# Sides allowed for each entourage category
SIDES_BY_CATEGORY = {
    'parents': ('bride', 'groom'),
    'sponsors': ('male', 'female'),
    'other': ENTOURAGE_SIDES,
}


def _isoformat(value):
    return value.isoformat() if value is not None and hasattr(value, 'isoformat') else value


class SerializableMixin:
    """Render mapped columns as a camelCase dictionary."""

    def to_dict(self) -> dict:
        """Convert row to its camelCase dictionary representation."""
        return {
            snake_to_camel(column.key): _isoformat(getattr(self, column.key))
            for column in self.__table__.columns
        }


class Guest(SerializableMixin, Base):
    """A guest invitation, identified by its invitation code."""

    __tablename__ = 'guests'
    __table_args__ = (
        CheckConstraint('allocated_seats >= 1', name='guests_allocated_seats_check'),
        Index('idx_guests_name', 'name'),
        {'comment': 'Guest invitations issued for the wedding'}
    )

    invitation_code = Column(
        String(255),
        primary_key=True,
        nullable=False,
        comment='Immutable invitation code shared with the guest'
    )
    name = Column(
        String(255),
        nullable=False,
        comment='Guest or party name'
    )
    email = Column(
        String(255),
        nullable=True
    )
    allocated_seats = Column(
        Integer,
        nullable=False,
        server_default='1',
        comment='Number of seats reserved for this invitation'
    )
    notes = Column(
        Text,
        nullable=True
    )
    created_at = Column(
        TIMESTAMP,
        server_default=text('CURRENT_TIMESTAMP'),
        nullable=False
    )
    updated_at = Column(
        TIMESTAMP,
        server_default=text('CURRENT_TIMESTAMP'),
        onupdate=func.now(),
        nullable=False
    )

    rsvps = relationship('RSVP', back_populates='guest', passive_deletes=True)

    def __repr__(self):
        return f"<Guest(invitation_code='{self.invitation_code}', name='{self.name}')>"


class RSVP(SerializableMixin, Base):
    """A single RSVP submission."""

    __tablename__ = 'rsvps'
    __table_args__ = (
        CheckConstraint(
            "will_attend IN ('yes', 'no')",
            name='rsvps_will_attend_check'
        ),
        Index('idx_rsvps_invitation_code', 'invitation_code'),
        Index('idx_rsvps_will_attend', 'will_attend'),
        Index('idx_rsvps_created_at', 'created_at'),
        {'comment': 'RSVP submissions from guests'}
    )

    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        nullable=False
    )
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    will_attend = Column(
        String(10),
        nullable=False,
        comment='yes or no'
    )
    number_of_guests = Column(
        Integer,
        server_default='1',
        nullable=False
    )
    dietary_requirements = Column(Text, nullable=True)
    song_request = Column(Text, nullable=True)
    message = Column(Text, nullable=True)
    invitation_code = Column(
        String(255),
        ForeignKey('guests.invitation_code', ondelete='SET NULL'),
        nullable=True,
        comment='Invitation this RSVP answers, if any'
    )
    created_at = Column(
        TIMESTAMP,
        server_default=text('CURRENT_TIMESTAMP'),
        nullable=False
    )

    guest = relationship('Guest', back_populates='rsvps')

    def __repr__(self):
        return f"<RSVP(id={self.id}, name='{self.name}', will_attend='{self.will_attend}')>"


class WeddingEvent(SerializableMixin, Base):
    """An item of the wedding day schedule."""

    __tablename__ = 'wedding_events'
    __table_args__ = (
        Index('idx_wedding_events_sort_order', 'sort_order'),
        {'comment': 'Wedding day schedule'}
    )

    id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)
    event_name = Column(String(255), nullable=False)
    event_time = Column(Time, nullable=False)
    location = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    icon = Column(String(50), nullable=True, comment='Icon identifier for the UI')
    color = Column(String(50), nullable=True)
    sort_order = Column(Integer, server_default='0', nullable=False)
    created_at = Column(TIMESTAMP, server_default=text('CURRENT_TIMESTAMP'), nullable=False)
    updated_at = Column(
        TIMESTAMP,
        server_default=text('CURRENT_TIMESTAMP'),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self):
        return f"<WeddingEvent(id={self.id}, event_name='{self.event_name}')>"


class EntourageMember(SerializableMixin, Base):
    """A member of the wedding entourage."""

    __tablename__ = 'wedding_entourage'
    __table_args__ = (
        CheckConstraint(
            "side IN ('bride', 'groom', 'male', 'female', 'both')",
            name='wedding_entourage_side_check'
        ),
        CheckConstraint(
            "category IN ('parents', 'sponsors', 'other')",
            name='wedding_entourage_category_check'
        ),
        Index('idx_wedding_entourage_side', 'side'),
        Index('idx_wedding_entourage_sort_order', 'sort_order'),
        {'comment': 'Wedding entourage members'}
    )

    id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)
    name = Column(String(255), nullable=False)
    role = Column(String(255), nullable=False)
    side = Column(String(10), nullable=False)
    category = Column(String(50), server_default='other', nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(Text, nullable=True)
    sort_order = Column(Integer, server_default='0', nullable=False)
    created_at = Column(TIMESTAMP, server_default=text('CURRENT_TIMESTAMP'), nullable=False)
    updated_at = Column(
        TIMESTAMP,
        server_default=text('CURRENT_TIMESTAMP'),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self):
        return f"<EntourageMember(id={self.id}, name='{self.name}', role='{self.role}')>"


class WeddingAttire(SerializableMixin, Base):
    """Dress code guidance for a group of guests."""

    __tablename__ = 'wedding_attire'
    __table_args__ = (
        Index('idx_wedding_attire_category', 'category'),
        {'comment': 'Attire guidelines'}
    )

    id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)
    category = Column(String(100), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    color_scheme = Column(String(255), nullable=True)
    dress_code = Column(String(100), nullable=True)
    guidelines = Column(Text, nullable=True)
    photos = Column(
        JSON().with_variant(JSONB(), 'postgresql'),
        nullable=False,
        default=list,
        comment='Array of photo URLs'
    )
    sort_order = Column(Integer, server_default='0', nullable=False)
    created_at = Column(TIMESTAMP, server_default=text('CURRENT_TIMESTAMP'), nullable=False)
    updated_at = Column(
        TIMESTAMP,
        server_default=text('CURRENT_TIMESTAMP'),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self):
        return f"<WeddingAttire(id={self.id}, title='{self.title}')>"


class WeddingLocation(SerializableMixin, Base):
    """Ceremony or reception venue."""

    __tablename__ = 'wedding_locations'
    __table_args__ = (
        Index('idx_wedding_locations_sort_order', 'sort_order'),
        {'comment': 'Wedding venues'}
    )

    id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)
    name = Column(String(255), nullable=False)
    address = Column(Text, nullable=False)
    contact_phone = Column(String(50), nullable=True)
    contact_email = Column(String(255), nullable=True)
    directions = Column(Text, nullable=True)
    special_instructions = Column(Text, nullable=True)
    map_url = Column(Text, nullable=True)
    map_photo = Column(Text, nullable=True)
    sort_order = Column(Integer, server_default='0', nullable=False)
    created_at = Column(TIMESTAMP, server_default=text('CURRENT_TIMESTAMP'), nullable=False)
    updated_at = Column(
        TIMESTAMP,
        server_default=text('CURRENT_TIMESTAMP'),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self):
        return f"<WeddingLocation(id={self.id}, name='{self.name}')>"


class PrenupPhoto(SerializableMixin, Base):
    """A photo of the prenuptial gallery."""

    __tablename__ = 'prenup_photos'
    __table_args__ = (
        Index('idx_prenup_photos_sort_order', 'sort_order'),
        {'comment': 'Prenup photo gallery'}
    )

    id = Column(Integer, primary_key=True, autoincrement=True, nullable=False)
    photo_url = Column(Text, nullable=False)
    caption = Column(Text, nullable=True)
    sort_order = Column(Integer, server_default='0', nullable=False)
    created_at = Column(TIMESTAMP, server_default=text('CURRENT_TIMESTAMP'), nullable=False)
    updated_at = Column(
        TIMESTAMP,
        server_default=text('CURRENT_TIMESTAMP'),
        onupdate=func.now(),
        nullable=False
    )

    def __repr__(self):
        return f"<PrenupPhoto(id={self.id}, photo_url='{self.photo_url}')>"
