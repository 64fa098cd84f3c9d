"""Models package for the wedding RSVP service."""
from backend.models.schema import (
    Base, Guest, RSVP, WeddingEvent, EntourageMember,
    WeddingAttire, WeddingLocation, PrenupPhoto
)

__all__ = [
    'Base', 'Guest', 'RSVP', 'WeddingEvent', 'EntourageMember',
    'WeddingAttire', 'WeddingLocation', 'PrenupPhoto'
]
