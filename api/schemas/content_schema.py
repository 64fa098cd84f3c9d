"""
Wedding content Pydantic schemas.

Request and response models for the schedule, entourage, attire, locations
and prenup gallery. Create requests carry the required fields; update
requests are partial, only the fields present in the body are changed.
"""

from typing import Any, Dict, List, Optional
from pydantic import Field, model_validator
from datetime import datetime, time

from api.schemas.common import CamelModel
from backend.models.schema import ENTOURAGE_CATEGORIES, SIDES_BY_CATEGORY


class TimestampedResponse(CamelModel):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# Schedule

class EventCreateRequest(CamelModel):
    """New item of the wedding day schedule."""

    event_name: str = Field(..., min_length=1, max_length=255)
    event_time: time = Field(..., description="Local time, HH:MM or HH:MM:SS")
    location: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, max_length=50)
    sort_order: int = 0

    class Config:
        json_schema_extra = {
            "example": {
                "eventName": "Ceremony",
                "eventTime": "15:00",
                "location": "San Agustin Church",
                "icon": "church",
                "color": "rose",
                "sortOrder": 1
            }
        }


class EventUpdateRequest(CamelModel):
    event_name: Optional[str] = Field(None, min_length=1, max_length=255)
    event_time: Optional[time] = None
    location: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    icon: Optional[str] = Field(None, max_length=50)
    color: Optional[str] = Field(None, max_length=50)
    sort_order: Optional[int] = None


class EventResponse(TimestampedResponse):
    event_name: str
    event_time: time
    location: str
    description: Optional[str] = None
    icon: Optional[str] = None
    color: Optional[str] = None
    sort_order: int = 0


class EventEnvelope(CamelModel):
    success: bool = True
    event: EventResponse


# Entourage

def _check_side(category: Optional[str], side: Optional[str]):
    if category is None or side is None:
        return
    if category not in ENTOURAGE_CATEGORIES:
        raise ValueError(f"category must be one of: {', '.join(ENTOURAGE_CATEGORIES)}")
    allowed = SIDES_BY_CATEGORY[category]
    if side not in allowed:
        raise ValueError(f"For {category}, side must be one of: {', '.join(allowed)}")


def check_entourage_update(current: Dict[str, Any], changes: Dict[str, Any]):
    """Check side against category once a partial update is applied to the stored member."""
    category = changes.get('category', current.get('category'))
    side = changes.get('side', current.get('side'))
    if category is None or side is None:
        raise ValueError("category and side cannot be empty")
    _check_side(category, side)


class EntourageCreateRequest(CamelModel):
    """New entourage member; the side must suit the category."""

    name: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1, max_length=255)
    side: str
    category: str = 'other'
    description: Optional[str] = None
    image_url: Optional[str] = None
    sort_order: int = 0

    @model_validator(mode='after')
    def side_matches_category(self):
        _check_side(self.category, self.side)
        return self


class EntourageUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    role: Optional[str] = Field(None, min_length=1, max_length=255)
    side: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    sort_order: Optional[int] = None

    @model_validator(mode='after')
    def side_matches_category(self):
        _check_side(self.category, self.side)
        return self


class EntourageResponse(TimestampedResponse):
    name: str
    role: str
    side: str
    category: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    sort_order: int = 0


class EntourageEnvelope(CamelModel):
    success: bool = True
    member: EntourageResponse


# Attire

class AttireCreateRequest(CamelModel):
    category: str = Field(..., min_length=1, max_length=100)
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    color_scheme: Optional[str] = Field(None, max_length=255)
    dress_code: Optional[str] = Field(None, max_length=100)
    guidelines: Optional[str] = None
    photos: List[str] = Field(default_factory=list, description="Photo URLs")
    sort_order: int = 0


class AttireUpdateRequest(CamelModel):
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    color_scheme: Optional[str] = Field(None, max_length=255)
    dress_code: Optional[str] = Field(None, max_length=100)
    guidelines: Optional[str] = None
    photos: Optional[List[str]] = None
    sort_order: Optional[int] = None


class AttireResponse(TimestampedResponse):
    category: str
    title: str
    description: Optional[str] = None
    color_scheme: Optional[str] = None
    dress_code: Optional[str] = None
    guidelines: Optional[str] = None
    photos: List[str] = Field(default_factory=list)
    sort_order: int = 0


class AttireEnvelope(CamelModel):
    success: bool = True
    attire: AttireResponse


# Locations

class LocationCreateRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1)
    contact_phone: Optional[str] = Field(None, max_length=50)
    contact_email: Optional[str] = Field(None, max_length=255)
    directions: Optional[str] = None
    special_instructions: Optional[str] = None
    map_url: Optional[str] = None
    map_photo: Optional[str] = None
    sort_order: int = 0


class LocationUpdateRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    address: Optional[str] = Field(None, min_length=1)
    contact_phone: Optional[str] = Field(None, max_length=50)
    contact_email: Optional[str] = Field(None, max_length=255)
    directions: Optional[str] = None
    special_instructions: Optional[str] = None
    map_url: Optional[str] = None
    map_photo: Optional[str] = None
    sort_order: Optional[int] = None


class LocationResponse(TimestampedResponse):
    name: str
    address: str
    contact_phone: Optional[str] = None
    contact_email: Optional[str] = None
    directions: Optional[str] = None
    special_instructions: Optional[str] = None
    map_url: Optional[str] = None
    map_photo: Optional[str] = None
    sort_order: int = 0


class LocationEnvelope(CamelModel):
    success: bool = True
    location: LocationResponse


# Prenup gallery

class PrenupPhotoItem(CamelModel):
    """One photo of a create request; ``sort_order`` defaults per request."""

    photo_url: str = Field(..., min_length=1)
    caption: Optional[str] = ''
    sort_order: Optional[int] = None


class PrenupPhotoCreateRequest(CamelModel):
    """
    Either a single photo (``photo_url`` set) or a batch (``photos`` set).

    In a batch, photos without an explicit sort order take their position
    in the list.
    """

    photo_url: Optional[str] = None
    caption: Optional[str] = ''
    sort_order: Optional[int] = None
    photos: Optional[List[PrenupPhotoItem]] = None

    @model_validator(mode='after')
    def single_or_batch(self):
        if self.photos is None and not self.photo_url:
            raise ValueError("photoUrl or photos is required")
        return self

    def to_records(self) -> List[dict]:
        if self.photos is not None:
            return [
                {
                    'photo_url': photo.photo_url,
                    'caption': photo.caption or '',
                    'sort_order': photo.sort_order if photo.sort_order is not None else index,
                }
                for index, photo in enumerate(self.photos)
            ]
        return [{
            'photo_url': self.photo_url,
            'caption': self.caption or '',
            'sort_order': self.sort_order or 0,
        }]


class PrenupPhotoUpdateRequest(CamelModel):
    id: Optional[int] = Field(None, description="Photo to update")
    photo_url: Optional[str] = Field(None, min_length=1)
    caption: Optional[str] = None
    sort_order: Optional[int] = None


class PrenupPhotoResponse(TimestampedResponse):
    photo_url: str
    caption: Optional[str] = None
    sort_order: int = 0


class PrenupPhotoEnvelope(CamelModel):
    success: bool = True
    photo: PrenupPhotoResponse


class PrenupPhotoBatchEnvelope(CamelModel):
    success: bool = True
    photos: List[PrenupPhotoResponse] = Field(default_factory=list)


class PrenupGalleryResponse(CamelModel):
    photos: List[PrenupPhotoResponse] = Field(default_factory=list)
