"""
RSVP Pydantic schemas.
"""

from typing import Literal, Optional
from pydantic import Field
from datetime import datetime

from api.schemas.common import CamelModel


class RSVPCreateRequest(CamelModel):
    """
    RSVP submission from the public site.

    ``name``, ``email`` and ``will_attend`` are checked by the endpoint so a
    blank value yields the documented 400 instead of a schema error.
    """

    name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=50)
    will_attend: Optional[Literal['yes', 'no', '']] = Field(None, description="'yes' or 'no'")
    number_of_guests: int = Field(1, ge=0, description="Guests attending under this RSVP")
    dietary_requirements: Optional[str] = None
    song_request: Optional[str] = None
    message: Optional[str] = None
    invitation_code: Optional[str] = Field(None, max_length=255)

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Maria Clara Fernandez",
                "email": "maria.clara@email.com",
                "willAttend": "yes",
                "numberOfGuests": 2,
                "dietaryRequirements": "Vegetarian",
                "invitationCode": "R3N5Q8L4"
            }
        }


class RSVPResponse(CamelModel):
    """A stored RSVP."""

    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    will_attend: str
    number_of_guests: int
    dietary_requirements: Optional[str] = None
    song_request: Optional[str] = None
    message: Optional[str] = None
    invitation_code: Optional[str] = None
    created_at: Optional[datetime] = None


class RSVPSubmitResponse(CamelModel):
    success: bool = True
    data: RSVPResponse


class RSVPCheckResponse(CamelModel):
    """Whether an invitation has already been answered."""

    has_rsvp: bool = Field(..., alias='hasRSVP')
    rsvp: Optional[RSVPResponse] = None


class AttendanceCount(CamelModel):
    count: int = 0
    total_guests: int = 0


class RSVPStatsResponse(CamelModel):
    """Attendance summary for the admin dashboard."""

    attending: AttendanceCount
    not_attending: AttendanceCount
    total_responses: int
    total_invitations: int
    total_seats: int

    class Config:
        json_schema_extra = {
            "example": {
                "attending": {"count": 42, "totalGuests": 97},
                "notAttending": {"count": 5, "totalGuests": 6},
                "totalResponses": 47,
                "totalInvitations": 60,
                "totalSeats": 140
            }
        }


class ClearRSVPsResponse(CamelModel):
    success: bool = True
    message: str
    deleted_count: int
