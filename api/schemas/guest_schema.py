"""
Guest invitation Pydantic schemas.
"""

from typing import Optional
from pydantic import Field
from datetime import datetime

from api.schemas.common import CamelModel


class GuestBase(CamelModel):
    """Editable guest fields."""

    name: str = Field(..., min_length=1, max_length=255, description="Guest or party name")
    email: Optional[str] = Field(None, max_length=255, description="Contact email")
    allocated_seats: int = Field(1, ge=1, description="Seats reserved for this invitation")
    notes: Optional[str] = Field(None, description="Free-form notes")


class GuestCreateRequest(GuestBase):
    """Request to add a guest; a code is generated when none is given."""

    invitation_code: Optional[str] = Field(None, max_length=255, description="Explicit invitation code")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "The Santos Family",
                "email": "santos.family@email.com",
                "allocatedSeats": 4,
                "notes": "Parents + 2 children"
            }
        }


class GuestUpdateRequest(GuestBase):
    """Request to edit a guest, identified by its invitation code."""

    invitation_code: Optional[str] = Field(None, description="Invitation code of the guest to update")
    allocated_seats: int = Field(..., ge=1, description="Seats reserved for this invitation")


class GuestResponse(CamelModel):
    """Guest invitation as returned to the admin console."""

    invitation_code: str = Field(..., description="Invitation code")
    name: str
    email: Optional[str] = None
    allocated_seats: int
    notes: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        json_schema_extra = {
            "example": {
                "invitationCode": "K8X9M2P7",
                "name": "The Santos Family",
                "email": "santos.family@email.com",
                "allocatedSeats": 4,
                "notes": "Parents + 2 children",
                "createdAt": "2025-10-15T12:00:00"
            }
        }


class GuestEnvelope(CamelModel):
    """Single guest wrapper."""

    success: bool = True
    guest: GuestResponse


class PublicGuest(CamelModel):
    """Guest information shown on the RSVP page (no contact details)."""

    invitation_code: str
    name: str
    allocated_seats: int
    notes: Optional[str] = None


class PublicGuestEnvelope(CamelModel):
    guest: PublicGuest

