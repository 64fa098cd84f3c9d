"""
Import-related Pydantic schemas.

This module contains schemas for the guest and entourage spreadsheet
upload responses.
"""

from typing import List, Optional
from pydantic import Field

from api.schemas.common import CamelModel
from api.schemas.content_schema import EntourageResponse


class GuestDraft(CamelModel):
    """Validated guest from an upload, with its code, not yet persisted."""

    invitation_code: str
    name: str
    email: Optional[str] = None
    allocated_seats: int
    notes: Optional[str] = None


class GuestImportData(CamelModel):
    guests: List[GuestDraft] = Field(default_factory=list)
    total_processed: int = 0
    errors: Optional[List[str]] = None


class GuestImportResponse(CamelModel):
    """
    Result of a guest spreadsheet upload.

    On validation failure ``success`` is false, ``data.guests`` is empty and
    ``data.errors`` lists every rejected row.
    """

    success: bool
    error: Optional[str] = None
    data: GuestImportData

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "data": {
                    "guests": [
                        {
                            "invitationCode": "R3N5Q8L4",
                            "name": "Maria Clara Fernandez",
                            "email": "maria.clara@email.com",
                            "allocatedSeats": 2,
                            "notes": None
                        }
                    ],
                    "totalProcessed": 1
                }
            }
        }


class EntourageImportResponse(CamelModel):
    """Result of an entourage spreadsheet upload."""

    success: bool = True
    message: str
    inserted_count: int
    total_processed: int
    errors: Optional[List[str]] = Field(None, description="Per-member insert failures")
    members: List[EntourageResponse] = Field(default_factory=list)

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "message": "Successfully uploaded 2 entourage members",
                "insertedCount": 2,
                "totalProcessed": 3,
                "errors": ["Failed to insert Jose Rizal: value too long"],
                "members": []
            }
        }


class EntourageValidationErrorResponse(CamelModel):
    """Body of a 400 entourage upload rejected by row validation."""

    error: str = "Validation errors found"
    errors: List[str]
    processed_count: int
    total_rows: int
