"""
Pydantic schemas for request/response validation.

This package contains all Pydantic models used for API request validation
and response serialization. Attributes are snake_case; JSON is camelCase.
"""

from api.schemas.common import CamelModel, ErrorResponse, SuccessResponse, HealthCheckResponse
from api.schemas.guest_schema import (
    GuestCreateRequest, GuestUpdateRequest, GuestResponse, GuestEnvelope,
    PublicGuest, PublicGuestEnvelope
)
from api.schemas.rsvp_schema import (
    RSVPCreateRequest, RSVPResponse, RSVPSubmitResponse, RSVPCheckResponse,
    RSVPStatsResponse, ClearRSVPsResponse
)
from api.schemas.import_schema import (
    GuestDraft, GuestImportResponse, EntourageImportResponse, EntourageValidationErrorResponse
)

__all__ = [
    # Common
    'CamelModel',
    'ErrorResponse',
    'SuccessResponse',
    'HealthCheckResponse',

    # Guests
    'GuestCreateRequest',
    'GuestUpdateRequest',
    'GuestResponse',
    'GuestEnvelope',
    'PublicGuest',
    'PublicGuestEnvelope',

    # RSVPs
    'RSVPCreateRequest',
    'RSVPResponse',
    'RSVPSubmitResponse',
    'RSVPCheckResponse',
    'RSVPStatsResponse',
    'ClearRSVPsResponse',

    # Import
    'GuestDraft',
    'GuestImportResponse',
    'EntourageImportResponse',
    'EntourageValidationErrorResponse',
]
