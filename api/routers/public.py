"""
Public router - Endpoints used by the wedding website.

Invitation lookup, RSVP submission and the read-only wedding content
(schedule, entourage, attire, locations, prenup gallery).
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from api.config import settings
from api.dependencies import get_db, get_repository
from api.schemas.content_schema import (
    EventResponse, EntourageResponse, AttireResponse, LocationResponse, PrenupGalleryResponse
)
from api.schemas.guest_schema import PublicGuestEnvelope
from api.schemas.rsvp_schema import RSVPCreateRequest, RSVPSubmitResponse, RSVPCheckResponse
from backend.models.schema import RSVP_ANSWERS
from services.repository import WeddingRepository

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(tags=['public'])


def _cacheable(response: Response):
    response.headers['Cache-Control'] = settings.PUBLIC_CACHE_CONTROL


@router.get('/guest', response_model=PublicGuestEnvelope)
async def get_guest(
    invitation_code: Optional[str] = Query(None, alias='id', description="Invitation code"),
    repository: WeddingRepository = Depends(get_repository)
):
    """
    Look up an invitation by its code.

    Contact details are not returned.

    **Example:**
    ```bash
    curl "http://localhost:8000/api/guest?id=K8X9M2P7"
    ```
    """
    if not invitation_code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invitation ID is required"
        )

    guest = repository.get_guest(invitation_code)

    if not guest:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invalid invitation ID"
        )

    return {'guest': guest}


@router.post('/rsvp', response_model=RSVPSubmitResponse)
async def submit_rsvp(
    request: RSVPCreateRequest,
    db: Session = Depends(get_db),
    repository: WeddingRepository = Depends(get_repository)
):
    """
    Record an RSVP.

    ``name``, ``email`` and ``willAttend`` are required. When an invitation
    code is given it must belong to an existing guest.
    """
    if not (request.name or '').strip() or not (request.email or '').strip() or request.will_attend not in RSVP_ANSWERS:
        logger.info("RSVP rejected: missing required fields")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields"
        )

    if request.invitation_code and not repository.get_guest(request.invitation_code):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Invalid invitation ID"
        )

    data = request.model_dump()
    data['name'] = request.name.strip()
    data['email'] = request.email.strip()
    data['invitation_code'] = request.invitation_code or None

    rsvp = repository.create_rsvp(data)
    db.commit()

    return {'success': True, 'data': rsvp}


@router.get('/rsvp/check', response_model=RSVPCheckResponse, response_model_exclude_none=True)
async def check_rsvp(
    invitation_code: Optional[str] = Query(None, alias='invitationCode'),
    repository: WeddingRepository = Depends(get_repository)
):
    """
    Tell whether an invitation has already been answered.

    Returns the most recent RSVP for the code when there is one.
    """
    if not invitation_code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invitation code is required"
        )

    rsvp = repository.find_rsvp_by_invitation_code(invitation_code)

    if rsvp:
        return {'hasRSVP': True, 'rsvp': rsvp}
    return {'hasRSVP': False}


@router.get('/schedule', response_model=List[EventResponse])
async def get_schedule(response: Response, repository: WeddingRepository = Depends(get_repository)):
    """Wedding day schedule, in display order."""
    _cacheable(response)
    return repository.list_content('schedule')


@router.get('/entourage', response_model=List[EntourageResponse])
async def get_entourage(response: Response, repository: WeddingRepository = Depends(get_repository)):
    """Entourage grouped as parents, sponsors, then everyone else."""
    _cacheable(response)
    return repository.list_content('entourage')


@router.get('/attire', response_model=List[AttireResponse])
async def get_attire(response: Response, repository: WeddingRepository = Depends(get_repository)):
    _cacheable(response)
    return repository.list_content('attire')


@router.get('/locations', response_model=List[LocationResponse])
async def get_locations(response: Response, repository: WeddingRepository = Depends(get_repository)):
    _cacheable(response)
    return repository.list_content('locations')


@router.get('/prenup', response_model=PrenupGalleryResponse)
async def get_prenup_gallery(response: Response, repository: WeddingRepository = Depends(get_repository)):
    _cacheable(response)
    return {'photos': repository.list_content('prenup')}
