"""
Guests router - Admin CRUD for guest invitations.
"""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from api.config import settings
from api.dependencies import get_db, get_repository, get_current_user
from api.schemas.common import SuccessResponse
from api.schemas.guest_schema import (
    GuestCreateRequest, GuestUpdateRequest, GuestResponse, GuestEnvelope
)
from services.invitation_codes import generate_invitation_code
from services.repository import WeddingRepository

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(
    prefix='/admin/guests',
    tags=['admin', 'guests'],
    dependencies=[Depends(get_current_user)]
)


@router.get('', response_model=List[GuestResponse])
async def list_guests(repository: WeddingRepository = Depends(get_repository)):
    """
    List every guest invitation, newest first.

    **Example:**
    ```bash
    curl http://localhost:8000/api/admin/guests
    ```
    """
    return repository.list_guests()


@router.post('', response_model=GuestEnvelope)
async def add_guest(
    request: GuestCreateRequest,
    db: Session = Depends(get_db),
    repository: WeddingRepository = Depends(get_repository),
    current_user: str = Depends(get_current_user)
):
    """
    Add a guest invitation.

    A random 8-character code is generated when ``invitationCode`` is not
    given. With ``CHECK_EXISTING_INVITATION_CODES`` enabled the generated
    code also avoids every stored code.

    **Returns:**
    - 200 with the created guest
    - 409 if the explicit invitation code is already taken
    """
    invitation_code = (request.invitation_code or '').strip()

    if invitation_code:
        if repository.get_guest(invitation_code):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail=f"Invitation code {invitation_code} already exists"
            )
    else:
        exclusion = repository.existing_invitation_codes() if settings.CHECK_EXISTING_INVITATION_CODES else set()
        invitation_code = generate_invitation_code(exclusion)

    data = request.model_dump()
    data['invitation_code'] = invitation_code

    guest = repository.create_guest(data)
    db.commit()

    logger.info(f"Guest {invitation_code} added by {current_user}")
    return {'success': True, 'guest': guest}


@router.put('', response_model=GuestEnvelope)
async def update_guest(
    request: GuestUpdateRequest,
    db: Session = Depends(get_db),
    repository: WeddingRepository = Depends(get_repository)
):
    """
    Update a guest, identified by ``invitationCode`` in the body.

    The invitation code itself cannot be changed.
    """
    if not request.invitation_code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invitation code is required"
        )

    guest = repository.update_guest(
        request.invitation_code,
        request.model_dump(exclude={'invitation_code'})
    )

    if not guest:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Guest not found"
        )

    db.commit()
    return {'success': True, 'guest': guest}


@router.delete('', response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_guest(
    invitation_code: Optional[str] = Query(None, alias='id', description="Invitation code"),
    db: Session = Depends(get_db),
    repository: WeddingRepository = Depends(get_repository),
    current_user: str = Depends(get_current_user)
):
    """
    Delete a guest invitation.

    RSVPs that referenced the invitation are kept, unlinked.
    """
    if not invitation_code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invitation code is required"
        )

    if not repository.delete_guest(invitation_code):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Guest not found"
        )

    db.commit()
    logger.info(f"Guest {invitation_code} deleted by {current_user}")
    return SuccessResponse(success=True)
