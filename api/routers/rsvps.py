"""
RSVPs router - Admin views over RSVP submissions.

Listing, attendance statistics, clearing and the spreadsheet export.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_repository, get_current_user
from api.schemas.rsvp_schema import RSVPResponse, RSVPStatsResponse, ClearRSVPsResponse
from services.repository import WeddingRepository
from services.spreadsheet_service import XLSX_CONTENT_TYPE
from services.templates import RSVP_EXPORT_FILENAME, rsvp_export

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(
    prefix='/admin',
    tags=['admin', 'rsvps'],
    dependencies=[Depends(get_current_user)]
)


@router.get('/rsvps', response_model=List[RSVPResponse])
async def list_rsvps(repository: WeddingRepository = Depends(get_repository)):
    """List every RSVP, newest first."""
    return repository.list_rsvps()


@router.get('/rsvps/stats', response_model=RSVPStatsResponse)
async def get_rsvp_stats(repository: WeddingRepository = Depends(get_repository)):
    """
    Attendance summary.

    **Returns:**
    - RSVP count and guest total for each answer
    - Total responses, invitations issued and seats allocated

    **Example:**
    ```bash
    curl http://localhost:8000/api/admin/rsvps/stats
    ```
    """
    stats = repository.rsvp_stats()

    return RSVPStatsResponse(
        attending=stats['attending'],
        not_attending=stats['notAttending'],
        total_responses=stats['attending']['count'] + stats['notAttending']['count'],
        total_invitations=len(repository.existing_invitation_codes()),
        total_seats=repository.total_seats()
    )


@router.delete('/rsvps', response_model=ClearRSVPsResponse)
async def clear_rsvps(
    db: Session = Depends(get_db),
    repository: WeddingRepository = Depends(get_repository),
    current_user: str = Depends(get_current_user)
):
    """Delete every RSVP. Guest invitations are not touched."""
    deleted = repository.clear_rsvps()
    db.commit()

    logger.warning(f"{deleted} RSVPs cleared by {current_user}")
    return ClearRSVPsResponse(
        success=True,
        message='All RSVPs have been cleared successfully',
        deleted_count=deleted
    )


@router.post('/download')
async def download_rsvps(repository: WeddingRepository = Depends(get_repository)):
    """
    Export every RSVP as an .xlsx workbook.

    **Example:**
    ```bash
    curl -X POST -o rsvp-data.xlsx http://localhost:8000/api/admin/download
    ```
    """
    rsvps = repository.list_rsvps()
    logger.info(f"Exporting {len(rsvps)} RSVPs")

    return Response(
        content=rsvp_export(rsvps),
        media_type=XLSX_CONTENT_TYPE,
        headers={'Content-Disposition': f'attachment; filename="{RSVP_EXPORT_FILENAME}"'}
    )
