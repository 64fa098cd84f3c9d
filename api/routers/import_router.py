"""
Import router - Handle spreadsheet uploads and template downloads.

This module provides the admin endpoints for importing guest invitations
and entourage members from Excel workbooks, and for downloading the
matching templates.
"""

import logging
from typing import Optional

from fastapi import APIRouter, UploadFile, File, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from api.config import settings
from api.dependencies import (
    get_db, get_repository, get_current_user, verify_file_extension, verify_file_size
)
from api.schemas.import_schema import (
    GuestImportResponse, GuestImportData, EntourageImportResponse, EntourageValidationErrorResponse
)
from services.exceptions import EmptyWorkbookError, ImportValidationError
from services.import_service import ImportService
from services.repository import WeddingRepository
from services.spreadsheet_service import XLSX_CONTENT_TYPE
from services.templates import (
    GUEST_TEMPLATE_FILENAME, ENTOURAGE_TEMPLATE_FILENAME, guest_template, entourage_template
)

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(
    prefix='/admin',
    tags=['admin', 'import'],
    dependencies=[Depends(get_current_user)]
)

GUEST_IMPORT_FAILED = "Failed to process Excel file. Please check the file format and try again."
VALIDATION_ERRORS_FOUND = "Validation errors found"


async def _read_upload(file: Optional[UploadFile], extension_prefix: str = '') -> bytes:
    """Check presence, extension and size of an upload and return its bytes."""
    if file is None or not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded"
        )

    verify_file_extension(file.filename, extension_prefix)

    content = await file.read()
    verify_file_size(len(content))

    logger.info(f"Received {file.filename} ({len(content) / 1024:.1f} KB)")
    return content


def _workbook_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=XLSX_CONTENT_TYPE,
        headers={'Content-Disposition': f'attachment; filename="{filename}"'}
    )


@router.post('/upload', response_model=GuestImportResponse, response_model_exclude_none=True)
async def upload_guest_workbook(
    file: Optional[UploadFile] = File(None, description="Guest invitation workbook (.xlsx or .xls)"),
    repository: WeddingRepository = Depends(get_repository),
    current_user: str = Depends(get_current_user)
):
    """
    Validate a guest invitation workbook and assign invitation codes.

    Nothing is persisted: the validated guests are returned with their new
    codes and the caller saves them one by one (``POST /api/admin/guests``).
    A single invalid row rejects the whole file.

    **Columns:** ``name``, ``email``, ``allocatedSeats``, ``notes``
    (optional ``invitationCode`` keeps an explicit code).

    **Returns:**
    - 200 with the prepared guests
    - 400 if the file is missing, not a workbook, empty or has invalid rows
    - 500 if the workbook cannot be read
    """
    content = await _read_upload(file)
    logger.info(f"Guest upload from {current_user}: {file.filename}")

    service = ImportService(
        repository,
        check_existing_codes=settings.CHECK_EXISTING_INVITATION_CODES
    )

    try:
        result = service.import_guest_workbook(content, file.filename)

    except EmptyWorkbookError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    except ImportValidationError as e:
        body = GuestImportResponse(
            success=False,
            error=VALIDATION_ERRORS_FOUND,
            data=GuestImportData(guests=[], total_processed=0, errors=e.errors)
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=body.model_dump(mode='json', by_alias=True, exclude_none=True)
        )

    except Exception as e:
        logger.error(f"Guest upload failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=GUEST_IMPORT_FAILED
        )

    return GuestImportResponse(
        success=True,
        data=GuestImportData(guests=result['guests'], total_processed=result['total_processed'])
    )


@router.get('/template')
async def download_guest_template():
    """Download the guest invitation workbook template."""
    return _workbook_response(guest_template(), GUEST_TEMPLATE_FILENAME)


@router.post('/entourage/upload', response_model=EntourageImportResponse, response_model_exclude_none=True)
async def upload_entourage_workbook(
    file: Optional[UploadFile] = File(None, description="Entourage workbook (.xlsx or .xls)"),
    db: Session = Depends(get_db),
    repository: WeddingRepository = Depends(get_repository),
    current_user: str = Depends(get_current_user)
):
    """
    Import entourage members from a workbook.

    Every row is validated first; any invalid row rejects the file. Valid
    members are then inserted one at a time and a failing insert is reported
    without undoing the others.

    **Columns:** ``name``, ``role``, ``category``, ``side``,
    ``description``, ``sortOrder``

    **Side rules:**
    - parents: ``bride`` or ``groom``
    - sponsors: ``male`` or ``female``
    - other: ``bride``, ``groom``, ``male``, ``female`` or ``both``
    """
    content = await _read_upload(file, extension_prefix='Invalid file type. ')
    logger.info(f"Entourage upload from {current_user}: {file.filename}")

    service = ImportService(repository)

    try:
        result = service.import_entourage_workbook(content, file.filename)
        db.commit()

    except EmptyWorkbookError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    except ImportValidationError as e:
        body = EntourageValidationErrorResponse(
            error=VALIDATION_ERRORS_FOUND,
            errors=e.errors,
            processed_count=e.processed_count,
            total_rows=e.total_rows
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=body.model_dump(by_alias=True)
        )

    except Exception as e:
        db.rollback()
        logger.error(f"Entourage upload failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={'error': 'Failed to process upload', 'details': str(e)}
        )

    return EntourageImportResponse(
        success=True,
        message=f"Successfully uploaded {result['inserted_count']} entourage members",
        inserted_count=result['inserted_count'],
        total_processed=result['total_processed'],
        errors=result['errors'] or None,
        members=result['members']
    )


@router.get('/entourage/template')
async def download_entourage_template():
    """Download the entourage workbook template."""
    return _workbook_response(entourage_template(), ENTOURAGE_TEMPLATE_FILENAME)
