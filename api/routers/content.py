"""
Content router - Admin CRUD for wedding content.

Schedule, entourage, attire and locations share the same shape: list,
create, update ``?id=`` and delete ``?id=``. The prenup gallery also
accepts batch creation and takes the photo id in the update body.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Type, Union
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_repository, get_current_user
from api.schemas.common import SuccessResponse
from api.schemas.content_schema import (
    EventCreateRequest, EventUpdateRequest, EventResponse, EventEnvelope,
    EntourageCreateRequest, EntourageUpdateRequest, EntourageResponse, EntourageEnvelope,
    check_entourage_update,
    AttireCreateRequest, AttireUpdateRequest, AttireResponse, AttireEnvelope,
    LocationCreateRequest, LocationUpdateRequest, LocationResponse, LocationEnvelope,
    PrenupPhotoCreateRequest, PrenupPhotoUpdateRequest,
    PrenupPhotoEnvelope, PrenupPhotoBatchEnvelope, PrenupGalleryResponse
)
from services.repository import WeddingRepository

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(
    prefix='/admin',
    tags=['admin', 'content'],
    dependencies=[Depends(get_current_user)]
)


def _require_id(item_id: Optional[int], label: str) -> int:
    if item_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{label} ID is required"
        )
    return item_id


def _not_found(label: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"{label} not found"
    )


def register_content_routes(
    kind: str,
    path: str,
    label: str,
    key: str,
    create_model: Type[BaseModel],
    update_model: Type[BaseModel],
    item_model: Type[BaseModel],
    envelope_model: Type[BaseModel],
    check_update: Optional[Callable[[Dict[str, Any], Dict[str, Any]], None]] = None
):
    """
    Register list/create/update/delete endpoints for one content kind.

    Args:
        kind: Repository content kind
        path: Route path under ``/admin``
        label: Human readable name used in messages
        key: Envelope key of the returned item
        check_update: Raises ``ValueError`` when the stored item merged with
            the changes would be invalid
    """

    @router.get(path, response_model=List[item_model], name=f'list_{kind}')
    async def list_items(repository: WeddingRepository = Depends(get_repository)):
        return repository.list_content(kind)

    @router.post(path, response_model=envelope_model, name=f'create_{kind}')
    async def create_item(
        request: create_model,
        db: Session = Depends(get_db),
        repository: WeddingRepository = Depends(get_repository)
    ):
        item = repository.create_content(kind, request.model_dump())
        db.commit()
        return {'success': True, key: item}

    @router.put(path, response_model=envelope_model, name=f'update_{kind}')
    async def update_item(
        request: update_model,
        item_id: Optional[int] = Query(None, alias='id'),
        db: Session = Depends(get_db),
        repository: WeddingRepository = Depends(get_repository)
    ):
        item_id = _require_id(item_id, label)
        changes = request.model_dump(exclude_unset=True)

        if check_update:
            current = repository.get_content(kind, item_id)
            if not current:
                raise _not_found(label)
            try:
                check_update(current, changes)
            except ValueError as e:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail=str(e)
                )

        item = repository.update_content(kind, item_id, changes)
        if not item:
            raise _not_found(label)
        db.commit()
        return {'success': True, key: item}

    @router.delete(path, response_model=SuccessResponse, name=f'delete_{kind}')
    async def delete_item(
        item_id: Optional[int] = Query(None, alias='id'),
        db: Session = Depends(get_db),
        repository: WeddingRepository = Depends(get_repository),
        current_user: str = Depends(get_current_user)
    ):
        item_id = _require_id(item_id, label)
        if not repository.delete_content(kind, item_id):
            raise _not_found(label)
        db.commit()
        logger.info(f"{label} {item_id} deleted by {current_user}")
        return SuccessResponse(success=True, message=f"{label} deleted successfully")


register_content_routes(
    'schedule', '/schedule', 'Wedding event', 'event',
    EventCreateRequest, EventUpdateRequest, EventResponse, EventEnvelope
)
register_content_routes(
    'entourage', '/entourage', 'Entourage member', 'member',
    EntourageCreateRequest, EntourageUpdateRequest, EntourageResponse, EntourageEnvelope,
    check_update=check_entourage_update
)
register_content_routes(
    'attire', '/attire', 'Attire', 'attire',
    AttireCreateRequest, AttireUpdateRequest, AttireResponse, AttireEnvelope
)
register_content_routes(
    'locations', '/locations', 'Location', 'location',
    LocationCreateRequest, LocationUpdateRequest, LocationResponse, LocationEnvelope
)


# Prenup gallery

@router.get('/prenup', response_model=PrenupGalleryResponse)
async def list_prenup_photos(repository: WeddingRepository = Depends(get_repository)):
    return {'photos': repository.list_content('prenup')}


@router.post('/prenup', response_model=Union[PrenupPhotoEnvelope, PrenupPhotoBatchEnvelope])
async def create_prenup_photos(
    request: PrenupPhotoCreateRequest,
    db: Session = Depends(get_db),
    repository: WeddingRepository = Depends(get_repository)
):
    """
    Add one photo, or a batch when the body carries ``photos``.

    **Single:**
    ```json
    {"photoUrl": "https://...", "caption": "Tagaytay"}
    ```

    **Batch** (sort order defaults to the position in the list):
    ```json
    {"photos": [{"photoUrl": "https://..."}, {"photoUrl": "https://..."}]}
    ```
    """
    photos = [repository.create_content('prenup', record) for record in request.to_records()]
    db.commit()

    if request.photos is not None:
        logger.info(f"Added {len(photos)} prenup photos")
        return PrenupPhotoBatchEnvelope(success=True, photos=photos)
    return PrenupPhotoEnvelope(success=True, photo=photos[0])


@router.put('/prenup', response_model=PrenupPhotoEnvelope)
async def update_prenup_photo(
    request: PrenupPhotoUpdateRequest,
    db: Session = Depends(get_db),
    repository: WeddingRepository = Depends(get_repository)
):
    """Update a photo identified by ``id`` in the body."""
    photo_id = _require_id(request.id, 'Photo')
    photo = repository.update_content('prenup', photo_id, request.model_dump(exclude={'id'}, exclude_unset=True))
    if not photo:
        raise _not_found('Photo')
    db.commit()
    return {'success': True, 'photo': photo}


@router.delete('/prenup', response_model=SuccessResponse, response_model_exclude_none=True)
async def delete_prenup_photo(
    photo_id: Optional[int] = Query(None, alias='id'),
    db: Session = Depends(get_db),
    repository: WeddingRepository = Depends(get_repository)
):
    photo_id = _require_id(photo_id, 'Photo')
    if not repository.delete_content('prenup', photo_id):
        raise _not_found('Photo')
    db.commit()
    return SuccessResponse(success=True)
