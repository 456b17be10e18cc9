"""Admin media library.

- GET /api/admin/media - Newest first, filter by folder, artist or text
- GET /api/admin/media/folders - Distinct folder names
- POST /api/admin/media - Multipart upload (object first, then metadata row)
- PUT /api/admin/media/{id} - Update alt, credit, folder or artist
- DELETE /api/admin/media/{id} - Remove row and object together
"""

from typing import Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from galerie.api.dependencies import get_storage, get_uow_factory
from galerie.api.errors import BadRequest, NotFound
from galerie.api.presenters import present_media_row
from galerie.api.schemas import MediaRead, MediaUpdate, MediaWithArtist, SuccessResponse
from galerie.models.media import Media
from galerie.repositories.query import MAX_MEDIA_PER_PAGE, page_window
from galerie.services.storage import ObjectStorage, build_key

logger = structlog.get_logger()
router = APIRouter(prefix="/media", tags=["admin:media"])

DEFAULT_MEDIA_PER_PAGE = 50
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def _parse_artist_id(value: Optional[str]) -> Optional[UUID]:
    if value is None or value.strip() == "":
        return None
    try:
        return UUID(value.strip())
    except ValueError as e:
        raise BadRequest("Invalid artist_id") from e


@router.get("", response_model=list[MediaWithArtist])
async def list_media(
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    folder: Optional[str] = Query(default=None),
    artist_id: Optional[UUID] = Query(default=None),
    q: Optional[str] = Query(default=None),
    uow_factory=Depends(get_uow_factory),
) -> list[MediaWithArtist]:
    window = page_window(
        page, per_page, default_per_page=DEFAULT_MEDIA_PER_PAGE, max_per_page=MAX_MEDIA_PER_PAGE
    )
    async with await uow_factory() as uow:
        rows = await uow.media.list_page(window, q=q, folder=folder, artist_id=artist_id)
        return [present_media_row(media, artist_name) for media, artist_name in rows]


@router.get("/folders", response_model=list[str])
async def list_media_folders(uow_factory=Depends(get_uow_factory)) -> list[str]:
    async with await uow_factory() as uow:
        return await uow.media.list_folders()


@router.post("", response_model=MediaRead)
async def upload_media(
    file: Optional[UploadFile] = File(default=None),
    alt: Optional[str] = Form(default=None),
    credit: Optional[str] = Form(default=None),
    folder: Optional[str] = Form(default=None),
    artist_id: Optional[str] = Form(default=None),
    width: Optional[int] = Form(default=None),
    height: Optional[int] = Form(default=None),
    uow_factory=Depends(get_uow_factory),
    storage: ObjectStorage = Depends(get_storage),
) -> MediaRead:
    """Upload an image and record its metadata.

    The object is stored first. If the row insert then fails the object is
    left behind in the bucket, which is tolerated.

    Raises:
        BadRequest: No file part, or an unparseable artist_id
        StorageError: Upload failed (translated to 500 "Failed to upload file")
    """
    if file is None:
        raise BadRequest("No file provided")
    owner_id = _parse_artist_id(artist_id)

    key = build_key(file.filename)
    url = await storage.put(key, file.file, file.content_type or DEFAULT_CONTENT_TYPE)

    async with await uow_factory() as uow:
        media = await uow.media.add(
            Media(
                filename=key,
                url=url,
                alt=alt,
                credit=credit,
                folder=folder,
                artist_id=owner_id,
                width=width,
                height=height,
            )
        )
        logger.info("media.uploaded", media_id=str(media.id), key=key, folder=folder)
        return MediaRead.model_validate(media)


@router.put("/{media_id}", response_model=MediaRead)
async def update_media(
    media_id: UUID, request: MediaUpdate, uow_factory=Depends(get_uow_factory)
) -> MediaRead:
    async with await uow_factory() as uow:
        media = await uow.media.update(media_id, request.model_dump())
        if media is None:
            raise NotFound("Media not found")
        return MediaRead.model_validate(media)


@router.delete("/{media_id}", response_model=SuccessResponse)
async def delete_media(
    media_id: UUID,
    uow_factory=Depends(get_uow_factory),
    storage: ObjectStorage = Depends(get_storage),
) -> SuccessResponse:
    """Delete a media item.

    The row delete is flushed, then the object is deleted, then the
    transaction commits. A failed object delete rolls the row delete back, so
    the row and its object are kept together.
    """
    async with await uow_factory() as uow:
        media = await uow.media.get_by_id(media_id)
        if media is None:
            raise NotFound("Media not found")
        await uow.media.delete(media)
        await storage.delete(media.filename)

    logger.info("media.deleted", media_id=str(media_id))
    return SuccessResponse()
