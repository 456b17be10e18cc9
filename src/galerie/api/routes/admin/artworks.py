"""Admin CRUD for artworks and their ordered media."""

from typing import Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query

from galerie.api.dependencies import get_uow_factory
from galerie.api.errors import NotFound
from galerie.api.presenters import present_artwork
from galerie.api.schemas import ArtworkCreate, ArtworkUpdate, ArtworkWithMedia, SuccessResponse
from galerie.core.slug import slugify
from galerie.core.timezone import utc_now
from galerie.models.artwork import Artwork
from galerie.repositories.query import page_window

logger = structlog.get_logger()
router = APIRouter(prefix="/artworks", tags=["admin:artworks"])


@router.get("", response_model=list[ArtworkWithMedia])
async def list_artworks(
    q: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    uow_factory=Depends(get_uow_factory),
) -> list[ArtworkWithMedia]:
    async with await uow_factory() as uow:
        artworks = await uow.artworks.list_page(page_window(page, per_page), q=q)
        return [await present_artwork(uow, artwork) for artwork in artworks]


@router.post("", response_model=ArtworkWithMedia)
async def create_artwork(
    request: ArtworkCreate, uow_factory=Depends(get_uow_factory)
) -> ArtworkWithMedia:
    """Create an artwork and attach ``media_ids`` in the given order (one transaction)."""
    now = utc_now()
    artwork = Artwork(
        **request.model_dump(exclude={"published", "media_ids"}),
        slug=slugify(request.title),
        created_at=now,
        updated_at=now,
    )
    artwork.apply_publish(request.published, now)

    async with await uow_factory() as uow:
        artwork = await uow.artworks.add(artwork)
        if request.media_ids is not None:
            await uow.artwork_media.replace(artwork.id, request.media_ids)
        logger.info("artwork.created", artwork_id=str(artwork.id), slug=artwork.slug)
        return await present_artwork(uow, artwork)


@router.get("/{artwork_id}", response_model=ArtworkWithMedia)
async def get_artwork(artwork_id: UUID, uow_factory=Depends(get_uow_factory)) -> ArtworkWithMedia:
    async with await uow_factory() as uow:
        artwork = await uow.artworks.get_by_id(artwork_id)
        if artwork is None:
            raise NotFound("Artwork not found")
        return await present_artwork(uow, artwork)


@router.put("/{artwork_id}", response_model=ArtworkWithMedia)
async def update_artwork(
    artwork_id: UUID, request: ArtworkUpdate, uow_factory=Depends(get_uow_factory)
) -> ArtworkWithMedia:
    """Partially update an artwork.

    ``media_ids`` absent leaves the attachments alone; ``[]`` clears them.
    """
    async with await uow_factory() as uow:
        artwork = await uow.artworks.update(
            artwork_id, request.model_dump(exclude={"media_ids"}), utc_now()
        )
        if artwork is None:
            raise NotFound("Artwork not found")
        if request.media_ids is not None:
            await uow.artwork_media.replace(artwork.id, request.media_ids)
        logger.info("artwork.updated", artwork_id=str(artwork.id), published=artwork.published)
        return await present_artwork(uow, artwork)


@router.delete("/{artwork_id}", response_model=SuccessResponse)
async def delete_artwork(artwork_id: UUID, uow_factory=Depends(get_uow_factory)) -> SuccessResponse:
    async with await uow_factory() as uow:
        await uow.artworks.delete(artwork_id)
    logger.info("artwork.deleted", artwork_id=str(artwork_id))
    return SuccessResponse()
