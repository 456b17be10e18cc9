"""Admin CRUD for editions and their ordered media, plus the publish toggle."""

from typing import Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query

from galerie.api.dependencies import get_uow_factory
from galerie.api.errors import NotFound
from galerie.api.presenters import present_edition
from galerie.api.schemas import EditionCreate, EditionUpdate, EditionWithMedia, SuccessResponse
from galerie.core.slug import slugify
from galerie.core.timezone import utc_now
from galerie.models.edition import Edition
from galerie.repositories.query import page_window

logger = structlog.get_logger()
router = APIRouter(prefix="/editions", tags=["admin:editions"])


@router.get("", response_model=list[EditionWithMedia])
async def list_editions(
    q: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    uow_factory=Depends(get_uow_factory),
) -> list[EditionWithMedia]:
    """Editions, most recently updated first; ``q`` also matches ``edition_size``."""
    async with await uow_factory() as uow:
        editions = await uow.editions.list_page(page_window(page, per_page), q=q)
        return [await present_edition(uow, edition) for edition in editions]


@router.post("", response_model=EditionWithMedia)
async def create_edition(
    request: EditionCreate, uow_factory=Depends(get_uow_factory)
) -> EditionWithMedia:
    """Create an edition and attach ``media_ids`` in the given order (one transaction)."""
    now = utc_now()
    edition = Edition(
        **request.model_dump(exclude={"published", "media_ids"}),
        slug=slugify(request.title),
        created_at=now,
        updated_at=now,
    )
    edition.apply_publish(request.published, now)

    async with await uow_factory() as uow:
        edition = await uow.editions.add(edition)
        if request.media_ids is not None:
            await uow.edition_media.replace(edition.id, request.media_ids)
        logger.info("edition.created", edition_id=str(edition.id), slug=edition.slug)
        return await present_edition(uow, edition)


@router.get("/{edition_id}", response_model=EditionWithMedia)
async def get_edition(edition_id: UUID, uow_factory=Depends(get_uow_factory)) -> EditionWithMedia:
    async with await uow_factory() as uow:
        edition = await uow.editions.get_by_id(edition_id)
        if edition is None:
            raise NotFound("Edition not found")
        return await present_edition(uow, edition)


@router.put("/{edition_id}", response_model=EditionWithMedia)
async def update_edition(
    edition_id: UUID, request: EditionUpdate, uow_factory=Depends(get_uow_factory)
) -> EditionWithMedia:
    async with await uow_factory() as uow:
        edition = await uow.editions.update(
            edition_id, request.model_dump(exclude={"media_ids"}), utc_now()
        )
        if edition is None:
            raise NotFound("Edition not found")
        if request.media_ids is not None:
            await uow.edition_media.replace(edition.id, request.media_ids)
        logger.info("edition.updated", edition_id=str(edition.id), published=edition.published)
        return await present_edition(uow, edition)


@router.delete("/{edition_id}", response_model=SuccessResponse)
async def delete_edition(edition_id: UUID, uow_factory=Depends(get_uow_factory)) -> SuccessResponse:
    async with await uow_factory() as uow:
        await uow.editions.delete(edition_id)
    logger.info("edition.deleted", edition_id=str(edition_id))
    return SuccessResponse()


@router.post("/{edition_id}/publish", response_model=EditionWithMedia)
async def toggle_edition_publish(
    edition_id: UUID, uow_factory=Depends(get_uow_factory)
) -> EditionWithMedia:
    """Flip the edition between published and draft."""
    async with await uow_factory() as uow:
        edition = await uow.editions.toggle_publish(edition_id, utc_now())
        if edition is None:
            raise NotFound("Edition not found")
        logger.info(
            "edition.publish_toggled", edition_id=str(edition.id), published=edition.published
        )
        return await present_edition(uow, edition)
