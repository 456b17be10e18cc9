"""Admin CRUD for artists, plus the publish toggle."""

from typing import Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query

from galerie.api.dependencies import get_uow_factory
from galerie.api.errors import NotFound
from galerie.api.presenters import present_artist
from galerie.api.schemas import ArtistCreate, ArtistUpdate, ArtistWithPortrait, SuccessResponse
from galerie.core.slug import slugify
from galerie.core.timezone import utc_now
from galerie.models.artist import Artist
from galerie.repositories.query import page_window

logger = structlog.get_logger()
router = APIRouter(prefix="/artists", tags=["admin:artists"])


@router.get("", response_model=list[ArtistWithPortrait])
async def list_artists(
    q: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    uow_factory=Depends(get_uow_factory),
) -> list[ArtistWithPortrait]:
    """All artists, most recently updated first; ``q`` matches name, slug and bio."""
    async with await uow_factory() as uow:
        artists = await uow.artists.list_page(page_window(page, per_page), q=q)
        return [await present_artist(uow, artist) for artist in artists]


@router.post("", response_model=ArtistWithPortrait)
async def create_artist(
    request: ArtistCreate, uow_factory=Depends(get_uow_factory)
) -> ArtistWithPortrait:
    """Create an artist. The slug is derived from the name; a taken slug is a 409."""
    now = utc_now()
    artist = Artist(
        **request.model_dump(exclude={"published"}),
        slug=slugify(request.name),
        created_at=now,
        updated_at=now,
    )
    artist.apply_publish(request.published, now)

    async with await uow_factory() as uow:
        artist = await uow.artists.add(artist)
        logger.info("artist.created", artist_id=str(artist.id), slug=artist.slug)
        return await present_artist(uow, artist)


@router.get("/{artist_id}", response_model=ArtistWithPortrait)
async def get_artist(artist_id: UUID, uow_factory=Depends(get_uow_factory)) -> ArtistWithPortrait:
    async with await uow_factory() as uow:
        artist = await uow.artists.get_by_id(artist_id)
        if artist is None:
            raise NotFound("Artist not found")
        return await present_artist(uow, artist)


@router.put("/{artist_id}", response_model=ArtistWithPortrait)
async def update_artist(
    artist_id: UUID, request: ArtistUpdate, uow_factory=Depends(get_uow_factory)
) -> ArtistWithPortrait:
    async with await uow_factory() as uow:
        artist = await uow.artists.update(artist_id, request.model_dump(), utc_now())
        if artist is None:
            raise NotFound("Artist not found")
        logger.info("artist.updated", artist_id=str(artist.id), published=artist.published)
        return await present_artist(uow, artist)


@router.delete("/{artist_id}", response_model=SuccessResponse)
async def delete_artist(artist_id: UUID, uow_factory=Depends(get_uow_factory)) -> SuccessResponse:
    """Delete by id. An unknown id is not an error."""
    async with await uow_factory() as uow:
        await uow.artists.delete(artist_id)
    logger.info("artist.deleted", artist_id=str(artist_id))
    return SuccessResponse()


@router.post("/{artist_id}/publish", response_model=ArtistWithPortrait)
async def toggle_artist_publish(
    artist_id: UUID, uow_factory=Depends(get_uow_factory)
) -> ArtistWithPortrait:
    """Flip the artist between published and draft."""
    async with await uow_factory() as uow:
        artist = await uow.artists.toggle_publish(artist_id, utc_now())
        if artist is None:
            raise NotFound("Artist not found")
        logger.info("artist.publish_toggled", artist_id=str(artist.id), published=artist.published)
        return await present_artist(uow, artist)
