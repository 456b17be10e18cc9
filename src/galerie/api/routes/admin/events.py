"""Admin CRUD for events and their linked artists."""

from typing import Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query

from galerie.api.dependencies import get_uow_factory
from galerie.api.errors import NotFound
from galerie.api.presenters import present_event
from galerie.api.schemas import EventCreate, EventUpdate, EventWithDetails, SuccessResponse
from galerie.core.slug import slugify
from galerie.core.timezone import utc_now
from galerie.models.event import Event
from galerie.repositories.query import page_window

logger = structlog.get_logger()
router = APIRouter(prefix="/events", tags=["admin:events"])


@router.get("", response_model=list[EventWithDetails])
async def list_events(
    q: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    uow_factory=Depends(get_uow_factory),
) -> list[EventWithDetails]:
    """Events, latest start first; ``q`` matches title, location and description."""
    async with await uow_factory() as uow:
        events = await uow.events.list_page(page_window(page, per_page), q=q)
        return [await present_event(uow, event) for event in events]


@router.post("", response_model=EventWithDetails)
async def create_event(request: EventCreate, uow_factory=Depends(get_uow_factory)) -> EventWithDetails:
    now = utc_now()
    event = Event(
        **request.model_dump(exclude={"published", "artist_ids"}),
        slug=slugify(request.title),
        created_at=now,
        updated_at=now,
    )
    event.apply_publish(request.published, now)

    async with await uow_factory() as uow:
        event = await uow.events.add(event)
        if request.artist_ids is not None:
            await uow.event_artists.replace(event.id, request.artist_ids)
        logger.info("event.created", event_id=str(event.id), slug=event.slug)
        return await present_event(uow, event)


@router.get("/{event_id}", response_model=EventWithDetails)
async def get_event(event_id: UUID, uow_factory=Depends(get_uow_factory)) -> EventWithDetails:
    async with await uow_factory() as uow:
        event = await uow.events.get_by_id(event_id)
        if event is None:
            raise NotFound("Event not found")
        return await present_event(uow, event)


@router.put("/{event_id}", response_model=EventWithDetails)
async def update_event(
    event_id: UUID, request: EventUpdate, uow_factory=Depends(get_uow_factory)
) -> EventWithDetails:
    """Partially update an event.

    ``artist_ids`` follows the same rule as media lists: absent leaves the
    links alone, ``[]`` removes them all.
    """
    async with await uow_factory() as uow:
        event = await uow.events.update(
            event_id, request.model_dump(exclude={"artist_ids"}), utc_now()
        )
        if event is None:
            raise NotFound("Event not found")
        if request.artist_ids is not None:
            await uow.event_artists.replace(event.id, request.artist_ids)
        logger.info("event.updated", event_id=str(event.id), published=event.published)
        return await present_event(uow, event)


@router.delete("/{event_id}", response_model=SuccessResponse)
async def delete_event(event_id: UUID, uow_factory=Depends(get_uow_factory)) -> SuccessResponse:
    """Delete an event and its artist links; an unknown id is not an error."""
    async with await uow_factory() as uow:
        await uow.events.delete(event_id)
    logger.info("event.deleted", event_id=str(event_id))
    return SuccessResponse()
