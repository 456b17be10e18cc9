"""Public read-only API for the gallery website.

Everything here is unauthenticated, filtered to published content, and keyed
by slug rather than id. The only writes are the contact form and the
waitlist sign-up.
"""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query
from sqlalchemy.exc import IntegrityError

from galerie.api.dependencies import get_uow_factory
from galerie.api.errors import NotFound
from galerie.api.presenters import (
    present_artist,
    present_artist_detail,
    present_edition,
    present_event,
    present_page,
    present_post,
)
from galerie.api.schemas import (
    ArtistDetail,
    ArtistWithPortrait,
    ContactCreate,
    ContactMessageRead,
    EditionWithMedia,
    EventWithDetails,
    HomeResponse,
    PageWithHero,
    PostWithHero,
    WaitlistJoin,
    WaitlistJoinResponse,
)
from galerie.core.timezone import utc_now
from galerie.models.contact import ContactMessage
from galerie.repositories.query import page_window

logger = structlog.get_logger()
router = APIRouter(prefix="/api/public", tags=["public"])

UPCOMING_EVENTS_LIMIT = 3
FEATURED_ARTISTS_LIMIT = 4
LATEST_POSTS_LIMIT = 3


@router.get("/home", response_model=HomeResponse)
async def get_home(uow_factory=Depends(get_uow_factory)) -> HomeResponse:
    """Landing page data.

    Returns:
        current_event: Published event running now (open-ended events count)
        upcoming_events: Next published events, soonest first
        featured_artists: Most recently published artists
        latest_posts: Most recently published posts
    """
    now = utc_now()
    async with await uow_factory() as uow:
        current = await uow.events.get_current(now)
        upcoming = await uow.events.list_upcoming(now, limit=UPCOMING_EVENTS_LIMIT)
        artists = await uow.artists.list_featured(limit=FEATURED_ARTISTS_LIMIT)
        posts = await uow.posts.list_page(page_window(1, LATEST_POSTS_LIMIT), published_only=True)

        return HomeResponse(
            current_event=await present_event(uow, current) if current else None,
            upcoming_events=[await present_event(uow, event) for event in upcoming],
            featured_artists=[await present_artist(uow, artist) for artist in artists],
            latest_posts=[await present_post(uow, post) for post in posts],
        )


@router.get("/artists", response_model=list[ArtistWithPortrait])
async def list_artists(
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    uow_factory=Depends(get_uow_factory),
) -> list[ArtistWithPortrait]:
    """Published artists ordered by name."""
    async with await uow_factory() as uow:
        artists = await uow.artists.list_page(page_window(page, per_page), published_only=True)
        return [await present_artist(uow, artist) for artist in artists]


@router.get("/artists/{slug}", response_model=ArtistDetail)
async def get_artist(slug: str, uow_factory=Depends(get_uow_factory)) -> ArtistDetail:
    async with await uow_factory() as uow:
        artist = await uow.artists.get_published_by_slug(slug)
        if artist is None:
            raise NotFound("Artist not found")
        return await present_artist_detail(uow, artist)


@router.get("/editions", response_model=list[EditionWithMedia])
async def list_editions(
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    uow_factory=Depends(get_uow_factory),
) -> list[EditionWithMedia]:
    async with await uow_factory() as uow:
        editions = await uow.editions.list_page(page_window(page, per_page), published_only=True)
        return [await present_edition(uow, edition) for edition in editions]


@router.get("/events", response_model=list[EventWithDetails])
async def list_events(
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    uow_factory=Depends(get_uow_factory),
) -> list[EventWithDetails]:
    """Published events, latest start first."""
    async with await uow_factory() as uow:
        events = await uow.events.list_page(page_window(page, per_page), published_only=True)
        return [await present_event(uow, event) for event in events]


@router.get("/events/{slug}", response_model=EventWithDetails)
async def get_event(slug: str, uow_factory=Depends(get_uow_factory)) -> EventWithDetails:
    async with await uow_factory() as uow:
        event = await uow.events.get_published_by_slug(slug)
        if event is None:
            raise NotFound("Event not found")
        return await present_event(uow, event)


@router.get("/posts", response_model=list[PostWithHero])
async def list_posts(
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    uow_factory=Depends(get_uow_factory),
) -> list[PostWithHero]:
    """Published posts, most recently published first."""
    async with await uow_factory() as uow:
        posts = await uow.posts.list_page(page_window(page, per_page), published_only=True)
        return [await present_post(uow, post) for post in posts]


@router.get("/posts/{slug}", response_model=PostWithHero)
async def get_post(slug: str, uow_factory=Depends(get_uow_factory)) -> PostWithHero:
    async with await uow_factory() as uow:
        post = await uow.posts.get_published_by_slug(slug)
        if post is None:
            raise NotFound("Post not found")
        return await present_post(uow, post)


@router.get("/pages/{key}", response_model=PageWithHero)
async def get_page(key: str, uow_factory=Depends(get_uow_factory)) -> PageWithHero:
    async with await uow_factory() as uow:
        page = await uow.pages.get(key)
        if page is None:
            raise NotFound("Page not found")
        return await present_page(uow, page)


@router.post("/contact", response_model=ContactMessageRead)
async def create_contact(
    request: ContactCreate, uow_factory=Depends(get_uow_factory)
) -> ContactMessageRead:
    """Store a contact form submission with status "new"."""
    async with await uow_factory() as uow:
        message = await uow.messages.add(
            ContactMessage(name=request.name, email=str(request.email), message=request.message)
        )
        logger.info("contact.received", message_id=str(message.id))
        return ContactMessageRead.model_validate(message)


@router.post("/waitlist", response_model=WaitlistJoinResponse)
async def join_waitlist(
    request: WaitlistJoin, uow_factory=Depends(get_uow_factory)
) -> WaitlistJoinResponse:
    """Add an email to the waitlist. Joining twice is not an error."""
    try:
        async with await uow_factory() as uow:
            created = await uow.waitlist.add_if_absent(str(request.email), request.source)
    except IntegrityError:
        # Concurrent sign-up with the same email won the insert
        created = False

    if created:
        logger.info("waitlist.joined", source=request.source)
        return WaitlistJoinResponse(success=True, message="Successfully joined the waitlist")
    return WaitlistJoinResponse(success=True, message="You are already on the waitlist")
