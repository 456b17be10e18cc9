"""Admin API. Every route below requires a bearer token with the admin role."""

from fastapi import APIRouter, Depends

from galerie.api.dependencies import require_admin
from galerie.api.routes.admin import (
    artists,
    artworks,
    editions,
    events,
    media,
    messages,
    pages,
    posts,
    waitlist,
)

router = APIRouter(prefix="/api/admin", dependencies=[Depends(require_admin)])

router.include_router(media.router)
router.include_router(artists.router)
router.include_router(artworks.router)
router.include_router(editions.router)
router.include_router(events.router)
router.include_router(posts.router)
router.include_router(pages.router)
router.include_router(messages.router)
router.include_router(waitlist.router)
