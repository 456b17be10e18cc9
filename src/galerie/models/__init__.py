"""SQLModel database entities.

All models are imported here to ensure they're registered with SQLModel metadata
for Alembic autogenerate support.
"""

from galerie.models.artist import Artist
from galerie.models.artwork import Artwork, ArtworkMedia
from galerie.models.contact import ContactMessage, MessageStatus
from galerie.models.edition import Edition, EditionMedia
from galerie.models.event import Event, EventArtist
from galerie.models.media import Media
from galerie.models.page import Page
from galerie.models.post import Post
from galerie.models.publishing import Publishable, resolve_publish_state
from galerie.models.user import User, UserRole
from galerie.models.waitlist import WaitlistEntry

__all__ = [
    "Artist",
    "Artwork",
    "ArtworkMedia",
    "ContactMessage",
    "MessageStatus",
    "Edition",
    "EditionMedia",
    "Event",
    "EventArtist",
    "Media",
    "Page",
    "Post",
    "Publishable",
    "resolve_publish_state",
    "User",
    "UserRole",
    "WaitlistEntry",
]
