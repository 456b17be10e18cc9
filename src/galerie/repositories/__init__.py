"""Repository layer for the gallery backend.

Provides data access abstractions for all domain entities.
No base classes - each repository is self-contained; shared query helpers
live in ``galerie.repositories.query``.
"""

from galerie.repositories.artist import ArtistRepository
from galerie.repositories.artwork import ArtworkRepository
from galerie.repositories.contact import ContactMessageRepository
from galerie.repositories.edition import EditionRepository
from galerie.repositories.event import EventArtistRepository, EventRepository
from galerie.repositories.media import MediaRepository
from galerie.repositories.media_links import MediaLinkRepository
from galerie.repositories.page import PageRepository
from galerie.repositories.post import PostRepository
from galerie.repositories.user import UserRepository
from galerie.repositories.waitlist import WaitlistRepository

__all__ = [
    "ArtistRepository",
    "ArtworkRepository",
    "ContactMessageRepository",
    "EditionRepository",
    "EventRepository",
    "EventArtistRepository",
    "MediaRepository",
    "MediaLinkRepository",
    "PageRepository",
    "PostRepository",
    "UserRepository",
    "WaitlistRepository",
]
