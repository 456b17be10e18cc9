"""Per-request transaction scope for the gallery backend.

Every route opens one UnitOfWork, so an entity write and the replacement of
its media or artist links land in the same transaction, and a media row is
only removed once its stored object is gone.
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from galerie.models.artwork import ArtworkMedia
from galerie.models.edition import EditionMedia
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

logger = structlog.get_logger()


class UnitOfWork:
    """One session shared by the content, media, inbox and account repositories.

    Leaving the block without an exception commits; an exception (a slug
    conflict, a failed object delete) rolls everything back and propagates.

    Example:
        async with await uow_factory() as uow:
            artwork = await uow.artworks.add(artwork)
            await uow.artwork_media.replace(artwork.id, media_ids)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

        self.users = UserRepository(session)
        self.media = MediaRepository(session)
        self.artists = ArtistRepository(session)
        self.artworks = ArtworkRepository(session)
        self.artwork_media = MediaLinkRepository(session, ArtworkMedia, "artwork_id")
        self.editions = EditionRepository(session)
        self.edition_media = MediaLinkRepository(session, EditionMedia, "edition_id")
        self.events = EventRepository(session)
        self.event_artists = EventArtistRepository(session)
        self.posts = PostRepository(session)
        self.pages = PageRepository(session)
        self.messages = ContactMessageRepository(session)
        self.waitlist = WaitlistRepository(session)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Commit or roll back, then hand the connection back to the pool.

        Returns:
            False, so the route's exception reaches the error handlers
        """
        try:
            if exc_type is None:
                await self.session.commit()
                logger.debug("transaction.committed")
            else:
                await self.session.rollback()
                logger.info("transaction.rolled_back", exc_type=exc_type.__name__)
        finally:
            await self.session.close()

        return False


def create_uow_factory(session_factory: async_sessionmaker[AsyncSession]):
    """Bind UnitOfWork creation to a session factory.

    The app stores the result on ``app.state.uow_factory``; tests swap in one
    bound to their own database.

    Example:
        uow_factory = create_uow_factory(create_session_factory(engine))

        async with await uow_factory() as uow:
            await uow.artists.add(artist)
    """

    async def _create_uow():
        session = session_factory()
        return UnitOfWork(session)

    return _create_uow
