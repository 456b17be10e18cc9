"""Artist repository."""

from datetime import datetime
from typing import Any, Mapping, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from galerie.models.artist import Artist
from galerie.models.event import EventArtist
from galerie.repositories.query import PageWindow, search_clause


class ArtistRepository:
    """Repository for Artist entities.

    Methods:
    - get_by_id: Retrieve artist by UUID
    - get_published_by_slug: Public lookup, published artists only
    - list_page: Admin/public listing with search and pagination
    - list_featured: Latest published artists for the home page
    - list_for_event: Artists linked to an event, by name
    - add / update / toggle_publish / delete
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, artist_id: UUID) -> Artist | None:
        result = await self.session.execute(select(Artist).where(Artist.id == artist_id))  # type: ignore[arg-type]
        return result.scalar_one_or_none()

    async def get_published_by_slug(self, slug: str) -> Artist | None:
        result = await self.session.execute(
            select(Artist).where(Artist.slug == slug, Artist.published == True)  # type: ignore[arg-type]  # noqa: E712
        )
        return result.scalar_one_or_none()

    async def list_page(
        self,
        window: PageWindow,
        q: Optional[str] = None,
        published_only: bool = False,
    ) -> list[Artist]:
        """List artists, most recently updated first.

        Public listings (``published_only=True``) are ordered by name instead.

        Args:
            window: Resolved page and page size
            q: Case-insensitive match against name, slug and biography
            published_only: Restrict to published artists

        Returns:
            One page of artists
        """
        stmt = select(Artist)
        clause = search_clause(q, Artist.name, Artist.slug, Artist.bio_md)
        if clause is not None:
            stmt = stmt.where(clause)
        if published_only:
            stmt = stmt.where(Artist.published == True).order_by(Artist.name.asc())  # type: ignore[arg-type,attr-defined]  # noqa: E712
        else:
            stmt = stmt.order_by(Artist.updated_at.desc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt.limit(window.per_page).offset(window.offset))
        return list(result.scalars().all())

    async def list_featured(self, limit: int = 4) -> list[Artist]:
        """Return the most recently published artists."""
        result = await self.session.execute(
            select(Artist)
            .where(Artist.published == True)  # type: ignore[arg-type]  # noqa: E712
            .order_by(Artist.published_at.desc().nulls_last())  # type: ignore[union-attr]
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_for_event(self, event_id: UUID) -> list[Artist]:
        result = await self.session.execute(
            select(Artist)
            .join(EventArtist, EventArtist.artist_id == Artist.id)  # type: ignore[arg-type]
            .where(EventArtist.event_id == event_id)  # type: ignore[arg-type]
            .order_by(Artist.name.asc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())

    async def add(self, artist: Artist) -> Artist:
        """Persist new artist (flushes so slug conflicts surface immediately)."""
        self.session.add(artist)
        await self.session.flush()
        return artist

    async def update(
        self, artist_id: UUID, changes: Mapping[str, Any], now: datetime
    ) -> Artist | None:
        """Apply a partial update.

        Returns:
            Updated artist, or None if no artist has this id
        """
        artist = await self.get_by_id(artist_id)
        if artist is None:
            return None
        artist.apply_changes(changes, slug_source="name", now=now)
        await self.session.flush()
        return artist

    async def toggle_publish(self, artist_id: UUID, now: datetime) -> Artist | None:
        artist = await self.get_by_id(artist_id)
        if artist is None:
            return None
        artist.toggle_publish(now)
        artist.updated_at = now
        await self.session.flush()
        return artist

    async def delete(self, artist_id: UUID) -> None:
        """Delete artist by id. Deleting an unknown id is not an error.

        Artworks and editions go with it (ON DELETE CASCADE); media keep
        their rows with ``artist_id`` cleared.
        """
        await self.session.execute(delete(Artist).where(Artist.id == artist_id))  # type: ignore[arg-type]
