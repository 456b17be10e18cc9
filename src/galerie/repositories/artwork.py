"""Artwork repository."""

from datetime import datetime
from typing import Any, Mapping, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from galerie.models.artist import Artist
from galerie.models.artwork import Artwork
from galerie.repositories.query import PageWindow, search_clause


class ArtworkRepository:
    """Repository for Artwork entities.

    Search matches title, medium, dimensions and the artist's name.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, artwork_id: UUID) -> Artwork | None:
        result = await self.session.execute(select(Artwork).where(Artwork.id == artwork_id))  # type: ignore[arg-type]
        return result.scalar_one_or_none()

    async def get_published_by_slug(self, slug: str) -> Artwork | None:
        result = await self.session.execute(
            select(Artwork).where(Artwork.slug == slug, Artwork.published == True)  # type: ignore[arg-type]  # noqa: E712
        )
        return result.scalar_one_or_none()

    async def list_page(
        self,
        window: PageWindow,
        q: Optional[str] = None,
        published_only: bool = False,
    ) -> list[Artwork]:
        """List artworks, most recently updated first."""
        stmt = select(Artwork).outerjoin(Artist, Artwork.artist_id == Artist.id)  # type: ignore[arg-type]
        clause = search_clause(
            q, Artwork.title, Artwork.medium, Artwork.dimensions, Artist.name
        )
        if clause is not None:
            stmt = stmt.where(clause)
        if published_only:
            stmt = stmt.where(Artwork.published == True)  # type: ignore[arg-type]  # noqa: E712
        stmt = stmt.order_by(Artwork.updated_at.desc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt.limit(window.per_page).offset(window.offset))
        return list(result.scalars().all())

    async def list_published_for_artist(self, artist_id: UUID) -> list[Artwork]:
        """Published artworks of one artist, newest year first, undated last."""
        result = await self.session.execute(
            select(Artwork)
            .where(Artwork.artist_id == artist_id, Artwork.published == True)  # type: ignore[arg-type]  # noqa: E712
            .order_by(Artwork.year.desc().nulls_last(), Artwork.title.asc())  # type: ignore[union-attr,attr-defined]
        )
        return list(result.scalars().all())

    async def add(self, artwork: Artwork) -> Artwork:
        self.session.add(artwork)
        await self.session.flush()
        return artwork

    async def update(
        self, artwork_id: UUID, changes: Mapping[str, Any], now: datetime
    ) -> Artwork | None:
        artwork = await self.get_by_id(artwork_id)
        if artwork is None:
            return None
        artwork.apply_changes(changes, slug_source="title", now=now)
        await self.session.flush()
        return artwork

    async def delete(self, artwork_id: UUID) -> None:
        await self.session.execute(delete(Artwork).where(Artwork.id == artwork_id))  # type: ignore[arg-type]
