"""Edition repository."""

from datetime import datetime
from typing import Any, Mapping, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from galerie.models.artist import Artist
from galerie.models.edition import Edition
from galerie.repositories.query import PageWindow, search_clause


class EditionRepository:
    """Repository for Edition entities.

    Mirrors ArtworkRepository; search also covers ``edition_size``.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, edition_id: UUID) -> Edition | None:
        result = await self.session.execute(select(Edition).where(Edition.id == edition_id))  # type: ignore[arg-type]
        return result.scalar_one_or_none()

    async def list_page(
        self,
        window: PageWindow,
        q: Optional[str] = None,
        published_only: bool = False,
    ) -> list[Edition]:
        stmt = select(Edition).outerjoin(Artist, Edition.artist_id == Artist.id)  # type: ignore[arg-type]
        clause = search_clause(
            q,
            Edition.title,
            Edition.medium,
            Edition.dimensions,
            Edition.edition_size,
            Artist.name,
        )
        if clause is not None:
            stmt = stmt.where(clause)
        if published_only:
            stmt = stmt.where(Edition.published == True)  # type: ignore[arg-type]  # noqa: E712
        stmt = stmt.order_by(Edition.updated_at.desc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt.limit(window.per_page).offset(window.offset))
        return list(result.scalars().all())

    async def add(self, edition: Edition) -> Edition:
        self.session.add(edition)
        await self.session.flush()
        return edition

    async def update(
        self, edition_id: UUID, changes: Mapping[str, Any], now: datetime
    ) -> Edition | None:
        edition = await self.get_by_id(edition_id)
        if edition is None:
            return None
        edition.apply_changes(changes, slug_source="title", now=now)
        await self.session.flush()
        return edition

    async def toggle_publish(self, edition_id: UUID, now: datetime) -> Edition | None:
        edition = await self.get_by_id(edition_id)
        if edition is None:
            return None
        edition.toggle_publish(now)
        edition.updated_at = now
        await self.session.flush()
        return edition

    async def delete(self, edition_id: UUID) -> None:
        await self.session.execute(delete(Edition).where(Edition.id == edition_id))  # type: ignore[arg-type]
