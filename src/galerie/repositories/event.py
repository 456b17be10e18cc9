"""Event and event-artist repositories."""

from datetime import datetime
from typing import Any, Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from galerie.models.event import Event, EventArtist
from galerie.repositories.query import PageWindow, search_clause


class EventRepository:
    """Repository for Event entities.

    Listings are ordered by ``start_at`` descending rather than by update time.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, event_id: UUID) -> Event | None:
        result = await self.session.execute(select(Event).where(Event.id == event_id))  # type: ignore[arg-type]
        return result.scalar_one_or_none()

    async def get_published_by_slug(self, slug: str) -> Event | None:
        result = await self.session.execute(
            select(Event).where(Event.slug == slug, Event.published == True)  # type: ignore[arg-type]  # noqa: E712
        )
        return result.scalar_one_or_none()

    async def list_page(
        self,
        window: PageWindow,
        q: Optional[str] = None,
        published_only: bool = False,
    ) -> list[Event]:
        stmt = select(Event)
        clause = search_clause(q, Event.title, Event.location, Event.description_md)
        if clause is not None:
            stmt = stmt.where(clause)
        if published_only:
            stmt = stmt.where(Event.published == True)  # type: ignore[arg-type]  # noqa: E712
        stmt = stmt.order_by(Event.start_at.desc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt.limit(window.per_page).offset(window.offset))
        return list(result.scalars().all())

    async def get_current(self, now: datetime) -> Event | None:
        """Return the published event running at ``now``.

        An event without ``end_at`` counts as running from its start onwards.
        When several overlap, the one that started last wins.
        """
        result = await self.session.execute(
            select(Event)
            .where(
                Event.published == True,  # type: ignore[arg-type]  # noqa: E712
                Event.start_at <= now,  # type: ignore[arg-type]
                or_(Event.end_at.is_(None), Event.end_at >= now),  # type: ignore[union-attr,operator]
            )
            .order_by(Event.start_at.desc())  # type: ignore[attr-defined]
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def list_upcoming(self, now: datetime, limit: int = 3) -> list[Event]:
        """Published events starting after ``now``, soonest first."""
        result = await self.session.execute(
            select(Event)
            .where(Event.published == True, Event.start_at > now)  # type: ignore[arg-type]  # noqa: E712
            .order_by(Event.start_at.asc())  # type: ignore[attr-defined]
            .limit(limit)
        )
        return list(result.scalars().all())

    async def add(self, event: Event) -> Event:
        self.session.add(event)
        await self.session.flush()
        return event

    async def update(
        self, event_id: UUID, changes: Mapping[str, Any], now: datetime
    ) -> Event | None:
        event = await self.get_by_id(event_id)
        if event is None:
            return None
        event.apply_changes(changes, slug_source="title", now=now)
        await self.session.flush()
        return event

    async def delete(self, event_id: UUID) -> None:
        await self.session.execute(delete(Event).where(Event.id == event_id))  # type: ignore[arg-type]


class EventArtistRepository:
    """Repository for the unordered event↔artist links."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def replace(self, event_id: UUID, artist_ids: Sequence[UUID]) -> None:
        """Replace the event's artist links with ``artist_ids``.

        Raises:
            ValueError: If ``artist_ids`` repeats an id
        """
        if len(set(artist_ids)) != len(artist_ids):
            raise ValueError("artist_ids must not contain duplicates")

        await self.session.execute(
            delete(EventArtist).where(EventArtist.event_id == event_id)  # type: ignore[arg-type]
        )
        for artist_id in artist_ids:
            self.session.add(EventArtist(event_id=event_id, artist_id=artist_id))
        await self.session.flush()
