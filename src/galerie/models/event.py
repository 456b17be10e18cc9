"""Event entity (exhibitions, openings) and its artist links."""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel

from galerie.models.publishing import Publishable


class Event(Publishable, table=True):
    """Dated event, optionally open-ended (no ``end_at``)."""

    __tablename__ = "events"  # type: ignore[assignment]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=255)
    start_at: datetime = Field(sa_type=DateTime(timezone=True), index=True)
    end_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    location: Optional[str] = Field(default=None, max_length=255)
    description_md: Optional[str] = Field(default=None, sa_type=Text)
    hero_media_id: Optional[UUID] = Field(default=None, foreign_key="media.id", ondelete="SET NULL")


class EventArtist(SQLModel, table=True):
    """Unordered many-to-many link between events and artists."""

    __tablename__ = "event_artists"  # type: ignore[assignment]

    event_id: UUID = Field(foreign_key="events.id", ondelete="CASCADE", primary_key=True)
    artist_id: UUID = Field(foreign_key="artists.id", ondelete="CASCADE", primary_key=True)
