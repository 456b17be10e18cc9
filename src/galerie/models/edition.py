"""Edition entity (multiples, prints) and its ordered media attachments."""

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Text
from sqlmodel import Field, SQLModel

from galerie.models.publishing import Publishable


class Edition(Publishable, table=True):
    """Editioned work by an artist."""

    __tablename__ = "editions"  # type: ignore[assignment]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    artist_id: UUID = Field(foreign_key="artists.id", ondelete="CASCADE", index=True)
    title: str = Field(max_length=255)
    year: Optional[int] = Field(default=None)
    medium: Optional[str] = Field(default=None, max_length=255)
    dimensions: Optional[str] = Field(default=None, max_length=255)
    edition_size: Optional[str] = Field(default=None, max_length=255)
    price_note: Optional[str] = Field(default=None, sa_type=Text)
    artsper_url: Optional[str] = Field(default=None, sa_type=Text)


class EditionMedia(SQLModel, table=True):
    """Join row placing a media item at a position in an edition's gallery."""

    __tablename__ = "edition_media"  # type: ignore[assignment]

    edition_id: UUID = Field(foreign_key="editions.id", ondelete="CASCADE", primary_key=True)
    media_id: UUID = Field(foreign_key="media.id", ondelete="CASCADE", primary_key=True)
    sort_order: int = Field(default=0)
