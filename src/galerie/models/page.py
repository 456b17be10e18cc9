"""Page entity - static content blocks addressed by a fixed key."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel

from galerie.core.timezone import utc_now


class Page(SQLModel, table=True):
    """Editable page such as "galerie" or "labomaton".

    Pages are created by migration and only ever updated through the API.
    """

    __tablename__ = "pages"  # type: ignore[assignment]

    key: str = Field(max_length=100, primary_key=True)
    title: str = Field(max_length=255)
    body_md: Optional[str] = Field(default=None, sa_type=Text)
    hero_media_id: Optional[UUID] = Field(default=None, foreign_key="media.id", ondelete="SET NULL")
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
