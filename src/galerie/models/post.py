"""Post entity - news items."""

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Text
from sqlmodel import Field

from galerie.models.publishing import Publishable


class Post(Publishable, table=True):
    __tablename__ = "posts"  # type: ignore[assignment]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    title: str = Field(max_length=255)
    body_md: Optional[str] = Field(default=None, sa_type=Text)
    hero_media_id: Optional[UUID] = Field(default=None, foreign_key="media.id", ondelete="SET NULL")
