"""Artist entity."""

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import Text
from sqlmodel import Field

from galerie.models.publishing import Publishable


class Artist(Publishable, table=True):
    """Artist shown on the public site once published."""

    __tablename__ = "artists"  # type: ignore[assignment]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    bio_md: Optional[str] = Field(default=None, sa_type=Text)
    portrait_media_id: Optional[UUID] = Field(
        default=None, foreign_key="media.id", ondelete="SET NULL"
    )
    artsper_url: Optional[str] = Field(default=None, sa_type=Text)
    website_url: Optional[str] = Field(default=None, sa_type=Text)
    instagram_url: Optional[str] = Field(default=None, sa_type=Text)
