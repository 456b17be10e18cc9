"""Media entity - metadata for an image stored in object storage."""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel

from galerie.core.timezone import utc_now


class Media(SQLModel, table=True):
    """Media row pointing at an uploaded object.

    ``filename`` is the storage key (``<uuid>.<ext>``), ``url`` the public URL
    built from it. The row is owned by the database; the bytes by the object
    store.
    """

    __tablename__ = "media"  # type: ignore[assignment]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    filename: str = Field(max_length=255)
    url: str = Field(sa_type=Text)
    alt: Optional[str] = Field(default=None, sa_type=Text)
    credit: Optional[str] = Field(default=None, sa_type=Text)
    folder: Optional[str] = Field(default=None, max_length=255, index=True)
    artist_id: Optional[UUID] = Field(
        default=None, foreign_key="artists.id", ondelete="SET NULL", index=True
    )
    width: Optional[int] = Field(default=None)
    height: Optional[int] = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
