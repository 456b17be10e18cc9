"""Waitlist entry entity - Labomaton sign-ups."""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from galerie.core.timezone import utc_now


class WaitlistEntry(SQLModel, table=True):
    """One email address on the waitlist (unique)."""

    __tablename__ = "labomaton_waitlist"  # type: ignore[assignment]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    source: Optional[str] = Field(default=None, max_length=255)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
