"""Contact message entity - submissions from the public contact form."""

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Text
from sqlmodel import Field, SQLModel

from galerie.core.timezone import utc_now


class MessageStatus(str, Enum):
    """Inbox triage status."""

    NEW = "new"
    READ = "read"
    ARCHIVED = "archived"


class ContactMessage(SQLModel, table=True):
    __tablename__ = "contact_messages"  # type: ignore[assignment]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: str = Field(max_length=255)
    message: str = Field(sa_type=Text)
    status: str = Field(default=MessageStatus.NEW.value, max_length=20, index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
