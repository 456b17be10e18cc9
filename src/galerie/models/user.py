"""User entity - an account allowed into the admin surface."""

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from galerie.core.timezone import utc_now


class UserRole(str, Enum):
    """Account role carried in access tokens."""

    ADMIN = "admin"
    EDITOR = "editor"


class User(SQLModel, table=True):
    """User represents a back-office account with a bcrypt password hash."""

    __tablename__ = "users"  # type: ignore[assignment]

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    password_hash: str = Field(max_length=255)
    role: str = Field(default=UserRole.EDITOR.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
