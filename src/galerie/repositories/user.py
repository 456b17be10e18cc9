"""User repository with case-insensitive email lookup."""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from galerie.models.user import User, UserRole


class UserRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> User | None:
        result = await self.session.execute(select(User).where(User.id == user_id))  # type: ignore[arg-type]
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """Retrieve user by email.

        Uses LOWER() comparison so "Admin@Example.com" and "admin@example.com"
        are the same account.
        """
        result = await self.session.execute(
            select(User).where(func.lower(User.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def has_admin(self) -> bool:
        result = await self.session.execute(
            select(func.count()).select_from(User).where(User.role == UserRole.ADMIN.value)  # type: ignore[arg-type]
        )
        return result.scalar_one() > 0

    async def add(self, user: User) -> User:
        self.session.add(user)
        await self.session.flush()
        return user
