"""Waitlist repository."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from galerie.models.waitlist import WaitlistEntry
from galerie.repositories.query import PageWindow


class WaitlistRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> WaitlistEntry | None:
        """Retrieve entry by email (case-insensitive)."""
        result = await self.session.execute(
            select(WaitlistEntry).where(func.lower(WaitlistEntry.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def add_if_absent(self, email: str, source: str | None) -> bool:
        """Add an email unless it is already on the list.

        Returns:
            True if a new entry was created, False if the email was already present
        """
        if await self.get_by_email(email) is not None:
            return False
        self.session.add(WaitlistEntry(email=email, source=source))
        await self.session.flush()
        return True

    async def list_page(self, window: PageWindow) -> list[WaitlistEntry]:
        result = await self.session.execute(
            select(WaitlistEntry)
            .order_by(WaitlistEntry.created_at.desc())  # type: ignore[attr-defined]
            .limit(window.per_page)
            .offset(window.offset)
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[WaitlistEntry]:
        """Every entry, newest first (used by the CSV export)."""
        result = await self.session.execute(
            select(WaitlistEntry).order_by(WaitlistEntry.created_at.desc())  # type: ignore[attr-defined]
        )
        return list(result.scalars().all())
