"""Page repository. Pages are keyed by name and never created or deleted here."""

from datetime import datetime
from typing import Any, Mapping

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from galerie.models.page import Page


class PageRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, key: str) -> Page | None:
        result = await self.session.execute(select(Page).where(Page.key == key))  # type: ignore[arg-type]
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Page]:
        result = await self.session.execute(select(Page).order_by(Page.key.asc()))  # type: ignore[attr-defined]
        return list(result.scalars().all())

    async def update(self, key: str, changes: Mapping[str, Any], now: datetime) -> Page | None:
        """Apply a partial update (None values leave fields unchanged)."""
        page = await self.get(key)
        if page is None:
            return None
        for field, value in changes.items():
            if value is not None:
                setattr(page, field, value)
        page.updated_at = now
        await self.session.flush()
        return page
