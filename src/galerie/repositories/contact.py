"""Contact message repository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from galerie.models.contact import ContactMessage
from galerie.repositories.query import PageWindow, search_clause


class ContactMessageRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, message_id: UUID) -> ContactMessage | None:
        result = await self.session.execute(
            select(ContactMessage).where(ContactMessage.id == message_id)  # type: ignore[arg-type]
        )
        return result.scalar_one_or_none()

    async def list_page(self, window: PageWindow, q: Optional[str] = None) -> list[ContactMessage]:
        """List messages, newest first (search covers name, email and message)."""
        stmt = select(ContactMessage)
        clause = search_clause(q, ContactMessage.name, ContactMessage.email, ContactMessage.message)
        if clause is not None:
            stmt = stmt.where(clause)
        stmt = stmt.order_by(ContactMessage.created_at.desc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt.limit(window.per_page).offset(window.offset))
        return list(result.scalars().all())

    async def add(self, message: ContactMessage) -> ContactMessage:
        self.session.add(message)
        await self.session.flush()
        return message

    async def set_status(self, message_id: UUID, status: str) -> ContactMessage | None:
        message = await self.get_by_id(message_id)
        if message is None:
            return None
        message.status = status
        await self.session.flush()
        return message
