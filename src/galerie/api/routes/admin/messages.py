"""Admin inbox for contact form messages."""

from typing import Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query

from galerie.api.dependencies import get_uow_factory
from galerie.api.errors import NotFound
from galerie.api.schemas import ContactMessageRead, MessageStatusUpdate
from galerie.repositories.query import page_window

logger = structlog.get_logger()
router = APIRouter(prefix="/messages", tags=["admin:messages"])

DEFAULT_MESSAGES_PER_PAGE = 50


@router.get("", response_model=list[ContactMessageRead])
async def list_messages(
    q: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    uow_factory=Depends(get_uow_factory),
) -> list[ContactMessageRead]:
    """Messages, newest first."""
    window = page_window(page, per_page, default_per_page=DEFAULT_MESSAGES_PER_PAGE)
    async with await uow_factory() as uow:
        messages = await uow.messages.list_page(window, q=q)
        return [ContactMessageRead.model_validate(message) for message in messages]


@router.put("/{message_id}/status", response_model=ContactMessageRead)
async def update_message_status(
    message_id: UUID, request: MessageStatusUpdate, uow_factory=Depends(get_uow_factory)
) -> ContactMessageRead:
    """Move a message between new, read and archived."""
    async with await uow_factory() as uow:
        message = await uow.messages.set_status(message_id, request.status.value)
        if message is None:
            raise NotFound("Message not found")
        logger.info("message.status_changed", message_id=str(message_id), status=message.status)
        return ContactMessageRead.model_validate(message)
