"""Admin view and CSV export of the waitlist."""

import csv
import io
from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response

from galerie.api.dependencies import get_uow_factory
from galerie.api.schemas import WaitlistEntryRead
from galerie.models.waitlist import WaitlistEntry
from galerie.repositories.query import page_window

logger = structlog.get_logger()
router = APIRouter(prefix="/waitlist", tags=["admin:waitlist"])

DEFAULT_WAITLIST_PER_PAGE = 50
EXPORT_COLUMNS = ("email", "source", "created_at")


def render_waitlist_csv(entries: list[WaitlistEntry]) -> str:
    """Render entries as CSV with a header row; missing sources become empty cells."""
    buffer = io.StringIO()
    writer = csv.writer(buffer)
    writer.writerow(EXPORT_COLUMNS)
    for entry in entries:
        writer.writerow([entry.email, entry.source or "", entry.created_at.isoformat()])
    return buffer.getvalue()


@router.get("", response_model=list[WaitlistEntryRead])
async def list_waitlist(
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    uow_factory=Depends(get_uow_factory),
) -> list[WaitlistEntryRead]:
    window = page_window(page, per_page, default_per_page=DEFAULT_WAITLIST_PER_PAGE)
    async with await uow_factory() as uow:
        entries = await uow.waitlist.list_page(window)
        return [WaitlistEntryRead.model_validate(entry) for entry in entries]


@router.get("/export")
async def export_waitlist(uow_factory=Depends(get_uow_factory)) -> Response:
    """Download the whole waitlist as ``waitlist.csv``."""
    async with await uow_factory() as uow:
        entries = await uow.waitlist.list_all()

    logger.info("waitlist.exported", count=len(entries))
    return Response(
        content=render_waitlist_csv(entries),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="waitlist.csv"'},
    )
