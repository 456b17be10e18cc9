"""Media repository."""

from typing import Any, Mapping, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from galerie.models.artist import Artist
from galerie.models.media import Media
from galerie.repositories.query import (
    LIKE_ESCAPE,
    PageWindow,
    escape_like,
    normalize_search,
    search_clause,
)


class MediaRepository:
    """Repository for Media metadata rows.

    Methods:
    - get_by_id: Retrieve media by UUID
    - list_page: Newest first, with folder/artist/text filters and the owning artist's name
    - list_folders: Distinct non-empty folder names
    - add / update / delete
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, media_id: UUID) -> Media | None:
        result = await self.session.execute(select(Media).where(Media.id == media_id))  # type: ignore[arg-type]
        return result.scalar_one_or_none()

    async def list_page(
        self,
        window: PageWindow,
        q: Optional[str] = None,
        folder: Optional[str] = None,
        artist_id: Optional[UUID] = None,
    ) -> list[tuple[Media, Optional[str]]]:
        """List media with the linked artist's name.

        Args:
            window: Resolved page and page size
            q: Case-insensitive match against filename, alt text and credit
            folder: Case-insensitive substring match on the folder name
            artist_id: Exact artist filter

        Returns:
            (media, artist_name) pairs, newest upload first
        """
        stmt = select(Media, Artist.name).outerjoin(Artist, Media.artist_id == Artist.id)  # type: ignore[arg-type,call-overload]
        clause = search_clause(q, Media.filename, Media.alt, Media.credit)
        if clause is not None:
            stmt = stmt.where(clause)
        folder_text = normalize_search(folder)
        if folder_text is not None:
            stmt = stmt.where(
                Media.folder.ilike(f"%{escape_like(folder_text)}%", escape=LIKE_ESCAPE)  # type: ignore[union-attr]
            )
        if artist_id is not None:
            stmt = stmt.where(Media.artist_id == artist_id)  # type: ignore[arg-type]
        stmt = stmt.order_by(Media.created_at.desc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt.limit(window.per_page).offset(window.offset))
        return [(media, artist_name) for media, artist_name in result.all()]

    async def list_folders(self) -> list[str]:
        result = await self.session.execute(
            select(Media.folder)
            .where(Media.folder.is_not(None), Media.folder != "")  # type: ignore[union-attr,arg-type]
            .distinct()
            .order_by(Media.folder)
        )
        return [folder for folder in result.scalars().all() if folder]

    async def add(self, media: Media) -> Media:
        self.session.add(media)
        await self.session.flush()
        return media

    async def update(self, media_id: UUID, changes: Mapping[str, Any]) -> Media | None:
        """Apply a partial metadata update (None values leave fields unchanged)."""
        media = await self.get_by_id(media_id)
        if media is None:
            return None
        for field, value in changes.items():
            if value is not None:
                setattr(media, field, value)
        await self.session.flush()
        return media

    async def delete(self, media: Media) -> None:
        """Delete the row and flush, leaving the commit to the Unit of Work.

        Callers remove the stored object between this flush and the commit.
        """
        await self.session.delete(media)
        await self.session.flush()
