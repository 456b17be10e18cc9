"""Ordered media attachments for artworks and editions.

Both ``artwork_media`` and ``edition_media`` follow one rule: the caller sends
the full ordered list of media ids and the stored list is replaced wholesale.
``sort_order`` is the zero-based position in that list, so the stored order is
always dense (0, 1, 2, ...). There is no diffing and no partial reorder.
"""

from typing import Sequence, Union
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from galerie.models.artwork import ArtworkMedia
from galerie.models.edition import EditionMedia
from galerie.models.media import Media

LinkModel = Union[type[ArtworkMedia], type[EditionMedia]]


class MediaLinkRepository:
    """Repository for one parent→media join table.

    Example:
        links = MediaLinkRepository(session, ArtworkMedia, "artwork_id")
        await links.replace(artwork.id, [m1, m2, m3])
        await links.list_media(artwork.id)  # [(m1, 0), (m2, 1), (m3, 2)]
    """

    def __init__(self, session: AsyncSession, link_model: LinkModel, parent_field: str):
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session for database operations
            link_model: Join table model (ArtworkMedia or EditionMedia)
            parent_field: Name of the join column holding the parent id
        """
        self.session = session
        self.link_model = link_model
        self.parent_field = parent_field
        self.parent_column = getattr(link_model, parent_field)

    async def replace(self, parent_id: UUID, media_ids: Sequence[UUID]) -> None:
        """Replace every attachment of ``parent_id`` with ``media_ids``, in order.

        An empty sequence clears the attachments. Runs inside the caller's
        transaction, so a failure part-way leaves the previous list intact
        once the Unit of Work rolls back.

        Raises:
            ValueError: If ``media_ids`` repeats an id
        """
        if len(set(media_ids)) != len(media_ids):
            raise ValueError("media_ids must not contain duplicates")

        await self.session.execute(
            delete(self.link_model).where(self.parent_column == parent_id)  # type: ignore[arg-type]
        )
        for position, media_id in enumerate(media_ids):
            link = self.link_model(
                **{self.parent_field: parent_id, "media_id": media_id, "sort_order": position}
            )
            self.session.add(link)
        await self.session.flush()

    async def list_media(self, parent_id: UUID) -> list[tuple[Media, int]]:
        """Return the attached media with their positions, ordered by position."""
        result = await self.session.execute(
            select(Media, self.link_model.sort_order)  # type: ignore[call-overload]
            .join(self.link_model, self.link_model.media_id == Media.id)  # type: ignore[arg-type]
            .where(self.parent_column == parent_id)
            .order_by(self.link_model.sort_order.asc())  # type: ignore[attr-defined]
        )
        return [(media, sort_order) for media, sort_order in result.all()]
