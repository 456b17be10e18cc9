"""Publish lifecycle shared by artists, artworks, editions, events and posts.

The lifecycle has two states. ``published_at`` records the instant of the
last false→true transition and is cleared on true→false. Any request that does
not change the flag leaves ``published_at`` exactly as stored.

    requested   current=False           current=True
    ---------   ---------------------   ---------------------
    None        unchanged               unchanged
    True        published_at = now      unchanged
    False       unchanged               published_at = None
"""

from datetime import datetime
from typing import Any, Mapping, Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from galerie.core.slug import slugify
from galerie.core.timezone import utc_now


def resolve_publish_state(
    current_published: bool,
    current_published_at: Optional[datetime],
    requested: Optional[bool],
    now: datetime,
) -> tuple[bool, Optional[datetime]]:
    """Compute the (published, published_at) pair after a publish request.

    Args:
        current_published: Stored flag before the operation
        current_published_at: Stored timestamp before the operation
        requested: Requested flag, or None when the request omits it
        now: Timestamp of the operation

    Returns:
        New (published, published_at) pair
    """
    if requested is None or requested == current_published:
        return current_published, current_published_at
    if requested:
        return True, now
    return False, None


class Publishable(SQLModel):
    """Columns and transitions common to every publishable entity.

    Not a table by itself: each subclass with ``table=True`` gets its own copy
    of these columns.
    """

    slug: str = Field(max_length=255, unique=True, index=True)
    published: bool = Field(default=False, index=True)
    published_at: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    def apply_publish(self, requested: Optional[bool], now: datetime) -> None:
        """Apply a publish request (None means the request left it out)."""
        self.published, self.published_at = resolve_publish_state(
            self.published, self.published_at, requested, now
        )

    def toggle_publish(self, now: datetime) -> None:
        """Flip the published flag, following the same transition table."""
        self.apply_publish(not self.published, now)

    def apply_changes(self, changes: Mapping[str, Any], slug_source: str, now: datetime) -> None:
        """Merge a partial update into this row.

        Values that are None leave the stored field unchanged. The slug is
        recomputed only when ``slug_source`` (the title or name field) is part
        of the update. The publish decision is taken against the row's state
        before the update, and ``updated_at`` always moves to ``now``.

        Args:
            changes: Field values from the request, ``published`` included
            slug_source: Field the slug is derived from ("name" or "title")
            now: Timestamp of the operation
        """
        for field, value in changes.items():
            if field == "published" or value is None:
                continue
            setattr(self, field, value)
        if changes.get(slug_source) is not None:
            self.slug = slugify(changes[slug_source])
        self.apply_publish(changes.get("published"), now)
        self.updated_at = now
