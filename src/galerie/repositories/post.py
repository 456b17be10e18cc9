"""Post repository."""

from datetime import datetime
from typing import Any, Mapping, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from galerie.models.post import Post
from galerie.repositories.query import PageWindow, search_clause


class PostRepository:
    """Repository for Post entities.

    Admin listings are ordered by update time; public listings by publication
    time with never-published rows last.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, post_id: UUID) -> Post | None:
        result = await self.session.execute(select(Post).where(Post.id == post_id))  # type: ignore[arg-type]
        return result.scalar_one_or_none()

    async def get_published_by_slug(self, slug: str) -> Post | None:
        result = await self.session.execute(
            select(Post).where(Post.slug == slug, Post.published == True)  # type: ignore[arg-type]  # noqa: E712
        )
        return result.scalar_one_or_none()

    async def list_page(
        self,
        window: PageWindow,
        q: Optional[str] = None,
        published_only: bool = False,
    ) -> list[Post]:
        stmt = select(Post)
        clause = search_clause(q, Post.title, Post.body_md)
        if clause is not None:
            stmt = stmt.where(clause)
        if published_only:
            stmt = stmt.where(Post.published == True).order_by(  # type: ignore[arg-type]  # noqa: E712
                Post.published_at.desc().nulls_last()  # type: ignore[union-attr]
            )
        else:
            stmt = stmt.order_by(Post.updated_at.desc())  # type: ignore[attr-defined]
        result = await self.session.execute(stmt.limit(window.per_page).offset(window.offset))
        return list(result.scalars().all())

    async def add(self, post: Post) -> Post:
        self.session.add(post)
        await self.session.flush()
        return post

    async def update(
        self, post_id: UUID, changes: Mapping[str, Any], now: datetime
    ) -> Post | None:
        post = await self.get_by_id(post_id)
        if post is None:
            return None
        post.apply_changes(changes, slug_source="title", now=now)
        await self.session.flush()
        return post

    async def delete(self, post_id: UUID) -> None:
        await self.session.execute(delete(Post).where(Post.id == post_id))  # type: ignore[arg-type]
