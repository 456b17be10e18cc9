"""Admin CRUD for news posts."""

from typing import Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query

from galerie.api.dependencies import get_uow_factory
from galerie.api.errors import NotFound
from galerie.api.presenters import present_post
from galerie.api.schemas import PostCreate, PostUpdate, PostWithHero, SuccessResponse
from galerie.core.slug import slugify
from galerie.core.timezone import utc_now
from galerie.models.post import Post
from galerie.repositories.query import page_window

logger = structlog.get_logger()
router = APIRouter(prefix="/posts", tags=["admin:posts"])


@router.get("", response_model=list[PostWithHero])
async def list_posts(
    q: Optional[str] = Query(default=None),
    page: Optional[int] = Query(default=None),
    per_page: Optional[int] = Query(default=None),
    uow_factory=Depends(get_uow_factory),
) -> list[PostWithHero]:
    async with await uow_factory() as uow:
        posts = await uow.posts.list_page(page_window(page, per_page), q=q)
        return [await present_post(uow, post) for post in posts]


@router.post("", response_model=PostWithHero)
async def create_post(request: PostCreate, uow_factory=Depends(get_uow_factory)) -> PostWithHero:
    now = utc_now()
    post = Post(
        **request.model_dump(exclude={"published"}),
        slug=slugify(request.title),
        created_at=now,
        updated_at=now,
    )
    post.apply_publish(request.published, now)

    async with await uow_factory() as uow:
        post = await uow.posts.add(post)
        logger.info("post.created", post_id=str(post.id), slug=post.slug)
        return await present_post(uow, post)


@router.get("/{post_id}", response_model=PostWithHero)
async def get_post(post_id: UUID, uow_factory=Depends(get_uow_factory)) -> PostWithHero:
    async with await uow_factory() as uow:
        post = await uow.posts.get_by_id(post_id)
        if post is None:
            raise NotFound("Post not found")
        return await present_post(uow, post)


@router.put("/{post_id}", response_model=PostWithHero)
async def update_post(
    post_id: UUID, request: PostUpdate, uow_factory=Depends(get_uow_factory)
) -> PostWithHero:
    async with await uow_factory() as uow:
        post = await uow.posts.update(post_id, request.model_dump(), utc_now())
        if post is None:
            raise NotFound("Post not found")
        logger.info("post.updated", post_id=str(post.id), published=post.published)
        return await present_post(uow, post)


@router.delete("/{post_id}", response_model=SuccessResponse)
async def delete_post(post_id: UUID, uow_factory=Depends(get_uow_factory)) -> SuccessResponse:
    async with await uow_factory() as uow:
        await uow.posts.delete(post_id)
    logger.info("post.deleted", post_id=str(post_id))
    return SuccessResponse()
