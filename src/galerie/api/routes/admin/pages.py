"""Admin editing of the fixed site pages (no create or delete)."""

import structlog
from fastapi import APIRouter, Depends

from galerie.api.dependencies import get_uow_factory
from galerie.api.errors import NotFound
from galerie.api.presenters import present_page
from galerie.api.schemas import PageUpdate, PageWithHero
from galerie.core.timezone import utc_now

logger = structlog.get_logger()
router = APIRouter(prefix="/pages", tags=["admin:pages"])


@router.get("", response_model=list[PageWithHero])
async def list_pages(uow_factory=Depends(get_uow_factory)) -> list[PageWithHero]:
    async with await uow_factory() as uow:
        return [await present_page(uow, page) for page in await uow.pages.list_all()]


@router.get("/{key}", response_model=PageWithHero)
async def get_page(key: str, uow_factory=Depends(get_uow_factory)) -> PageWithHero:
    async with await uow_factory() as uow:
        page = await uow.pages.get(key)
        if page is None:
            raise NotFound("Page not found")
        return await present_page(uow, page)


@router.put("/{key}", response_model=PageWithHero)
async def update_page(
    key: str, request: PageUpdate, uow_factory=Depends(get_uow_factory)
) -> PageWithHero:
    async with await uow_factory() as uow:
        page = await uow.pages.update(key, request.model_dump(), utc_now())
        if page is None:
            raise NotFound("Page not found")
        logger.info("page.updated", key=key)
        return await present_page(uow, page)
