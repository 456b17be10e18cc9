"""Unit of Work pattern tests.

Tests focus on transaction management:
- Successful commits persist changes
- Exceptions trigger rollback
- Multiple repository operations are atomic
"""

import pytest

from galerie.models.artist import Artist
from galerie.models.media import Media
from galerie.repositories.query import page_window


@pytest.mark.asyncio
async def test_uow_commits_on_successful_exit(uow_factory):
    """Changes made within the context persist after the context exits."""
    async with await uow_factory() as uow:
        artist = await uow.artists.add(Artist(name="Jane Doe", slug="jane-doe"))
        artist_id = artist.id

    async with await uow_factory() as uow:
        found = await uow.artists.get_by_id(artist_id)
        assert found is not None
        assert found.slug == "jane-doe"


@pytest.mark.asyncio
async def test_uow_rollback_on_exception(uow_factory):
    """Exceptions roll the transaction back and still propagate."""
    with pytest.raises(ValueError, match="Simulated error"):
        async with await uow_factory() as uow:
            await uow.artists.add(Artist(name="Jane Doe", slug="jane-doe"))
            raise ValueError("Simulated error")

    async with await uow_factory() as uow:
        assert await uow.artists.list_page(page_window(1, 20)) == []


@pytest.mark.asyncio
async def test_uow_multiple_repositories_atomic(uow_factory):
    """A failure after writes to several repositories undoes all of them."""
    with pytest.raises(RuntimeError):
        async with await uow_factory() as uow:
            artist = await uow.artists.add(Artist(name="Jane Doe", slug="jane-doe"))
            await uow.media.add(
                Media(filename="a.jpg", url="https://cdn.test/media/a.jpg", artist_id=artist.id)
            )
            raise RuntimeError("Simulated failure after writes")

    async with await uow_factory() as uow:
        assert await uow.artists.list_page(page_window(1, 20)) == []
        assert await uow.media.list_page(page_window(1, 20)) == []
