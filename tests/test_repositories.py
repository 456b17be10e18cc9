"""Repository tests against the test database.

Each test builds its rows through a Unit of Work and reads them back through
a second one, so the assertions see committed state.
"""

from datetime import timedelta
from uuid import uuid4

import pytest

from galerie.core.timezone import utc_now
from galerie.models.artist import Artist
from galerie.models.artwork import Artwork
from galerie.models.event import Event
from galerie.models.media import Media
from galerie.models.post import Post
from galerie.models.user import User, UserRole
from galerie.repositories.query import page_window


def make_media(filename: str, **kwargs) -> Media:
    return Media(filename=filename, url=f"https://cdn.test/media/{filename}", **kwargs)


def make_artist(name: str, slug: str, published: bool = False, **kwargs) -> Artist:
    artist = Artist(name=name, slug=slug, **kwargs)
    artist.apply_publish(published, utc_now())
    return artist


@pytest.mark.asyncio
async def test_media_links_replace_orders_by_position(uow_factory):
    async with await uow_factory() as uow:
        artist = await uow.artists.add(make_artist("Jane Doe", "jane-doe"))
        artwork = await uow.artworks.add(
            Artwork(artist_id=artist.id, title="Blue Hour", slug="blue-hour")
        )
        first = await uow.media.add(make_media("a.jpg"))
        second = await uow.media.add(make_media("b.jpg"))
        third = await uow.media.add(make_media("c.jpg"))
        await uow.artwork_media.replace(artwork.id, [third.id, first.id, second.id])
        artwork_id = artwork.id
        expected = [third.id, first.id, second.id]

    async with await uow_factory() as uow:
        attached = await uow.artwork_media.list_media(artwork_id)

    assert [media.id for media, _ in attached] == expected
    assert [position for _, position in attached] == [0, 1, 2]


@pytest.mark.asyncio
async def test_media_links_replace_overwrites_and_clears(uow_factory):
    async with await uow_factory() as uow:
        artist = await uow.artists.add(make_artist("Jane Doe", "jane-doe"))
        artwork = await uow.artworks.add(
            Artwork(artist_id=artist.id, title="Blue Hour", slug="blue-hour")
        )
        first = await uow.media.add(make_media("a.jpg"))
        second = await uow.media.add(make_media("b.jpg"))
        await uow.artwork_media.replace(artwork.id, [first.id, second.id])
        await uow.artwork_media.replace(artwork.id, [second.id])
        artwork_id, second_id = artwork.id, second.id

    async with await uow_factory() as uow:
        attached = await uow.artwork_media.list_media(artwork_id)
        assert [(media.id, position) for media, position in attached] == [(second_id, 0)]

        await uow.artwork_media.replace(artwork_id, [])

    async with await uow_factory() as uow:
        assert await uow.artwork_media.list_media(artwork_id) == []


@pytest.mark.asyncio
async def test_media_links_reject_duplicate_ids(uow_factory):
    with pytest.raises(ValueError, match="duplicates"):
        async with await uow_factory() as uow:
            artist = await uow.artists.add(make_artist("Jane Doe", "jane-doe"))
            artwork = await uow.artworks.add(
                Artwork(artist_id=artist.id, title="Blue Hour", slug="blue-hour")
            )
            media = await uow.media.add(make_media("a.jpg"))
            await uow.artwork_media.replace(artwork.id, [media.id, media.id])


@pytest.mark.asyncio
async def test_artist_search_matches_name_slug_and_bio(uow_factory):
    async with await uow_factory() as uow:
        await uow.artists.add(make_artist("Jane Doe", "jane-doe", bio_md="Works in BLUE ink"))
        await uow.artists.add(make_artist("John Roe", "john-roe", bio_md="Charcoal"))

    async with await uow_factory() as uow:
        by_bio = await uow.artists.list_page(page_window(1, 20), q="blue")
        by_slug = await uow.artists.list_page(page_window(1, 20), q="john-")
        everything = await uow.artists.list_page(page_window(1, 20), q="   ")

    assert [artist.name for artist in by_bio] == ["Jane Doe"]
    assert [artist.name for artist in by_slug] == ["John Roe"]
    assert len(everything) == 2


@pytest.mark.asyncio
async def test_public_artist_list_is_published_only_by_name(uow_factory):
    async with await uow_factory() as uow:
        await uow.artists.add(make_artist("Zoe Ink", "zoe-ink", published=True))
        await uow.artists.add(make_artist("Draft Person", "draft-person"))
        await uow.artists.add(make_artist("Ana Oil", "ana-oil", published=True))

    async with await uow_factory() as uow:
        artists = await uow.artists.list_page(page_window(1, 20), published_only=True)
        assert await uow.artists.get_published_by_slug("draft-person") is None

    assert [artist.name for artist in artists] == ["Ana Oil", "Zoe Ink"]


@pytest.mark.asyncio
async def test_artwork_search_matches_artist_name(uow_factory):
    async with await uow_factory() as uow:
        artist = await uow.artists.add(make_artist("Jane Doe", "jane-doe"))
        await uow.artworks.add(Artwork(artist_id=artist.id, title="Untitled", slug="untitled"))

    async with await uow_factory() as uow:
        found = await uow.artworks.list_page(page_window(1, 20), q="jane")

    assert [artwork.title for artwork in found] == ["Untitled"]


@pytest.mark.asyncio
async def test_media_folder_filter_is_case_insensitive_substring(uow_factory):
    async with await uow_factory() as uow:
        artist = await uow.artists.add(make_artist("Jane Doe", "jane-doe"))
        await uow.media.add(make_media("a.jpg", folder="my-art-show", artist_id=artist.id))
        await uow.media.add(make_media("b.jpg", folder="events"))
        await uow.media.add(make_media("c.jpg"))

    async with await uow_factory() as uow:
        rows = await uow.media.list_page(page_window(1, 50), folder="ART")
        folders = await uow.media.list_folders()

    assert [(media.filename, artist_name) for media, artist_name in rows] == [
        ("a.jpg", "Jane Doe")
    ]
    assert folders == ["events", "my-art-show"]


@pytest.mark.asyncio
async def test_current_and_upcoming_events(uow_factory):
    now = utc_now()
    async with await uow_factory() as uow:
        for title, slug, start, end, published in [
            ("Open ended", "open-ended", now - timedelta(days=10), None, True),
            ("Running", "running", now - timedelta(days=1), now + timedelta(days=1), True),
            ("Draft running", "draft-running", now - timedelta(hours=1), None, False),
            ("Past", "past", now - timedelta(days=30), now - timedelta(days=20), True),
            ("Soon", "soon", now + timedelta(days=2), None, True),
            ("Later", "later", now + timedelta(days=9), None, True),
        ]:
            event = Event(title=title, slug=slug, start_at=start, end_at=end)
            event.apply_publish(published, now)
            await uow.events.add(event)

    async with await uow_factory() as uow:
        current = await uow.events.get_current(now)
        upcoming = await uow.events.list_upcoming(now, limit=3)

    assert current is not None and current.slug == "running"
    assert [event.slug for event in upcoming] == ["soon", "later"]


@pytest.mark.asyncio
async def test_public_posts_ordered_by_published_at(uow_factory):
    now = utc_now()
    async with await uow_factory() as uow:
        older = Post(title="Older", slug="older")
        older.apply_publish(True, now - timedelta(days=2))
        newer = Post(title="Newer", slug="newer")
        newer.apply_publish(True, now)
        await uow.posts.add(older)
        await uow.posts.add(newer)
        await uow.posts.add(Post(title="Draft", slug="draft"))

    async with await uow_factory() as uow:
        posts = await uow.posts.list_page(page_window(1, 20), published_only=True)

    assert [post.slug for post in posts] == ["newer", "older"]


@pytest.mark.asyncio
async def test_waitlist_add_if_absent_is_case_insensitive(uow_factory):
    async with await uow_factory() as uow:
        assert await uow.waitlist.add_if_absent("Visitor@Example.com", "home") is True

    async with await uow_factory() as uow:
        assert await uow.waitlist.add_if_absent("visitor@example.com", None) is False
        entries = await uow.waitlist.list_all()

    assert [entry.email for entry in entries] == ["Visitor@Example.com"]


@pytest.mark.asyncio
async def test_user_lookup_and_admin_presence(uow_factory):
    async with await uow_factory() as uow:
        assert await uow.users.has_admin() is False
        await uow.users.add(
            User(email="Admin@Example.com", password_hash="x", role=UserRole.ADMIN.value)
        )

    async with await uow_factory() as uow:
        assert await uow.users.has_admin() is True
        user = await uow.users.get_by_email("admin@example.com")

    assert user is not None and user.role == "admin"


@pytest.mark.asyncio
async def test_seeded_pages_listed_by_key(uow_factory):
    async with await uow_factory() as uow:
        pages = await uow.pages.list_all()

    assert [page.key for page in pages] == ["contact", "galerie", "labomaton"]


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(uow_factory):
    async with await uow_factory() as uow:
        await uow.artists.add(make_artist("Studio a_b", "studio-a-b"))
        await uow.artists.add(make_artist("Studio axb", "studio-axb"))
        await uow.media.add(make_media("a.jpg", folder="100% paper"))
        await uow.media.add(make_media("b.jpg", folder="1000 paper"))

    async with await uow_factory() as uow:
        artists = await uow.artists.list_page(page_window(1, 20), q="a_b")
        media = await uow.media.list_page(page_window(1, 50), folder="100%")

    assert [artist.name for artist in artists] == ["Studio a_b"]
    assert [row.folder for row, _ in media] == ["100% paper"]


@pytest.mark.asyncio
async def test_delete_unknown_artist_is_noop(uow_factory):
    async with await uow_factory() as uow:
        artist = await uow.artists.add(make_artist("Jane Doe", "jane-doe"))
        await uow.artists.delete(uuid4())
        artist_id = artist.id

    async with await uow_factory() as uow:
        assert await uow.artists.get_by_id(artist_id) is not None
        await uow.artists.delete(artist_id)

    async with await uow_factory() as uow:
        assert await uow.artists.get_by_id(artist_id) is None
