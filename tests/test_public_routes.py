"""Integration tests for the public API.

Only published content is visible, lookups are by slug, and the two public
writes (contact form, waitlist) need no authentication.
"""

from datetime import timedelta

import pytest

from galerie.core.timezone import utc_now


async def create(client, headers, path, payload):
    response = await client.post(f"/api/admin/{path}", json=payload, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


@pytest.mark.asyncio
async def test_public_lists_hide_drafts(test_client, admin_headers):
    await create(test_client, admin_headers, "artists", {"name": "Zoe Ink", "published": True})
    await create(test_client, admin_headers, "artists", {"name": "Draft Person"})
    await create(test_client, admin_headers, "artists", {"name": "Ana Oil", "published": True})
    await create(test_client, admin_headers, "posts", {"title": "Hidden"})
    await create(test_client, admin_headers, "posts", {"title": "News", "published": True})

    artists = await test_client.get("/api/public/artists")
    posts = await test_client.get("/api/public/posts")

    assert [a["slug"] for a in artists.json()] == ["ana-oil", "zoe-ink"]
    assert [p["slug"] for p in posts.json()] == ["news"]
    assert (await test_client.get("/api/public/posts/hidden")).status_code == 404
    assert (await test_client.get("/api/public/posts/news")).status_code == 200


@pytest.mark.asyncio
async def test_public_list_pagination(test_client, admin_headers):
    for name in ("Ana Oil", "Ben Clay", "Cleo Glass"):
        await create(test_client, admin_headers, "artists", {"name": name, "published": True})

    second_page = await test_client.get("/api/public/artists?page=2&per_page=2")
    clamped = await test_client.get("/api/public/artists?page=0&per_page=0")

    assert [a["name"] for a in second_page.json()] == ["Cleo Glass"]
    assert [a["name"] for a in clamped.json()] == ["Ana Oil"]


@pytest.mark.asyncio
async def test_public_artist_detail_lists_published_artworks(test_client, admin_headers):
    artist = await create(
        test_client, admin_headers, "artists", {"name": "Jane Doe", "published": True}
    )
    for title, year, published in [("Early", 2019, True), ("Late", 2024, True), ("WIP", 2025, False)]:
        await create(
            test_client,
            admin_headers,
            "artworks",
            {"artist_id": artist["id"], "title": title, "year": year, "published": published},
        )

    response = await test_client.get("/api/public/artists/jane-doe")

    assert response.status_code == 200
    detail = response.json()
    assert detail["name"] == "Jane Doe"
    assert [a["title"] for a in detail["artworks"]] == ["Late", "Early"]
    assert detail["artworks"][0]["artist_slug"] == "jane-doe"


@pytest.mark.asyncio
async def test_public_events_and_home(test_client, admin_headers):
    now = utc_now()
    artist = await create(
        test_client, admin_headers, "artists", {"name": "Jane Doe", "published": True}
    )
    await create(
        test_client,
        admin_headers,
        "events",
        {
            "title": "Now Showing",
            "start_at": (now - timedelta(days=1)).isoformat(),
            "end_at": (now + timedelta(days=5)).isoformat(),
            "artist_ids": [artist["id"]],
            "published": True,
        },
    )
    await create(
        test_client,
        admin_headers,
        "events",
        {"title": "Next Month", "start_at": (now + timedelta(days=30)).isoformat(), "published": True},
    )
    await create(
        test_client,
        admin_headers,
        "events",
        {"title": "Secret", "start_at": (now + timedelta(days=2)).isoformat()},
    )
    await create(test_client, admin_headers, "posts", {"title": "Hello", "published": True})

    home = await test_client.get("/api/public/home")

    assert home.status_code == 200
    data = home.json()
    assert data["current_event"]["slug"] == "now-showing"
    assert [a["name"] for a in data["current_event"]["artists"]] == ["Jane Doe"]
    assert [e["slug"] for e in data["upcoming_events"]] == ["next-month"]
    assert [a["slug"] for a in data["featured_artists"]] == ["jane-doe"]
    assert [p["slug"] for p in data["latest_posts"]] == ["hello"]

    events = await test_client.get("/api/public/events")
    assert [e["slug"] for e in events.json()] == ["next-month", "now-showing"]
    assert (await test_client.get("/api/public/events/secret")).status_code == 404


@pytest.mark.asyncio
async def test_public_home_when_empty(test_client):
    response = await test_client.get("/api/public/home")

    assert response.status_code == 200
    assert response.json() == {
        "current_event": None,
        "upcoming_events": [],
        "featured_artists": [],
        "latest_posts": [],
    }


@pytest.mark.asyncio
async def test_public_page(test_client):
    response = await test_client.get("/api/public/pages/labomaton")

    assert response.status_code == 200
    assert response.json()["title"] == "Labomaton"
    assert response.json()["hero"] is None

    missing = await test_client.get("/api/public/pages/nope")
    assert missing.status_code == 404
    assert missing.json() == {"error": "Page not found"}


@pytest.mark.asyncio
async def test_contact_validation(test_client):
    short = await test_client.post(
        "/api/public/contact",
        json={"name": "Visitor", "email": "visitor@example.com", "message": "Hi"},
    )
    bad_email = await test_client.post(
        "/api/public/contact",
        json={"name": "Visitor", "email": "not-an-email", "message": "Long enough message"},
    )

    assert short.status_code == 422
    assert short.json()["error"].startswith("message")
    assert bad_email.status_code == 422
    assert bad_email.json()["error"].startswith("email")


@pytest.mark.asyncio
async def test_waitlist_join_twice(test_client):
    first = await test_client.post(
        "/api/public/waitlist", json={"email": "fan@example.com", "source": "labomaton"}
    )
    second = await test_client.post("/api/public/waitlist", json={"email": "FAN@example.com"})

    assert first.json() == {"success": True, "message": "Successfully joined the waitlist"}
    assert second.status_code == 200
    assert second.json() == {"success": True, "message": "You are already on the waitlist"}


@pytest.mark.asyncio
async def test_health(test_client):
    response = await test_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
