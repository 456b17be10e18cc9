"""Error envelope tests: every failure leaves the API as {"error": "..."}."""

import pytest


@pytest.mark.asyncio
async def test_malformed_json_is_400(test_client, admin_headers):
    response = await test_client.post(
        "/api/admin/artists",
        content=b'{"name": "Jane',
        headers={**admin_headers, "Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON body"}


@pytest.mark.asyncio
async def test_unparseable_uuid_is_400(test_client, admin_headers):
    response = await test_client.get("/api/admin/artists/not-a-uuid", headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid UUID"}


@pytest.mark.asyncio
async def test_missing_field_is_422_with_field_name(test_client, admin_headers):
    response = await test_client.post("/api/admin/artists", json={}, headers=admin_headers)

    assert response.status_code == 422
    assert response.json()["error"].startswith("name")


@pytest.mark.asyncio
async def test_unsluggable_name_is_422(test_client, admin_headers):
    response = await test_client.post(
        "/api/admin/artists", json={"name": "!!!"}, headers=admin_headers
    )

    assert response.status_code == 422
    assert "name" in response.json()["error"]


@pytest.mark.asyncio
async def test_invalid_url_is_422(test_client, admin_headers):
    response = await test_client.post(
        "/api/admin/artists",
        json={"name": "Jane Doe", "website_url": "ftp://example.com"},
        headers=admin_headers,
    )

    assert response.status_code == 422
    assert response.json()["error"].startswith("website_url")


@pytest.mark.asyncio
async def test_unknown_route_is_404_envelope(test_client):
    response = await test_client.get("/api/nowhere")

    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


@pytest.mark.asyncio
async def test_missing_entity_is_404(test_client, admin_headers):
    response = await test_client.get(
        "/api/admin/artists/00000000-0000-0000-0000-000000000000", headers=admin_headers
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Artist not found"}


@pytest.mark.asyncio
async def test_duplicate_slug_is_409(test_client, admin_headers):
    first = await test_client.post(
        "/api/admin/artists", json={"name": "Jane Doe"}, headers=admin_headers
    )
    second = await test_client.post(
        "/api/admin/artists", json={"name": "jane  doe!"}, headers=admin_headers
    )

    assert first.status_code == 200
    assert second.status_code == 409
    assert second.json() == {"error": "Resource already exists"}


@pytest.mark.asyncio
async def test_duplicate_media_ids_is_422(test_client, admin_headers):
    artist = await test_client.post(
        "/api/admin/artists", json={"name": "Jane Doe"}, headers=admin_headers
    )
    media_id = "11111111-1111-1111-1111-111111111111"

    response = await test_client.post(
        "/api/admin/artworks",
        json={"artist_id": artist.json()["id"], "title": "Blue", "media_ids": [media_id, media_id]},
        headers=admin_headers,
    )

    assert response.status_code == 422
    assert response.json()["error"].startswith("media_ids")
