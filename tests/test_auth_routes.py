"""Integration tests for login, token identity and admin access control.

- POST /api/auth/login - Email/password exchange for a bearer token
- GET /api/auth/me - Identity from the token
- /api/admin/* - Admin role required
"""

import pytest
import pytest_asyncio

from galerie.core.security import hash_password
from galerie.models.user import User, UserRole
from galerie.services.auth import seed_admin


@pytest_asyncio.fixture
async def admin_user(uow_factory):
    async with await uow_factory() as uow:
        return await uow.users.add(
            User(
                email="Admin@Example.com",
                password_hash=hash_password("s3cret-pass"),
                role=UserRole.ADMIN.value,
            )
        )


@pytest.mark.asyncio
async def test_login_returns_token_and_user(test_client, admin_user):
    response = await test_client.post(
        "/api/auth/login", json={"email": "admin@example.com", "password": "s3cret-pass"}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["token"]
    assert data["user"] == {
        "id": str(admin_user.id),
        "email": "Admin@Example.com",
        "role": "admin",
    }

    me = await test_client.get(
        "/api/auth/me", headers={"Authorization": f"Bearer {data['token']}"}
    )
    assert me.status_code == 200
    assert me.json()["id"] == str(admin_user.id)


@pytest.mark.asyncio
async def test_login_failures_share_one_message(test_client, admin_user):
    wrong_password = await test_client.post(
        "/api/auth/login", json={"email": "admin@example.com", "password": "nope"}
    )
    unknown_email = await test_client.post(
        "/api/auth/login", json={"email": "ghost@example.com", "password": "s3cret-pass"}
    )

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"error": "Invalid credentials"}


@pytest.mark.asyncio
async def test_me_requires_authorization_header(test_client):
    response = await test_client.get("/api/auth/me")

    assert response.status_code == 401
    assert response.json() == {"error": "Missing authorization header"}


@pytest.mark.asyncio
async def test_me_rejects_non_bearer_scheme(test_client):
    response = await test_client.get("/api/auth/me", headers={"Authorization": "Basic abc"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid authorization header"}


@pytest.mark.asyncio
async def test_me_rejects_garbage_token(test_client):
    response = await test_client.get(
        "/api/auth/me", headers={"Authorization": "Bearer not.a.jwt"}
    )

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}


@pytest.mark.asyncio
async def test_editor_can_read_identity_but_not_admin(test_client, editor_headers):
    me = await test_client.get("/api/auth/me", headers=editor_headers)
    assert me.status_code == 200
    assert me.json()["role"] == "editor"

    response = await test_client.get("/api/admin/artists", headers=editor_headers)
    assert response.status_code == 403
    assert response.json() == {"error": "Admin access required"}


@pytest.mark.asyncio
async def test_admin_routes_require_token(test_client):
    for path in ("/api/admin/artists", "/api/admin/media", "/api/admin/waitlist/export"):
        response = await test_client.get(path)
        assert response.status_code == 401, path


@pytest.mark.asyncio
async def test_seed_admin_creates_once(uow_factory, settings):
    settings = settings.model_copy(
        update={"admin_email": "owner@example.com", "admin_password": "first-run"}
    )

    async with await uow_factory() as uow:
        created = await seed_admin(uow, settings)
    async with await uow_factory() as uow:
        again = await seed_admin(uow, settings)

    assert created is not None and created.role == "admin"
    assert again is None


@pytest.mark.asyncio
async def test_seed_admin_without_credentials_does_nothing(uow_factory, settings):
    settings = settings.model_copy(update={"admin_email": "", "admin_password": ""})

    async with await uow_factory() as uow:
        assert await seed_admin(uow, settings) is None
        assert await uow.users.has_admin() is False
