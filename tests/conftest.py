"""pytest fixtures for the gallery backend tests.

Provides:
- utc_timezone: Autouse fixture enforcing UTC timezone
- engine: Function-scoped in-memory SQLite database with every table created
- session: Function-scoped database session
- uow_factory: Function-scoped UnitOfWork factory
- storage: Fake object store recording uploads and deletes
- test_client: httpx AsyncClient bound to the app, wired to the test database
- admin_headers / editor_headers: Bearer headers for each role
"""

import os

# Settings are read once at import of galerie.app; configure them first
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("RUN_MIGRATIONS", "false")
os.environ.setdefault("JWT_SECRET", "test-secret-key")
os.environ.setdefault("S3_BUCKET", "test-bucket")
os.environ.setdefault("S3_PUBLIC_URL", "https://cdn.test/media")

from typing import AsyncGenerator, BinaryIO  # noqa: E402
from uuid import uuid4  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

import galerie.models  # noqa: E402, F401
from galerie.core.config import Settings, get_settings  # noqa: E402
from galerie.core.database import create_session_factory  # noqa: E402
from galerie.core.security import create_access_token  # noqa: E402
from galerie.core.timezone import utc_now  # noqa: E402
from galerie.models.page import Page  # noqa: E402
from galerie.models.user import UserRole  # noqa: E402
from galerie.services.exceptions import StorageError  # noqa: E402
from galerie.uow import create_uow_factory  # noqa: E402

SEEDED_PAGES = [("galerie", "Galerie"), ("labomaton", "Labomaton"), ("contact", "Contact")]


class FakeStorage:
    """In-memory stand-in for ObjectStorage.

    Set ``fail_uploads`` / ``fail_deletes`` to make the next calls raise
    StorageError the way a failing bucket would.
    """

    public_url = "https://cdn.test/media"

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.deleted: list[str] = []
        self.fail_uploads = False
        self.fail_deletes = False

    def public_url_for(self, key: str) -> str:
        return f"{self.public_url}/{key}"

    async def put(self, key: str, fileobj: BinaryIO, content_type: str) -> str:
        if self.fail_uploads:
            raise StorageError("upload", "simulated upload failure")
        self.objects[key] = fileobj.read()
        return self.public_url_for(key)

    async def delete(self, key: str) -> None:
        if self.fail_deletes:
            raise StorageError("delete", "simulated delete failure")
        self.objects.pop(key, None)
        self.deleted.append(key)


@pytest.fixture(scope="session", autouse=True)
def utc_timezone():
    """Enforce UTC timezone for all tests."""
    os.environ["TZ"] = "UTC"
    yield


@pytest.fixture
def settings() -> Settings:
    return get_settings()


@pytest_asyncio.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Provide a fresh in-memory database per test.

    StaticPool keeps one connection so every session sees the same database.
    Foreign keys are switched on so cascades behave as on PostgreSQL.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    session_factory = create_session_factory(engine)
    async with session_factory() as session:
        now = utc_now()
        for key, title in SEEDED_PAGES:
            session.add(Page(key=key, title=title, updated_at=now))
        await session.commit()

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def session_factory(engine: AsyncEngine):
    return create_session_factory(engine)


@pytest_asyncio.fixture(scope="function")
async def session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture(scope="function")
async def uow_factory(session_factory):
    """Provide function-scoped UnitOfWork factory."""
    return create_uow_factory(session_factory)


@pytest.fixture
def storage() -> FakeStorage:
    return FakeStorage()


@pytest_asyncio.fixture
async def test_client(session_factory, uow_factory, storage):
    """Provide AsyncClient for testing API endpoints with database access."""
    from galerie.app import app

    # Lifespan does not run under ASGITransport; inject what it would create
    app.state.session_factory = session_factory
    app.state.uow_factory = uow_factory
    app.state.storage = storage

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_headers(settings) -> dict[str, str]:
    token = create_access_token(uuid4(), "admin@example.com", UserRole.ADMIN.value, settings)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def editor_headers(settings) -> dict[str, str]:
    token = create_access_token(uuid4(), "editor@example.com", UserRole.EDITOR.value, settings)
    return {"Authorization": f"Bearer {token}"}
