"""FastAPI application factory."""

import asyncio
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Response, status
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from galerie.api.errors import register_exception_handlers
from galerie.api.routes import admin, auth, public
from galerie.core import timezone  # noqa: F401  sets TZ=UTC
from galerie.core.config import configure_logging, get_settings
from galerie.core.database import create_engine, create_session_factory
from galerie.core.migrations import upgrade_to_head
from galerie.services.auth import seed_admin
from galerie.services.storage import ObjectStorage
from galerie.uow import create_uow_factory

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager.

    Handles startup and shutdown tasks:
    - Startup: Configure logging, apply migrations, open the database pool,
      seed the admin account, create the storage client
    - Shutdown: Dispose of the database pool
    """
    settings = get_settings()
    configure_logging(settings)

    if settings.run_migrations:
        # Alembic runs its own event loop, so keep it off ours
        await asyncio.to_thread(upgrade_to_head, settings.database_url)

    engine = create_engine(settings.database_url, settings.db_pool_size)
    session_factory = create_session_factory(engine)
    uow_factory = create_uow_factory(session_factory)

    # Store in app.state for access in routes
    app.state.session_factory = session_factory
    app.state.uow_factory = uow_factory
    app.state.storage = ObjectStorage(settings)

    async with await uow_factory() as uow:
        await seed_admin(uow, settings)

    logger.info("application.startup", db_url=settings.database_url.split("@")[-1])

    yield

    logger.info("application.shutdown")
    await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI application instance
    """
    settings = get_settings()

    app = FastAPI(
        title="Galerie Backend API",
        description="Content management for the gallery website",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Routers carry their own /api/... prefixes
    app.include_router(auth.router)
    app.include_router(public.router)
    app.include_router(admin.router)

    @app.get("/health")
    async def health_check(response: Response):
        """Health check endpoint with database connectivity test.

        Returns:
            200: {"status": "healthy"} if database connection succeeds
            503: {"status": "unhealthy"} if database connection fails
        """
        try:
            async with app.state.session_factory() as session:
                result = await session.execute(text("SELECT 1"))
                result.scalar()

            logger.debug("health_check.success")
            return {"status": "healthy"}

        except Exception as e:
            logger.error(
                "health_check.failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
            return {"status": "unhealthy"}

    return app


# Create app instance for uvicorn
app = create_app()
