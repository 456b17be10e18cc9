"""Apply Alembic migrations from inside the application.

The Alembic environment calls ``asyncio.run()``, so callers already inside an
event loop must run upgrade_to_head() in a worker thread.
"""

from pathlib import Path

import structlog
from alembic import command
from alembic.config import Config

logger = structlog.get_logger()

# src/galerie/core/migrations.py -> repository root
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def build_alembic_config(database_url: str) -> Config:
    """Alembic config pointing at the repository's migration scripts."""
    config = Config(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    # Keep the application's logging configuration intact
    config.attributes["configure_logger"] = False
    return config


def upgrade_to_head(database_url: str) -> None:
    """Upgrade the database schema to the latest revision (blocking)."""
    logger.info("migrations.starting")
    command.upgrade(build_alembic_config(database_url), "head")
    logger.info("migrations.completed")
