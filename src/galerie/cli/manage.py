"""Operator commands for the gallery backend.

Usage:
    python -m galerie.cli <command> [OPTIONS]

Examples:
    # Run the API server on HOST:PORT from settings
    python -m galerie.cli serve

    # Override bind address, auto-reload for development
    python -m galerie.cli serve --host 0.0.0.0 --port 8000 --reload

    # Apply database migrations
    python -m galerie.cli migrate

    # Create the admin account from ADMIN_EMAIL / ADMIN_PASSWORD if none exists
    python -m galerie.cli seed-admin
"""

import asyncio
import sys
from argparse import ArgumentParser, Namespace
from typing import Optional, Sequence

import structlog
import uvicorn
from sqlalchemy.exc import SQLAlchemyError

from galerie.core import timezone  # noqa: F401  sets TZ=UTC
from galerie.core.config import Settings, configure_logging, get_settings
from galerie.core.database import create_engine, create_session_factory
from galerie.core.migrations import upgrade_to_head
from galerie.services.auth import seed_admin
from galerie.uow import create_uow_factory

logger = structlog.get_logger()


def parse_args(argv: Optional[Sequence[str]] = None) -> Namespace:
    """Parse command-line arguments."""
    parser = ArgumentParser(description="Gallery backend operator commands")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging (DEBUG level)",
    )

    subcommands = parser.add_subparsers(dest="command", required=True)

    serve = subcommands.add_parser("serve", help="Run the HTTP API with uvicorn")
    serve.add_argument("--host", help="Bind address (default: HOST setting)")
    serve.add_argument("--port", type=int, help="Bind port (default: PORT setting)")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")

    subcommands.add_parser("migrate", help="Upgrade the database schema to head")
    subcommands.add_parser("seed-admin", help="Create the admin account if none exists")

    return parser.parse_args(argv)


def run_serve(args: Namespace, settings: Settings) -> int:
    host = args.host or settings.host
    port = args.port or settings.port
    logger.info("cli.serve", host=host, port=port, reload=args.reload)
    uvicorn.run("galerie.app:app", host=host, port=port, reload=args.reload)
    return 0


def run_migrate(settings: Settings) -> int:
    try:
        upgrade_to_head(settings.database_url)
    except SQLAlchemyError as e:
        logger.error("cli.migrate_failed", error=str(e), error_type=type(e).__name__)
        print(f"\nMigration failed: {e}", file=sys.stderr)
        return 1
    return 0


async def run_seed_admin(settings: Settings) -> int:
    engine = create_engine(settings.database_url, settings.db_pool_size)
    uow_factory = create_uow_factory(create_session_factory(engine))
    try:
        async with await uow_factory() as uow:
            user = await seed_admin(uow, settings)
    except SQLAlchemyError as e:
        logger.error("cli.seed_admin_failed", error=str(e), error_type=type(e).__name__)
        print(f"\nSeeding failed: {e}", file=sys.stderr)
        return 1
    finally:
        await engine.dispose()

    if user is None:
        print("Admin account already present (or no credentials configured); nothing to do")
    else:
        print(f"Created admin account {user.email}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Synchronous entry point for CLI.

    Returns:
        Exit code: 0 (success), 1 (error), 130 (interrupted)
    """
    args = parse_args(argv)
    settings = get_settings()
    if args.verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)

    try:
        if args.command == "serve":
            return run_serve(args, settings)
        if args.command == "migrate":
            return run_migrate(settings)
        return asyncio.run(run_seed_admin(settings))
    except KeyboardInterrupt:
        logger.info("cli.interrupted")
        return 130
