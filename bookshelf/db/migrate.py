"""Startup Migrations — applies Alembic revisions up to head on a live engine.

Invariants:
    - Idempotent: running against a current schema applies nothing
    - Uses the caller's engine (and therefore its pool), so an in-memory
      SQLite store is migrated on the same connection the app will use
    - Every failure surfaces as MigrationFailedError

Design Decisions:
    - Programmatic command.upgrade over shelling out to the CLI: one process,
      one engine, errors arrive as exceptions
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.util.exc import CommandError
from sqlalchemy.engine import Connection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from bookshelf.core.errors import MigrationFailedError

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).with_name("migrations")


def alembic_config() -> Config:
    """Alembic config pointing at the packaged migrations directory."""
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    return config


def _upgrade(connection: Connection, config: Config, revision: str) -> None:
    config.attributes["connection"] = connection
    command.upgrade(config, revision)


async def apply_migrations(engine: AsyncEngine, revision: str = "head") -> None:
    """Bring the schema behind `engine` up to `revision`."""
    config = alembic_config()
    try:
        async with engine.begin() as conn:
            await conn.run_sync(_upgrade, config, revision)
    except (CommandError, SQLAlchemyError) as e:
        logger.error(f"Migration to {revision} failed: {e}", extra={"operation": "migrate"})
        raise MigrationFailedError(str(e)) from e
    logger.info(f"Schema migrated to {revision}", extra={"operation": "migrate"})
