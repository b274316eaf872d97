"""Database Session Manager — async connection pool with automatic rollback and error mapping.

Invariants:
    - One engine (one bounded pool) per process, created by init_db during startup
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Pool checkout waits at most pool_timeout seconds
    - All SQLAlchemy/driver exceptions mapped to StorageError subclasses (core/errors.py):
      connect/checkout failures and lost connections → ConnectionFailedError,
      everything the statements themselves raise → QueryFailedError

Design Decisions:
    - No module-level singleton: init_db returns the manager and the app keeps it
      on app.state, handlers receive it through dependencies
    - expire_on_commit=False: returned ORM rows stay readable after the session closes
    - In-memory SQLite gets a StaticPool from SQLAlchemy; queue sizing applies to
      every other store
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import (
    ArgumentError, DBAPIError, IntegrityError, InterfaceError,
    InvalidRequestError, SQLAlchemyError,
    TimeoutError as PoolTimeoutError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from bookshelf.core.errors import (
    ConnectionFailedError, MigrationFailedError, QueryFailedError, StorageError,
)
from bookshelf.db.migrate import apply_migrations

logger = logging.getLogger(__name__)


def _is_memory_sqlite(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


class DatabaseSessionManager:
    """Owns the connection pool; hands out sessions with error translation."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_timeout: float = 30.0,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if not _is_memory_sqlite(database_url):
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_timeout=pool_timeout,
                pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self, operation: str = "query") -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback and storage error translation.

        The connection is checked out before the body runs, so failures to
        connect or to get a pooled connection in time are ConnectionFailedError,
        while errors raised by the statements themselves are QueryFailedError
        unless the driver reports the connection as lost.
        """
        session = self._session_factory()
        try:
            await session.connection()
        except PoolTimeoutError as e:
            await session.close()
            logger.error(f"DB pool exhausted: {e}", extra={"operation": operation})
            raise ConnectionFailedError("Connection pool exhausted", operation) from e
        except (DBAPIError, OSError) as e:
            await session.close()
            logger.error(f"DB connect failed: {e}", extra={"operation": operation})
            raise ConnectionFailedError("Database unreachable", operation) from e

        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}", extra={"operation": operation})
            raise QueryFailedError("Integrity constraint violated", operation) from e
        except DBAPIError as e:
            await session.rollback()
            if isinstance(e, InterfaceError) or e.connection_invalidated:
                logger.error(f"DB connection lost: {e}", extra={"operation": operation})
                raise ConnectionFailedError("Connection lost", operation) from e
            logger.error(f"DB driver error: {e}", extra={"operation": operation})
            raise QueryFailedError("Database driver error", operation) from e
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"SQLAlchemy error: {e}", extra={"operation": operation})
            raise QueryFailedError("Database operation failed", operation) from e
        except OSError as e:
            logger.error(f"DB unreachable: {e}", extra={"operation": operation})
            raise ConnectionFailedError("Database unreachable", operation) from e
        finally:
            await session.close()

    async def ping(self) -> None:
        """Run SELECT 1; raises StorageError when the store can't be reached."""
        async with self.session("ping") as db:
            await db.execute(text("SELECT 1"))

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness checks)."""
        try:
            await self.ping()
            return True
        except StorageError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


async def init_db(
    database_url: str | None,
    pool_size: int = 5,
    max_overflow: int = 10,
    pool_timeout: float = 30.0,
) -> DatabaseSessionManager:
    """Open the pool, verify the store answers, and migrate the schema to head."""
    if not database_url:
        raise ConnectionFailedError("DATABASE_URL is not set", "configure")
    try:
        manager = DatabaseSessionManager(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_timeout=pool_timeout,
        )
    except (ArgumentError, InvalidRequestError, ImportError) as e:
        logger.error(f"Invalid database URL: {e}", extra={"operation": "configure"})
        raise ConnectionFailedError("Invalid database URL", "configure") from e

    try:
        await manager.ping()
    except StorageError as e:
        await manager.dispose()
        raise ConnectionFailedError("Database unreachable", "connect") from e

    try:
        await apply_migrations(manager.engine)
    except MigrationFailedError:
        await manager.dispose()
        raise

    logger.info("Database ready", extra={"operation": "connect"})
    return manager
