"""Root conftest — shared test configuration and fixtures.

Invariants:
    - Every test gets a fresh in-memory SQLite store (schema via Base.metadata,
      no seed rows)
    - The client fixture never runs the lifespan; the pool is injected by
      overriding the get_db dependency
    - unreachable_db points at a path SQLite can't open, so every query fails
      the way a dead server would
    - single_connection_db has a one-connection pool, so holding that
      connection makes the next checkout time out
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from bookshelf.api.deps import get_db  # noqa: E402
from bookshelf.config import Settings, get_settings  # noqa: E402
from bookshelf.db.base import Base  # noqa: E402
from bookshelf.infrastructure.database import DatabaseSessionManager  # noqa: E402
from bookshelf.main import create_app  # noqa: E402

MEMORY_URL = "sqlite+aiosqlite:///:memory:"
UNREACHABLE_URL = "sqlite+aiosqlite:////nonexistent-bookshelf-dir/books.db"


@pytest.fixture
async def db():
    manager = DatabaseSessionManager(MEMORY_URL)
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
async def unreachable_db():
    manager = DatabaseSessionManager(UNREACHABLE_URL, pool_timeout=1.0)
    yield manager
    await manager.dispose()


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, database_url=MEMORY_URL, **overrides)


async def _client_for(manager: DatabaseSessionManager, settings: Settings):
    app = create_app(settings)
    app.dependency_overrides[get_db] = lambda: manager
    app.dependency_overrides[get_settings] = lambda: settings
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def client(db):
    """API client backed by the in-memory store."""
    async for c in _client_for(db, _settings()):
        yield c


@pytest.fixture
async def strict_client(db):
    """API client with strict writes (missing-row edit/delete → 404)."""
    async for c in _client_for(db, _settings(bookshelf_strict_writes=True)):
        yield c


@pytest.fixture
async def unreachable_client(unreachable_db):
    """API client whose store can't be reached."""
    async for c in _client_for(unreachable_db, _settings()):
        yield c


@pytest.fixture
async def single_connection_db(tmp_path):
    """File store whose pool holds one connection and waits half a second for it."""
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'books.db'}",
        pool_size=1, max_overflow=0, pool_timeout=0.5,
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
async def single_connection_client(single_connection_db):
    """API client backed by the one-connection store."""
    async for c in _client_for(single_connection_db, _settings()):
        yield c
