"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - The connection descriptor comes from DATABASE_URL (or .env), never hardcoded
    - get_settings() is cached (lru_cache), one instance per process
    - A missing DATABASE_URL does not fail here; init_db reports it as ConnectionFailedError

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Plain driver schemes rewritten to their async drivers (asyncpg, aiosqlite)
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


_ASYNC_SCHEMES = {
    "postgresql://": "postgresql+asyncpg://",
    "postgres://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # Database
    database_url: str | None = None

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_to_async_driver(cls, v: str | None) -> str | None:
        """Hosting platforms hand out sync URLs; the engine needs an async driver."""
        if isinstance(v, str):
            v = v.strip()
            for prefix, replacement in _ASYNC_SCHEMES.items():
                if v.startswith(prefix):
                    return v.replace(prefix, replacement, 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_pool_timeout: float = 30.0

    # Record service policy
    bookshelf_validate_input: bool = True
    bookshelf_strict_writes: bool = False

    # API
    cors_origins: list[str] = ["http://localhost:3001"]
    host: str = "0.0.0.0"
    port: int = 3001

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
