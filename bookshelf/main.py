"""Bookshelf API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Database pool opened and migrated on startup via the lifespan context
      manager, kept on app.state.db, disposed on shutdown
    - Any startup StorageError aborts the lifespan, so the server never serves
    - Static page mounted last so /books and /health take precedence

Design Decisions:
    - create_app factory: tests build an app without running the lifespan and
      inject their own pool through dependency overrides
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from bookshelf import __version__
from bookshelf.api.error_handlers import register_error_handlers
from bookshelf.api.routes import books, health
from bookshelf.config import Settings, get_settings
from bookshelf.infrastructure.database import init_db
from bookshelf.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).with_name("static")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        app.state.db = await init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            pool_timeout=settings.database_pool_timeout,
        )
        logger.info("Bookshelf API started")
        try:
            yield
        finally:
            logger.info("Bookshelf API shutting down")
            await app.state.db.dispose()

    app = FastAPI(title="Bookshelf API", version=__version__, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(books.router)
    app.include_router(health.router)

    register_error_handlers(app)

    app.mount("/", StaticFiles(directory=STATIC_DIR, html=True), name="static")
    return app


app = create_app()
