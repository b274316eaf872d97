"""FastAPI dependencies — hand the shared pool and per-request services to routes."""

from fastapi import Depends, Request

from bookshelf.config import Settings, get_settings
from bookshelf.infrastructure.database import DatabaseSessionManager
from bookshelf.services.book_service import BookService


def get_db(request: Request) -> DatabaseSessionManager:
    """Connection pool opened during lifespan startup."""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise RuntimeError("Database not initialized")
    return db


def get_book_service(
    db: DatabaseSessionManager = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> BookService:
    return BookService(
        db,
        validate_input=settings.bookshelf_validate_input,
        strict_writes=settings.bookshelf_strict_writes,
    )
