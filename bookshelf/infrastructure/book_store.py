"""Book Store — the only module that issues queries against the books table.

Invariants:
    - Each function runs one statement in its own session and commits it
    - No connection is held across statements or between calls
    - Zero-row update/delete is not an error here; the affected count is returned
    - Errors arrive as StorageError subclasses (translated by DatabaseSessionManager)
"""

import logging

from sqlalchemy import delete, select, update

from bookshelf.core.errors import BookNotFoundError
from bookshelf.infrastructure.database import DatabaseSessionManager
from bookshelf.models.book import Book

logger = logging.getLogger(__name__)


async def list_books(db: DatabaseSessionManager) -> list[Book]:
    """All books ordered by title, then author (store collation)."""
    async with db.session("list") as session:
        result = await session.execute(
            select(Book).order_by(Book.title, Book.author),
        )
        return list(result.scalars().all())


async def get_book(db: DatabaseSessionManager, book_id: int) -> Book:
    """Book with the given id; raises BookNotFoundError when absent."""
    async with db.session("get") as session:
        book = await session.get(Book, book_id)
    if book is None:
        raise BookNotFoundError(book_id)
    return book


async def add_book(db: DatabaseSessionManager, title: str, author: str) -> int:
    """Insert a book and return the id the store assigned."""
    async with db.session("create") as session:
        book = Book(title=title, author=author)
        session.add(book)
        await session.commit()
    logger.info("Book created", extra={"book_id": book.id, "operation": "create"})
    return book.id


async def update_book(
    db: DatabaseSessionManager, book_id: int, title: str, author: str,
) -> int:
    """Overwrite title/author of one row. Returns the number of rows changed."""
    async with db.session("update") as session:
        result = await session.execute(
            update(Book)
            .where(Book.id == book_id)
            .values(title=title, author=author),
        )
        await session.commit()
    logger.info(
        f"Book update touched {result.rowcount} row(s)",
        extra={"book_id": book_id, "operation": "update"},
    )
    return result.rowcount


async def delete_book(db: DatabaseSessionManager, book_id: int) -> int:
    """Hard-delete one row. Returns the number of rows removed."""
    async with db.session("delete") as session:
        result = await session.execute(delete(Book).where(Book.id == book_id))
        await session.commit()
    logger.info(
        f"Book delete removed {result.rowcount} row(s)",
        extra={"book_id": book_id, "operation": "delete"},
    )
    return result.rowcount
