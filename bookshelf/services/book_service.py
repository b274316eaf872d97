"""Book Service — validates record input, then delegates to the book store.

Invariants:
    - create/update with a blank (after strip) title or author raise
      RecordValidationError before any query runs
    - Values are stored exactly as received; trimming is only for the check
    - Storage errors pass through unchanged
    - Missing-row update/delete is a silent no-op unless strict_writes is set,
      in which case it raises BookNotFoundError

Design Decisions:
    - validate_input switch keeps the validation seam separable from storage
    - One instance per request, built by api/deps.py around the shared pool
"""

from bookshelf.core.errors import BookNotFoundError, RecordValidationError
from bookshelf.infrastructure import book_store
from bookshelf.infrastructure.database import DatabaseSessionManager
from bookshelf.models.book import Book


def _require_text(field: str, value: str) -> None:
    if not value.strip():
        raise RecordValidationError(f"{field} cannot be empty or whitespace", field)


class BookService:
    def __init__(
        self,
        db: DatabaseSessionManager,
        validate_input: bool = True,
        strict_writes: bool = False,
    ):
        self._db = db
        self._validate_input = validate_input
        self._strict_writes = strict_writes

    def _validate(self, title: str, author: str) -> None:
        if self._validate_input:
            _require_text("title", title)
            _require_text("author", author)

    async def list_books(self) -> list[Book]:
        return await book_store.list_books(self._db)

    async def get_book(self, book_id: int) -> Book:
        return await book_store.get_book(self._db, book_id)

    async def create_book(self, title: str, author: str) -> int:
        self._validate(title, author)
        return await book_store.add_book(self._db, title, author)

    async def update_book(self, book_id: int, title: str, author: str) -> None:
        self._validate(title, author)
        changed = await book_store.update_book(self._db, book_id, title, author)
        if changed == 0 and self._strict_writes:
            raise BookNotFoundError(book_id)

    async def delete_book(self, book_id: int) -> None:
        removed = await book_store.delete_book(self._db, book_id)
        if removed == 0 and self._strict_writes:
            raise BookNotFoundError(book_id)
