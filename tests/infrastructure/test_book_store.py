"""Book Store — CRUD against a real (in-memory) SQLite store.

Invariants tested:
    - list_books orders by (title, author), case-sensitive, whatever the insert order
    - add_book returns a positive id that get_book resolves to the same values
    - update_book only touches the targeted row; missing rows report 0
    - delete_book removes exactly one id; repeating it is a no-op
    - get_book on a missing id raises BookNotFoundError, not a connection error
"""

import pytest

from bookshelf.core.errors import (
    BookNotFoundError, ConnectionFailedError, QueryFailedError, StorageError,
)
from bookshelf.infrastructure import book_store


async def test_list_books_empty_store_returns_empty_list(db):
    """An empty table lists as an empty list."""
    assert await book_store.list_books(db) == []


async def test_list_books_orders_by_title_then_author(db):
    """Ordering is (title, author) under binary collation."""
    for title, author in [
        ("b", "x"), ("a", "z"), ("a", "y"), ("B", "q"),
    ]:
        await book_store.add_book(db, title, author)

    books = await book_store.list_books(db)

    # Binary collation: uppercase sorts before lowercase
    assert [(b.title, b.author) for b in books] == [
        ("B", "q"), ("a", "y"), ("a", "z"), ("b", "x"),
    ]


async def test_list_books_returns_exactly_created_books(db):
    """Listing returns every created row and nothing else."""
    ids = {
        await book_store.add_book(db, "Dune", "Herbert, Frank"),
        await book_store.add_book(db, "Emma", "Austen, Jane"),
    }
    books = await book_store.list_books(db)
    assert {b.id for b in books} == ids


async def test_add_then_get_round_trips_fields(db):
    """A created book reads back with the same fields."""
    new_id = await book_store.add_book(db, "Test Book", "Test Author")

    book = await book_store.get_book(db, new_id)

    assert new_id > 0
    assert book.id == new_id
    assert book.title == "Test Book"
    assert book.author == "Test Author"


async def test_add_book_assigns_distinct_ids(db):
    """Duplicate content still gets a fresh id."""
    first = await book_store.add_book(db, "Same", "Same")
    second = await book_store.add_book(db, "Same", "Same")
    assert first != second


async def test_add_book_accepts_empty_strings(db):
    """The store itself doesn't reject blank fields."""
    new_id = await book_store.add_book(db, "", "")
    book = await book_store.get_book(db, new_id)
    assert (book.title, book.author) == ("", "")


async def test_add_book_null_title_is_query_failure(db):
    """A NOT NULL violation is a query failure on create."""
    with pytest.raises(QueryFailedError) as exc_info:
        await book_store.add_book(db, None, "Someone")
    assert exc_info.value.operation == "create"


async def test_update_book_changes_only_target_row(db):
    """Update rewrites the target row and leaves others alone."""
    target = await book_store.add_book(db, "Old Title", "Old Author")
    other = await book_store.add_book(db, "Other", "Bystander")

    changed = await book_store.update_book(db, target, "New Title", "Old Author")

    assert changed == 1
    updated = await book_store.get_book(db, target)
    untouched = await book_store.get_book(db, other)
    assert (updated.title, updated.author) == ("New Title", "Old Author")
    assert (untouched.title, untouched.author) == ("Other", "Bystander")


async def test_update_missing_book_is_silent(db):
    """Updating a missing id changes nothing and reports 0."""
    assert await book_store.update_book(db, 999, "Nothing", "Nobody") == 0
    assert await book_store.list_books(db) == []


async def test_delete_book_removes_only_that_id(db):
    """Delete removes exactly the given id."""
    keep = await book_store.add_book(db, "Keep", "Me")
    drop = await book_store.add_book(db, "Drop", "Me")

    assert await book_store.delete_book(db, drop) == 1

    ids = [b.id for b in await book_store.list_books(db)]
    assert ids == [keep]


async def test_delete_twice_is_noop(db):
    """A second delete of the same id reports 0."""
    new_id = await book_store.add_book(db, "DeleteMe", "Test Author")
    await book_store.delete_book(db, new_id)

    assert await book_store.delete_book(db, new_id) == 0


async def test_get_missing_book_raises_not_found(db):
    """A missing id is not-found, not a connection failure."""
    with pytest.raises(BookNotFoundError) as exc_info:
        await book_store.get_book(db, 42)
    assert exc_info.value.book_id == 42
    assert not isinstance(exc_info.value, ConnectionFailedError)


async def test_get_on_unreachable_store_is_connection_failure(unreachable_db):
    """An unreachable store is a connection failure, not not-found."""
    with pytest.raises(ConnectionFailedError) as exc_info:
        await book_store.get_book(unreachable_db, 1)
    assert not isinstance(exc_info.value, BookNotFoundError)


@pytest.mark.parametrize("call", [
    lambda db: book_store.list_books(db),
    lambda db: book_store.add_book(db, "t", "a"),
    lambda db: book_store.update_book(db, 1, "t", "a"),
    lambda db: book_store.delete_book(db, 1),
])
async def test_unreachable_store_surfaces_storage_error(unreachable_db, call):
    """Every operation surfaces an unreachable store as StorageError."""
    with pytest.raises(StorageError):
        await call(unreachable_db)
