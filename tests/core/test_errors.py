"""Error hierarchy — codes, categories and the REST envelope.

Tests:
    - Storage failures share the StorageError base
    - BookNotFoundError is a storage outcome with its own category
    - to_response() carries code, category, severity and context
"""

from bookshelf.core.errors import (
    BookNotFoundError, BookshelfError, ConnectionFailedError, ErrorCategory,
    ErrorContext, ErrorSeverity, MigrationFailedError, QueryFailedError,
    RecordValidationError, StorageError,
)


def test_storage_errors_share_base():
    for error in (
        ConnectionFailedError("down"),
        MigrationFailedError("broken"),
        QueryFailedError("boom"),
        BookNotFoundError(7),
    ):
        assert isinstance(error, StorageError)
        assert isinstance(error, BookshelfError)


def test_not_found_has_distinct_category():
    assert BookNotFoundError(7).category == ErrorCategory.RESOURCE_NOT_FOUND
    assert ConnectionFailedError("down").category == ErrorCategory.DATABASE


def test_validation_error_is_not_a_storage_error():
    error = RecordValidationError("title cannot be empty", "title")
    assert not isinstance(error, StorageError)
    assert error.category == ErrorCategory.VALIDATION
    assert error.field == "title"


def test_connection_failed_message_names_operation():
    error = ConnectionFailedError("Database unreachable", "connect")
    assert error.message == "Database connect failed: Database unreachable"
    assert error.code == "CONNECTION_FAILED"
    assert error.context.operation == "connect"


def test_to_response_envelope():
    response = BookNotFoundError(3).to_response()

    error = response["error"]
    assert error["code"] == "BOOK_NOT_FOUND"
    assert error["message"] == "Book '3' not found"
    assert error["category"] == "resource_not_found"
    assert error["severity"] == ErrorSeverity.WARNING.value
    assert error["context"] == {"book_id": 3, "operation": "lookup"}
    assert "timestamp" in error


def test_explicit_context_is_kept():
    ctx = ErrorContext(operation="update")
    error = QueryFailedError("boom", "update", context=ctx)
    assert error.context is ctx
    assert error.operation == "update"
