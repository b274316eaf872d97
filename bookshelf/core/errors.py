"""Error Hierarchy — typed, categorized exceptions for every Bookshelf failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Errors carry no HTTP status; api/error_handlers.py maps category → status
    - to_response() produces the REST error envelope
    - No driver/SQL details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with BookshelfError base: one global handler catches all
    - BookNotFoundError is a StorageError (lookup outcome) but has its own category,
      so callers can tell "no such row" apart from "store unreachable"
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logs and the response envelope."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    book_id: int | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class BookshelfError(Exception):
    """Base exception for all Bookshelf errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "book_id": self.context.book_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Client Errors ──────────────────────────────────────────────

class RecordValidationError(BookshelfError):
    """Book input rejected before reaching storage."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field


# ─── Storage Errors ─────────────────────────────────────────────

class StorageError(BookshelfError):
    """Base for every outcome reported by the storage gateway."""
    def __init__(
        self,
        message: str,
        code: str,
        operation: str,
        category: ErrorCategory = ErrorCategory.DATABASE,
        severity: ErrorSeverity = ErrorSeverity.CRITICAL,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(message, code, category, severity, ctx)
        self.operation = operation


class ConnectionFailedError(StorageError):
    """Store unreachable, misconfigured, or pool exhausted past its timeout."""
    def __init__(self, message: str, operation: str = "connect", context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "CONNECTION_FAILED", operation, context=context,
        )


class MigrationFailedError(StorageError):
    """Schema migration could not be applied."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database migration failed: {message}",
            "MIGRATION_FAILED", "migrate", context=context,
        )


class QueryFailedError(StorageError):
    """Any other storage-engine failure (constraint, driver, I/O)."""
    def __init__(self, message: str, operation: str = "query", context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "QUERY_FAILED", operation, context=context,
        )


class BookNotFoundError(StorageError):
    """Lookup by id matched no row."""
    def __init__(self, book_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.book_id = book_id
        super().__init__(
            f"Book '{book_id}' not found",
            "BOOK_NOT_FOUND", "lookup",
            category=ErrorCategory.RESOURCE_NOT_FOUND,
            severity=ErrorSeverity.WARNING,
            context=ctx,
        )
        self.book_id = book_id
