"""Structured Logging — JSON or text log lines for the API process.

Invariants:
    - Every line carries the record's own time (UTC), level, logger and message
    - Request/storage context (book_id, error_code, path, operation) only when set
    - At most one Bookshelf handler on the root logger, however often setup runs
    - Driver chatter (aiosqlite, sqlalchemy.pool) held at WARNING unless DEBUG
"""

import json
import logging
from datetime import datetime, timezone

HANDLER_NAME = "bookshelf"
CONTEXT_FIELDS = ("book_id", "error_code", "path", "operation")
_NOISY_LOGGERS = ("aiosqlite", "sqlalchemy.pool", "sqlalchemy.engine")


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def __init__(self, context_fields: tuple[str, ...] = CONTEXT_FIELDS):
        super().__init__()
        self.context_fields = context_fields

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, getattr(record, key))
            for key in self.context_fields
            if getattr(record, key, None) is not None
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def _text_formatter() -> logging.Formatter:
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install (or replace) the Bookshelf handler on the root logger."""
    root = logging.getLogger()
    for existing in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(JSONFormatter() if fmt == "json" else _text_formatter())
    root.addHandler(handler)

    resolved = logging.getLevelName(level.upper())
    root.setLevel(resolved if isinstance(resolved, int) else logging.INFO)
    driver_level = logging.DEBUG if root.level <= logging.DEBUG else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(driver_level)
    return handler
