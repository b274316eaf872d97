"""`python -m bookshelf` — serve the API with uvicorn.

uvicorn exits non-zero when the lifespan fails (bad DATABASE_URL,
unreachable store, failed migration), before any request is accepted.
"""

import uvicorn

from bookshelf.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "bookshelf.main:app",
        host=settings.host,
        port=settings.port,
        lifespan="on",
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
