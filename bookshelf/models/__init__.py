"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
"""

from bookshelf.models.book import Book  # noqa: F401
