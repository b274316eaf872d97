"""Book ORM — the only persisted entity.

Invariants:
    - id is assigned by the store on insert and never changes
    - title and author are required text, no uniqueness
    - Deletion is physical (no soft-delete flag)
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from bookshelf.db.base import Base


class Book(Base):
    __tablename__ = "books"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    # "Surname, First name" by convention, not enforced
    author: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"Book(id={self.id!r}, title={self.title!r}, author={self.author!r})"
