"""Seed data — sample books available on a fresh store.

Revision ID: 002_seed_books
Revises: 001_create_books
Create Date: 2023-10-02

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_seed_books"
down_revision: Union[str, None] = "001_create_books"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

SEED_BOOKS = [
    {"title": "Hands-on Rust", "author": "Wolverson, Herbert"},
    {"title": "Rust Brain Teasers", "author": "Wolverson, Herbert"},
]

books = sa.table(
    "books",
    sa.column("id", sa.Integer),
    sa.column("title", sa.Text),
    sa.column("author", sa.Text),
)


def upgrade() -> None:
    op.bulk_insert(books, SEED_BOOKS)


def downgrade() -> None:
    for row in SEED_BOOKS:
        op.execute(
            books.delete().where(
                (books.c.title == row["title"]) & (books.c.author == row["author"]),
            ),
        )
