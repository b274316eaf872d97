"""Book Schemas — wire representation of a book record.

Invariants:
    - Book serializes as {"id": int, "title": str, "author": str}
    - Unknown request fields are ignored; missing title/author is rejected
    - BookCreate.id is accepted for symmetry with BookResponse and ignored
    - Ids that reach storage fit a signed 64-bit INTEGER column
"""

from pydantic import BaseModel, ConfigDict, Field

MIN_BOOK_ID = -(2**63)
MAX_BOOK_ID = 2**63 - 1


class BookCreate(BaseModel):
    """POST /books/add body."""
    model_config = ConfigDict(extra="ignore")

    id: int | None = None
    title: str
    author: str


class BookUpdate(BaseModel):
    """PUT /books/edit body: id selects the row, title/author replace it."""
    model_config = ConfigDict(extra="ignore")

    id: int = Field(ge=MIN_BOOK_ID, le=MAX_BOOK_ID)
    title: str
    author: str


class BookResponse(BaseModel):
    """Book as returned to clients."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    author: str
