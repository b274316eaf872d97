"""Books REST routes — CRUD over the book table.

Invariants:
    - Each route calls exactly one BookService operation
    - Path ids are parsed as bounded ints; non-integer or out-of-range ids fail with 400
      before the service runs
    - Errors propagate to api/error_handlers.py, which picks the status code
    - edit/delete reply 200 with an empty body
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from bookshelf.api.deps import get_book_service
from bookshelf.schemas.book import (
    MAX_BOOK_ID, MIN_BOOK_ID, BookCreate, BookResponse, BookUpdate,
)
from bookshelf.services.book_service import BookService

router = APIRouter(prefix="/books", tags=["books"])

BookIdPath = Annotated[int, Path(ge=MIN_BOOK_ID, le=MAX_BOOK_ID)]


@router.get("/", response_model=list[BookResponse])
@router.get("", response_model=list[BookResponse], include_in_schema=False)
async def get_all_books(service: BookService = Depends(get_book_service)):
    """All books, ordered by title then author."""
    return await service.list_books()


@router.get("/{book_id}", response_model=BookResponse)
async def get_book(book_id: BookIdPath, service: BookService = Depends(get_book_service)):
    return await service.get_book(book_id)


@router.post("/add", response_model=int)
async def add_book(body: BookCreate, service: BookService = Depends(get_book_service)):
    """Create a book; the body's id (if any) is ignored. Returns the new id."""
    return await service.create_book(body.title, body.author)


@router.put("/edit")
async def update_book(body: BookUpdate, service: BookService = Depends(get_book_service)):
    await service.update_book(body.id, body.title, body.author)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/delete/{book_id}")
async def delete_book(book_id: BookIdPath, service: BookService = Depends(get_book_service)):
    await service.delete_book(book_id)
    return Response(status_code=status.HTTP_200_OK)
