"""Book API router with CRUD operations."""

from typing import Any

from fastapi import APIRouter, Depends, Response, status

from src.library.api.http.deps import get_book_repository
from src.library.core.shaping import shape, shape_many
from src.library.entities.book import BookPayload, BookRepository

router = APIRouter(prefix="/books", tags=["books"])


def _fields(payload: BookPayload | None) -> dict[str, Any]:
    return payload.model_dump(exclude_unset=True) if payload is not None else {}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_book(
    payload: BookPayload | None = None,
    repository: BookRepository = Depends(get_book_repository),
) -> dict[str, Any]:
    """Create a new book."""
    book = await repository.create(_fields(payload))
    return shape(repository.schema, book)


@router.get("")
async def list_books(
    repository: BookRepository = Depends(get_book_repository),
) -> list[dict[str, Any]]:
    """List all books."""
    return shape_many(repository.schema, await repository.list_all())


@router.get("/{book_id}")
async def get_book(
    book_id: str,
    repository: BookRepository = Depends(get_book_repository),
) -> dict[str, Any]:
    """Get a book by ID."""
    return shape(repository.schema, await repository.get(book_id))


@router.patch("/{book_id}")
async def update_book(
    book_id: str,
    payload: BookPayload | None = None,
    repository: BookRepository = Depends(get_book_repository),
) -> dict[str, Any]:
    """Update only the supplied book fields."""
    book = await repository.update(book_id, _fields(payload))
    return shape(repository.schema, book)


@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_book(
    book_id: str,
    repository: BookRepository = Depends(get_book_repository),
) -> Response:
    """Delete a book."""
    await repository.delete(book_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
