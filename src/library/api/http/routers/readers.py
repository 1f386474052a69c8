"""Reader API router with CRUD operations."""

from typing import Any

from fastapi import APIRouter, Depends, Response, status

from src.library.api.http.deps import get_reader_repository
from src.library.core.shaping import shape, shape_many
from src.library.entities.reader import ReaderPayload, ReaderRepository

router = APIRouter(prefix="/readers", tags=["readers"])


def _fields(payload: ReaderPayload | None) -> dict[str, Any]:
    # Only keys the client actually sent; absent and null stay distinguishable.
    return payload.model_dump(exclude_unset=True) if payload is not None else {}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_reader(
    payload: ReaderPayload | None = None,
    repository: ReaderRepository = Depends(get_reader_repository),
) -> dict[str, Any]:
    """Create a new reader."""
    reader = await repository.create(_fields(payload))
    return shape(repository.schema, reader)


@router.get("")
async def list_readers(
    repository: ReaderRepository = Depends(get_reader_repository),
) -> list[dict[str, Any]]:
    """List all readers."""
    return shape_many(repository.schema, await repository.list_all())


@router.get("/{reader_id}")
async def get_reader(
    reader_id: str,
    repository: ReaderRepository = Depends(get_reader_repository),
) -> dict[str, Any]:
    """Get a reader by ID."""
    return shape(repository.schema, await repository.get(reader_id))


@router.patch("/{reader_id}")
async def update_reader(
    reader_id: str,
    payload: ReaderPayload | None = None,
    repository: ReaderRepository = Depends(get_reader_repository),
) -> dict[str, Any]:
    """Update only the supplied reader fields."""
    reader = await repository.update(reader_id, _fields(payload))
    return shape(repository.schema, reader)


@router.delete("/{reader_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reader(
    reader_id: str,
    repository: ReaderRepository = Depends(get_reader_repository),
) -> Response:
    """Delete a reader."""
    await repository.delete(reader_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
