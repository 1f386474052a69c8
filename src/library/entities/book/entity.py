"""Entity: Book."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.library.entities.core._base import Entity


class Book(Entity):
    """Book entity representing a title held by the library."""

    title: str = Field(description="Title")
    author: str = Field(description="Author")
    genre: str | None = Field(default=None, description="Genre")
    ISBN: str | None = Field(default=None, description="ISBN")  # noqa: N815

    def __eq__(self, other: Any) -> bool:
        """Compare books by business attributes, ignoring timestamps."""
        if not isinstance(other, Book):
            return False

        return (
            self.id == other.id
            and self.title == other.title
            and self.author == other.author
            and self.genre == other.genre
            and self.ISBN == other.ISBN
        )

    def __hash__(self) -> int:
        return hash((self.id, self.title, self.author, self.genre, self.ISBN))


class BookPayload(BaseModel):
    """Body of POST and PATCH requests on /books."""

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    author: str | None = None
    genre: str | None = None
    ISBN: str | None = None  # noqa: N815
