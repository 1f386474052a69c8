"""Reader domain entity and request payloads."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.library.entities.core._base import Entity


class Reader(Entity):
    """A library member.

    ``password`` holds the stored value; responses pass through the shaper,
    which never lets it out unmasked.
    """

    name: str = Field(description="Reader's display name")
    email: str = Field(description="Reader's email address, unique across readers")
    password: str = Field(repr=False, description="Reader's password")

    def __eq__(self, other: Any) -> bool:
        """Compare readers by business attributes, ignoring timestamps."""
        if not isinstance(other, Reader):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.email == other.email
            and self.password == other.password
        )

    def __hash__(self) -> int:
        return hash((self.id, self.name, self.email))


class ReaderPayload(BaseModel):
    """Body of POST and PATCH requests on /readers.

    Every field is optional here so that absent and null values reach the
    validation engine, which reports them with the established messages.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    email: str | None = None
    password: str | None = None
