"""Book database table model."""

from src.library.entities.core._base import EntityTable


class BookTable(EntityTable, table=True):
    """Database persistence model for books."""

    __tablename__ = "books"

    title: str
    author: str
    genre: str | None = None
    ISBN: str | None = None  # noqa: N815
