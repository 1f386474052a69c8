"""Reader database table model."""

from sqlmodel import Field

from src.library.entities.core._base import EntityTable


class ReaderTable(EntityTable, table=True):
    """Database persistence model for readers."""

    __tablename__ = "readers"

    name: str
    email: str = Field(unique=True, index=True)
    password: str
