"""Reader data access."""

from src.library.core.validation import READER_SCHEMA
from src.library.entities.core._repository import EntityRepository

from .entity import Reader
from .table import ReaderTable


class ReaderRepository(EntityRepository[Reader, ReaderTable]):
    """Data-access layer for readers."""

    schema = READER_SCHEMA
    entity_type = Reader
    table_type = ReaderTable
