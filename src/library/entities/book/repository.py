"""Book data access."""

from src.library.core.validation import BOOK_SCHEMA
from src.library.entities.core._repository import EntityRepository

from .entity import Book
from .table import BookTable


class BookRepository(EntityRepository[Book, BookTable]):
    """Data-access layer for books."""

    schema = BOOK_SCHEMA
    entity_type = Book
    table_type = BookTable
