"""Entities organized by business concept.

Each entity has its own package containing:
- entity.py: domain model and request payload
- table.py: database persistence model
- repository.py: data access layer
"""

from .book import Book, BookPayload, BookRepository, BookTable
from .reader import Reader, ReaderPayload, ReaderRepository, ReaderTable

__all__ = [
    "Book",
    "BookPayload",
    "BookRepository",
    "BookTable",
    "Reader",
    "ReaderPayload",
    "ReaderRepository",
    "ReaderTable",
]
