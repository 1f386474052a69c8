"""Reader entity module.

- Reader: domain entity
- ReaderPayload: request body for create and partial update
- ReaderTable: database persistence model
- ReaderRepository: data access layer
"""

from .entity import Reader, ReaderPayload
from .repository import ReaderRepository
from .table import ReaderTable

__all__ = ["Reader", "ReaderPayload", "ReaderTable", "ReaderRepository"]
