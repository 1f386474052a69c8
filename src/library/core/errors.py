"""Domain errors raised by the validation engine and the repositories.

Each error renders its own user-facing message; ``translate_error`` pairs a
failure with the HTTP status it is reported under. Exception handlers in
``api/http/errors.py`` turn the pair into ``{"error": "<message>"}``.
"""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus

PRESENCE_PREFIX = "notNull Violation"
VALIDATION_PREFIX = "Validation error"


class LibraryError(Exception):
    """Base class for all domain errors."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class PresenceViolationError(LibraryError):
    """A required field was omitted or null."""

    def __init__(self, entity: str, field: str, detail: str) -> None:
        self.entity = entity
        self.field = field
        self.detail = detail
        super().__init__(f"{PRESENCE_PREFIX}: {detail}")


class ValidationViolationError(LibraryError):
    """A field was supplied but fails a format, length or content rule."""

    def __init__(self, entity: str, field: str, detail: str) -> None:
        self.entity = entity
        self.field = field
        self.detail = detail
        super().__init__(f"{VALIDATION_PREFIX}: {detail}")


class RecordNotFoundError(LibraryError):
    """No record exists at the requested identifier."""

    status_code = HTTPStatus.NOT_FOUND

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"The {entity} could not be found.")


@dataclass(frozen=True)
class ErrorTranslation:
    status_code: int
    message: str


def translate_error(exc: Exception) -> ErrorTranslation:
    """Map a failure to its HTTP status and single-line message.

    Presence and validation failures are reported as 500 for compatibility
    with existing API clients.
    """
    if isinstance(exc, LibraryError):
        return ErrorTranslation(int(exc.status_code), exc.message)
    return ErrorTranslation(
        int(HTTPStatus.INTERNAL_SERVER_ERROR), HTTPStatus.INTERNAL_SERVER_ERROR.phrase
    )
