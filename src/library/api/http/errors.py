"""Exception handlers that render every failure as ``{"error": "<message>"}``.

Domain errors go through ``translate_error`` so the status and message table
lives in one place. Unexpected exceptions are caught by the request logging
middleware in ``app.py``.
"""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.library.core.errors import (
    VALIDATION_PREFIX,
    LibraryError,
    RecordNotFoundError,
    ValidationViolationError,
    translate_error,
)


def error_response(
    status_code: int, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    """Build the JSON error body shared by every failure."""
    return JSONResponse(
        status_code=status_code, content={"error": message}, headers=headers
    )


def describe_request_error(exc: RequestValidationError) -> str:
    """Condense a request parsing failure into a single-line message."""
    errors = exc.errors()
    if not errors:
        return f"{VALIDATION_PREFIX}: Invalid request"
    first = errors[0]
    # Drop the "body" root and positional offsets such as JSON decode indexes.
    location = ".".join(
        part for part in first.get("loc", ())[1:] if isinstance(part, str)
    )
    detail = first.get("msg", "Invalid request")
    if location:
        return f"{VALIDATION_PREFIX}: {location}: {detail}"
    return f"{VALIDATION_PREFIX}: {detail}"


def register_error_handlers(app: FastAPI) -> None:
    """Register all error handlers on the FastAPI application."""

    @app.exception_handler(LibraryError)
    async def handle_library_error(request: Request, exc: LibraryError) -> JSONResponse:
        translation = translate_error(exc)
        if isinstance(exc, RecordNotFoundError):
            logger.info("{} {} not found", exc.entity, exc.identifier)
        else:
            logger.warning("Rejected {} {}: {}", request.method, request.url.path, exc.message)
        return error_response(translation.status_code, translation.message)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = describe_request_error(exc)
        logger.warning("Malformed request body on {}: {}", request.url.path, message)
        return error_response(int(ValidationViolationError.status_code), message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(
        _request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return error_response(exc.status_code, str(exc.detail), headers=exc.headers)
