"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlmodel.ext.asyncio.session import AsyncSession

from src.library.api.http.app_data import ApplicationDependencies
from src.library.core.services import DbSessionService
from src.library.entities import BookRepository, ReaderRepository


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


async def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> AsyncIterator[AsyncSession]:
    """Yield one session per request."""
    async with database_service.session_scope() as session:
        yield session


def get_reader_repository(
    session: AsyncSession = Depends(get_db_session),
) -> ReaderRepository:
    return ReaderRepository(session)


def get_book_repository(
    session: AsyncSession = Depends(get_db_session),
) -> BookRepository:
    return BookRepository(session)
