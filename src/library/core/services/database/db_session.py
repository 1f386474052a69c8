"""Database engine and session factory shared by the request handlers."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from loguru import logger
from sqlalchemy import text
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from src.library.runtime.config.config_data import DatabaseConfig


class DbSessionService:
    """Owns the async engine for the lifetime of the process.

    Constructed once at startup and passed to whoever needs sessions;
    ``dispose`` must be awaited at shutdown.
    """

    def __init__(self, db_config: DatabaseConfig, environment: str = "development"):
        logger.info("Setting up database engine and session factory")
        self._config = db_config
        url = db_config.connection_string

        engine_kwargs: dict[str, Any] = {
            "echo": db_config.echo,
            "pool_pre_ping": True,
            "connect_args": self._get_connect_args(db_config),
        }
        if db_config.is_sqlite:
            if db_config.is_memory:
                # Every session must see the same in-memory database.
                engine_kwargs["poolclass"] = StaticPool
            if environment == "production":
                logger.warning(
                    "SQLite is not recommended for production use. "
                    "Consider PostgreSQL for better performance and reliability."
                )
        else:
            engine_kwargs.update(
                {
                    "pool_size": db_config.pool_size,
                    "max_overflow": db_config.max_overflow,
                    "pool_timeout": db_config.pool_timeout,
                    "pool_recycle": db_config.pool_recycle,
                }
            )

        self._engine = create_async_engine(url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Prevent lazy loading in async context
            autoflush=True,
        )

    @property
    def engine(self):
        return self._engine

    def _get_connect_args(self, db_config: DatabaseConfig) -> dict[str, Any]:
        if db_config.is_sqlite:
            return {"check_same_thread": False, "timeout": 20}
        return {}

    async def create_all(self) -> None:
        """Create all tables registered with SQLModel metadata."""
        # Table models register themselves on import.
        from src.library.entities import BookTable, ReaderTable  # noqa: F401

        async with self._engine.begin() as connection:
            await connection.run_sync(SQLModel.metadata.create_all)
        logger.info("Database initialized with tables.")

    def get_session(self) -> AsyncSession:
        """Return a new session bound to the shared engine."""
        return self._session_factory()

    @asynccontextmanager
    async def session_scope(self) -> AsyncIterator[AsyncSession]:
        """Yield a session that is rolled back on error and always closed."""
        session = self.get_session()
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.bind(error_type=type(e).__name__).debug(
                "Database session rolled back"
            )
            raise
        finally:
            await session.close()

    async def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            async with self._engine.connect() as connection:
                await connection.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error(
                "Database health check failed: {}: {}", type(e).__name__, e
            )
            return False

    async def dispose(self) -> None:
        await self._engine.dispose()
        logger.info("Database engine disposed")
