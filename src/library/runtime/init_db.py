"""Database initialization script."""

import asyncio

from src.library.core.services import DbSessionService
from src.library.runtime.config.config_data import ConfigData
from src.library.runtime.context import get_config


async def init_db(config: ConfigData | None = None) -> None:
    """Create all database tables."""
    config = config or get_config()
    database_service = DbSessionService(config.database, config.app.environment)
    try:
        await database_service.create_all()
    finally:
        await database_service.dispose()


if __name__ == "__main__":
    asyncio.run(init_db())
