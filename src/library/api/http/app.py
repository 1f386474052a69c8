"""FastAPI application factory and setup."""

import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from src.library.api.http.app_data import ApplicationDependencies
from src.library.api.http.errors import error_response, register_error_handlers
from src.library.api.http.routers import books_router, health_router, readers_router
from src.library.api.utils.app_startup import configure_logging
from src.library.core.services import DbSessionService
from src.library.runtime.config.config_data import ConfigData
from src.library.runtime.context import get_config


# --- Lifecycle hooks ---
async def startup(app: FastAPI, config: ConfigData | None = None) -> None:
    """Acquire the store handle once for the whole process."""
    config = config or get_config()
    logger.info("Starting up application in {} environment", config.app.environment)

    database_service = DbSessionService(config.database, config.app.environment)
    if config.database.create_tables:
        await database_service.create_all()

    app.state.app_dependencies = ApplicationDependencies(
        database_service=database_service,
    )


async def shutdown(app: FastAPI) -> None:
    logger.info("Shutting down application")
    app_dependencies: ApplicationDependencies | None = getattr(
        app.state, "app_dependencies", None
    )
    if app_dependencies is not None:
        await app_dependencies.database_service.dispose()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await startup(app, getattr(app.state, "config", None))
    try:
        yield
    finally:
        await shutdown(app)


# --- Request logging middleware ---
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    base_ctx = {
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "client_ip": request.client.host if request.client else "unknown",
    }

    start = time.perf_counter()

    with logger.contextualize(**base_ctx):
        try:
            logger.info("request.start")
            response = await call_next(request)

            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=response.status_code,
                duration_ms=round(duration_ms, 1),
            ).info("request.end")

            response.headers.setdefault("X-Request-ID", request_id)
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            logger.bind(
                status_code=500,
                duration_ms=round(duration_ms, 1),
                error_type=type(exc).__name__,
            ).exception("request.error")
            return error_response(
                500, "Internal Server Error", headers={"X-Request-ID": request_id}
            )


def create_app(config: ConfigData | None = None) -> FastAPI:
    """Build the application; the store is attached by the lifespan hook."""
    config = config or get_config()
    is_production = config.app.environment == "production"

    application = FastAPI(
        title=config.app.name,
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )
    application.state.config = config

    if is_production and "*" in config.app.cors.origins:
        raise RuntimeError(
            "CORS misconfigured: cannot use '*' with allow_credentials=True in production"
        )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=config.app.cors.origins,
        allow_credentials=config.app.cors.allow_credentials,
        allow_methods=config.app.cors.allow_methods,
        allow_headers=config.app.cors.allow_headers,
    )
    application.middleware("http")(log_requests)

    register_error_handlers(application)

    application.include_router(health_router)
    application.include_router(readers_router)
    application.include_router(books_router)
    return application


configure_logging()
app = create_app()

__all__ = ["app", "create_app", "startup", "shutdown"]


if __name__ == "__main__":
    import uvicorn

    main_config = get_config()
    uvicorn.run(
        app,
        host=main_config.app.host,
        port=main_config.app.port,
        access_log=False,  # We handle access logging in middleware
    )
