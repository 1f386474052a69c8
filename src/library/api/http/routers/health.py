"""Health check endpoints for monitoring service availability."""

from typing import Any

from fastapi import APIRouter, Depends, status
from starlette.responses import JSONResponse

from src.library.api.http.deps import get_database_service
from src.library.core.services import DbSessionService

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
async def health() -> dict[str, str]:
    """Liveness probe: 200 as long as the process is serving requests."""
    return {"status": "healthy", "service": "api"}


@router.get("/ready", response_model=None)
async def readiness(
    database_service: DbSessionService = Depends(get_database_service),
) -> dict[str, Any] | JSONResponse:
    """Readiness probe: 503 when the store cannot be reached."""
    db_healthy = await database_service.health_check()
    body = {
        "status": "ready" if db_healthy else "not_ready",
        "checks": {"database": {"status": "healthy" if db_healthy else "unhealthy"}},
    }
    if not db_healthy:
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=body)
    return body
