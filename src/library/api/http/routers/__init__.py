from .books import router as books_router
from .health import router as health_router
from .readers import router as readers_router

__all__ = ["books_router", "health_router", "readers_router"]
