"""API routers."""

from navigator.api.routers.health import router as health_router
from navigator.api.routers.rag import router as rag_router
from navigator.api.routers.search import router as search_router

__all__ = ["health_router", "rag_router", "search_router"]
