"""
FastAPI application with assembled routers.

Initializes the FastAPI app, bootstraps the corpus on startup and
configures the uvicorn server.

Dependencies: fastapi, uvicorn, navigator.api.routers
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware

from navigator.api.deps.dependencies import get_service_cache
from navigator.observability import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
    configure_logging,
)

from .routers import health_router, rag_router, search_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Startup warms the service cache and loads the knowledge base; shutdown
    clears the cache.
    """
    cache = get_service_cache()
    configure_logging(cache.settings.log_level)
    logger = logging.getLogger(__name__)

    logger.info("Pre-warming service cache...")
    _ = cache.retrieval_service
    logger.info("Service cache pre-warmed")

    report = await run_in_threadpool(cache.knowledge_base_loader().initialize)
    logger.info(
        "Navigator application ready",
        extra=report.model_dump(),
    )

    yield

    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Navigator RAG API",
        description="Question answering over a science curriculum corpus",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(rag_router, prefix="/api/v1")
    app.include_router(search_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "navigator.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
