"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store

Dependencies: navigator.application.retrieval_service
System role: Health check HTTP API
"""

from typing import Any

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from navigator.api.deps import get_retrieval_service
from navigator.application.retrieval_service import RetrievalService


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


class VectorStoreHealthResponse(HealthResponse):
    """Vector store health with backend details."""

    backend: dict[str, Any]


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/vector-store", response_model=VectorStoreHealthResponse)
async def health_check_vector_store(
    service: RetrievalService = Depends(get_retrieval_service),
) -> VectorStoreHealthResponse:
    """Report the active backend and remote collection info."""
    info = await run_in_threadpool(service.backend_info)
    return VectorStoreHealthResponse(
        status="healthy",
        message=f"Vector store accessible ({info['backend']})",
        backend=info,
    )
