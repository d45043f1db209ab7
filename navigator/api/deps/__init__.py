"""FastAPI dependency providers."""

from navigator.api.deps.dependencies import (
    ServiceCache,
    get_parser,
    get_retrieval_service,
    get_service_cache,
)

__all__ = [
    "ServiceCache",
    "get_parser",
    "get_retrieval_service",
    "get_service_cache",
]
