"""
Observability module.

Logging configuration, safe log helpers and HTTP middleware.
"""

from navigator.observability.logger import configure_logging, get_logger
from navigator.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

__all__ = [
    "configure_logging",
    "get_logger",
    "CorrelationMiddleware",
    "RequestLoggingMiddleware",
]
