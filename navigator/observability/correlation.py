"""
Correlation ID context.

Holds the current request's correlation ID in a contextvar so log records
emitted from the thread pool still carry it.

Dependencies: contextvars
System role: Request tracing across service boundaries
"""

import uuid
from contextvars import ContextVar

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="-")


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set the correlation ID (generated if None) and return it."""
    value = correlation_id or str(uuid.uuid4())
    correlation_id_ctx.set(value)
    return value


def get_correlation_id() -> str:
    return correlation_id_ctx.get()
