"""
Domain exception to HTTP error mapping.

Dependencies: fastapi, navigator.core.exceptions
System role: Shared router error handling
"""

from fastapi import HTTPException

from navigator.core.exceptions import (
    EmbeddingError,
    GenerationError,
    NavigatorException,
    ParsingError,
    PersistenceError,
    RetrievalError,
    ValidationError,
    VectorStoreError,
)
from navigator.models.common import ErrorResponse

# Checked in order; subclasses before their parents
STATUS_CODES: list[tuple[type[NavigatorException], int]] = [
    (ValidationError, 400),
    (ParsingError, 400),
    (RetrievalError, 400),
    (EmbeddingError, 502),
    (GenerationError, 502),
    (VectorStoreError, 503),
    (PersistenceError, 500),
]


def to_http_exception(exc: NavigatorException) -> HTTPException:
    """Convert a domain exception into an HTTPException with an ErrorResponse body."""
    status_code = next(
        (code for exc_type, code in STATUS_CODES if isinstance(exc, exc_type)),
        500,
    )
    body = ErrorResponse(error=exc.message, details=exc.details or None)
    return HTTPException(status_code=status_code, detail=body.model_dump())
