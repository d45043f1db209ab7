"""
Core business logic module.

Contains the exception hierarchy, vector math, and document processing tasks.
"""

from navigator.core.exceptions import (
    DimensionMismatchError,
    DocumentProcessingError,
    EmbeddingError,
    GenerationError,
    NavigatorException,
    ParsingError,
    PersistenceError,
    RetrievalError,
    ValidationError,
    VectorStoreError,
)

__all__ = [
    "NavigatorException",
    "ValidationError",
    "DimensionMismatchError",
    "DocumentProcessingError",
    "ParsingError",
    "EmbeddingError",
    "VectorStoreError",
    "PersistenceError",
    "RetrievalError",
    "GenerationError",
]
