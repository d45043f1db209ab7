"""
Domain and API models.

Dependencies: pydantic
"""

from navigator.models.common import ErrorResponse
from navigator.models.document import Fragment, ParsedDocument, ScoredFragment
from navigator.models.rag import (
    AddDocumentRequest,
    AddDocumentResponse,
    ChatRequest,
    RAGResponse,
    RAGStatusResponse,
    SearchRequest,
    SearchResult,
    UploadResponse,
)

__all__ = [
    "ErrorResponse",
    "Fragment",
    "ParsedDocument",
    "ScoredFragment",
    "AddDocumentRequest",
    "AddDocumentResponse",
    "ChatRequest",
    "RAGResponse",
    "RAGStatusResponse",
    "SearchRequest",
    "SearchResult",
    "UploadResponse",
]
