"""
Application layer.

Retrieval coordination and knowledge base bootstrap.
"""

from navigator.application.knowledge_base import KnowledgeBaseLoader, KnowledgeBaseReport
from navigator.application.retrieval_service import (
    NO_DOCUMENTS_MESSAGE,
    NO_RESULTS_MESSAGE,
    BackendState,
    QueryResult,
    RetrievalService,
)

__all__ = [
    "NO_DOCUMENTS_MESSAGE",
    "NO_RESULTS_MESSAGE",
    "BackendState",
    "KnowledgeBaseLoader",
    "KnowledgeBaseReport",
    "QueryResult",
    "RetrievalService",
]
