"""
RAG API models and schemas.

Request/response schemas for ingestion, chat, status and search.

Dependencies: pydantic
System role: RAG API contracts
"""

from typing import Any

from pydantic import BaseModel, Field


class AddDocumentRequest(BaseModel):
    """Raw text to ingest into the corpus."""

    text: str = Field(min_length=1, description="Document text")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Scalar provenance metadata")
    api_key: str | None = Field(default=None, description="Embedding API key (server key if omitted)")


class AddDocumentResponse(BaseModel):
    """Result of a text ingestion."""

    chunks_added: int
    total_chunks: int
    status: str = "success"


class UploadResponse(BaseModel):
    """Result of a multipart PDF upload."""

    files_processed: int
    chunks_added: int
    total_chunks: int
    status: str = "success"


class ChatRequest(BaseModel):
    """Question against the corpus."""

    user_message: str = Field(min_length=1, description="User question")
    api_key: str | None = Field(default=None, description="API key for embeddings and generation")
    user_id: str | None = Field(default=None, description="Caller identifier (logged only)")


class RAGResponse(BaseModel):
    """Answer to a chat request."""

    message: str
    documents_count: int
    status: str = "ok"


class RAGStatusResponse(BaseModel):
    """Corpus status."""

    has_index: bool
    documents_count: int
    status: str = Field(description="'ready' when fragments exist, otherwise 'empty'")
    message: str


class SearchRequest(BaseModel):
    """Retrieval-only query."""

    query: str = Field(min_length=1, description="Search query")
    top_k: int = Field(default=4, ge=1, le=50, description="Number of fragments to return")
    api_key: str | None = Field(default=None, description="Embedding API key")


class SearchResult(BaseModel):
    """Ranked fragment returned from search."""

    text: str
    score: float
    metadata: dict[str, Any] = Field(default_factory=dict)
