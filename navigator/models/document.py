"""
Document domain models.

Fragment is the unit stored by both vector backends; ParsedDocument is raw
extracted text handed to the ingestion pipeline.

Dependencies: pydantic
System role: Data structures for ingestion and retrieval
"""

from typing import Any

from pydantic import BaseModel, Field


class Fragment(BaseModel):
    """A bounded slice of a source document plus its embedding and metadata."""

    text: str = Field(description="Fragment text content")
    embedding: list[float] | None = Field(
        default=None,
        description="Embedding vector, None only until the embedding call completes",
    )
    metadata: dict[str, Any] = Field(
        default_factory=dict,
        description="Scalar metadata (chunk_index, filename, source, timestamps)",
    )


class ScoredFragment(BaseModel):
    """Fragment returned from a similarity search, in ranked order."""

    text: str = Field(description="Fragment text content")
    score: float = Field(description="Cosine similarity to the query")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Fragment metadata")


class ParsedDocument(BaseModel):
    """Raw text extracted from a source file."""

    text: str = Field(description="Extracted text")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Provenance metadata")
