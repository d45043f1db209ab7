"""
Vector backend contract shared by the local store and the remote index.

Dependencies: navigator.boundary.llm, navigator.models
System role: Backend polymorphism for the retrieval coordinator
"""

from abc import ABC, abstractmethod
from typing import Any

from navigator.boundary.llm.embedding_provider import EmbeddingProvider
from navigator.models.document import ScoredFragment


class VectorBackend(ABC):
    """
    Fragment storage and similarity search.

    Implementations chunk, embed and store raw text on ingest, and return
    fragments ranked by descending similarity on search.
    """

    name: str = "abstract"

    @abstractmethod
    def ingest(
        self,
        text: str,
        metadata: dict[str, Any] | None,
        provider: EmbeddingProvider,
        credential: str | None = None,
    ) -> int:
        """Chunk, embed and store text. Returns the number of fragments added."""

    @abstractmethod
    def search_by_vector(self, query_embedding: list[float], k: int) -> list[ScoredFragment]:
        """Return up to k fragments ranked by similarity to query_embedding."""

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored fragments."""

    def search(
        self,
        question: str,
        provider: EmbeddingProvider,
        k: int,
        credential: str | None = None,
    ) -> list[ScoredFragment]:
        """Embed question and search by the resulting vector."""
        return self.search_by_vector(provider.embed(question, credential), k)
