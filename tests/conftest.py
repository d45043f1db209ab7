"""
Shared test fixtures and configuration for entire test suite.

Provides: deterministic keyword embeddings, fake answer generation, stores
wired to a temp snapshot file, and a retrieval service on the local backend.
Dependencies: pytest
System role: Test infrastructure and fixture management
"""

from pathlib import Path

import pytest

from navigator.application.retrieval_service import RetrievalService
from navigator.boundary.llm.answer_generator import AnswerGenerator
from navigator.boundary.llm.embedding_provider import EmbeddingProvider
from navigator.boundary.vdb.local_vector_store import LocalVectorStore
from navigator.core.document_processing.tasks.chunking_task import ChunkingTask
from navigator.core.exceptions import EmbeddingError

KEYWORDS = ("cat", "dog", "mammal", "fish", "plant", "water", "sun", "rock")


class KeywordEmbeddingProvider(EmbeddingProvider):
    """
    Embeds text as keyword counts plus a constant bias component.

    The bias keeps every vector non-zero; texts sharing keywords score higher.
    """

    def __init__(self, fail_on: str | None = None) -> None:
        self.calls: list[tuple[str, str | None]] = []
        self.fail_on = fail_on

    @property
    def dimension(self) -> int:
        return len(KEYWORDS) + 1

    def embed(self, text: str, credential: str | None = None) -> list[float]:
        self.calls.append((text, credential))
        if self.fail_on is not None and self.fail_on in text:
            raise EmbeddingError("Failed to generate embedding: simulated outage")
        lowered = text.lower()
        return [float(lowered.count(word)) for word in KEYWORDS] + [1.0]


class FakeAnswerGenerator(AnswerGenerator):
    """Records generate() calls and echoes the first context line."""

    def __init__(self) -> None:
        self.calls: list[dict] = []

    def generate(self, question: str, context: str, credential: str | None = None) -> str:
        self.calls.append({"question": question, "context": context, "credential": credential})
        return f"Answer based on: {context.splitlines()[0]}"


@pytest.fixture
def embedding_provider() -> KeywordEmbeddingProvider:
    return KeywordEmbeddingProvider()


@pytest.fixture
def answer_generator() -> FakeAnswerGenerator:
    return FakeAnswerGenerator()


@pytest.fixture
def index_file(tmp_path: Path) -> Path:
    """Snapshot path inside the test's temp directory."""
    return tmp_path / "rag_index.json"


@pytest.fixture
def local_store(index_file: Path) -> LocalVectorStore:
    """Empty local store with default chunking and a 9-dimensional vector size."""
    return LocalVectorStore(
        index_file=index_file,
        chunker=ChunkingTask(),
        dimension=len(KEYWORDS) + 1,
    )


@pytest.fixture
def retrieval_service(
    embedding_provider: KeywordEmbeddingProvider,
    answer_generator: FakeAnswerGenerator,
    local_store: LocalVectorStore,
) -> RetrievalService:
    """Retrieval service with no remote index configured (local backend)."""
    return RetrievalService(
        embedding_provider=embedding_provider,
        answer_generator=answer_generator,
        local_store=local_store,
        remote_index=None,
        top_k=3,
    )


@pytest.fixture
def failing_provider():
    """Factory for keyword providers that raise EmbeddingError on texts containing a marker."""

    def _make(marker: str) -> KeywordEmbeddingProvider:
        return KeywordEmbeddingProvider(fail_on=marker)

    return _make
