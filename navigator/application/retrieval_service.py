"""
Retrieval service orchestrator.

Selects the vector backend once per process and runs the ingestion
(chunk, embed, store) and query (embed, search, assemble context, generate)
pipelines against it.

Backend selection:
    UNINITIALIZED -> REMOTE_ACTIVE   remote index configured and reachable
    UNINITIALIZED -> LOCAL_ACTIVE    otherwise
Both terminal states are final for the lifetime of the service.

Dependencies: navigator.boundary.vdb, navigator.boundary.llm
System role: Retrieval coordinator behind the HTTP layer and knowledge base bootstrap
"""

import logging
import threading
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from navigator.boundary.llm.answer_generator import AnswerGenerator
from navigator.boundary.llm.embedding_provider import EmbeddingProvider
from navigator.boundary.vdb.base import VectorBackend
from navigator.boundary.vdb.local_vector_store import LocalVectorStore
from navigator.boundary.vdb.s3_vector_index import S3VectorIndex
from navigator.core.exceptions import PersistenceError, RetrievalError
from navigator.models.document import ScoredFragment

logger = logging.getLogger(__name__)

NO_DOCUMENTS_MESSAGE = "No documents have been added to the RAG system yet."
NO_RESULTS_MESSAGE = "No relevant information found in the documents."
CONTEXT_SEPARATOR = "\n\n"


class BackendState(str, Enum):
    """Backend selection state."""

    UNINITIALIZED = "uninitialized"
    REMOTE_ACTIVE = "remote_active"
    LOCAL_ACTIVE = "local_active"


class QueryResult(BaseModel):
    """Answer plus the fragments it was generated from."""

    answer: str = Field(description="Generated answer or a fixed fallback message")
    documents_count: int = Field(description="Total fragments in the active backend")
    fragments: list[ScoredFragment] = Field(
        default_factory=list,
        description="Context fragments in ranked order",
    )


class RetrievalService:
    """
    Retrieval coordinator.

    Owns both backends; only one is ever active. Public methods trigger
    backend selection on first use.
    """

    def __init__(
        self,
        embedding_provider: EmbeddingProvider,
        answer_generator: AnswerGenerator,
        local_store: LocalVectorStore,
        remote_index: S3VectorIndex | None = None,
        top_k: int = 3,
    ) -> None:
        """
        Initialize retrieval service.

        Args:
            embedding_provider: Text -> vector adapter
            answer_generator: Generation step for the query pipeline
            local_store: In-process fallback backend
            remote_index: S3 Vectors backend, or None when not configured
            top_k: Default number of context fragments per query
        """
        self._provider = embedding_provider
        self._generator = answer_generator
        self._local_store = local_store
        self._remote_index = remote_index
        self._top_k = top_k

        self._state = BackendState.UNINITIALIZED
        self._backend: VectorBackend | None = None
        self._selection_lock = threading.Lock()

    @property
    def state(self) -> BackendState:
        return self._state

    @property
    def active_backend(self) -> VectorBackend:
        """Active backend, selecting it on first access."""
        return self._ensure_backend()

    @property
    def local_store(self) -> LocalVectorStore:
        return self._local_store

    def _ensure_backend(self) -> VectorBackend:
        if self._backend is not None:
            return self._backend

        with self._selection_lock:
            if self._backend is None:
                remote = self._remote_index
                if remote is not None and remote.available:
                    remote.initialize_collection()
                    self._backend = remote
                    self._state = BackendState.REMOTE_ACTIVE
                    logger.info(f"{__name__}:_ensure_backend - Using S3 Vectors for RAG system")
                else:
                    self._backend = self._local_store
                    self._state = BackendState.LOCAL_ACTIVE
                    logger.info(f"{__name__}:_ensure_backend - Using in-memory RAG system")
        return self._backend

    def add_document(
        self,
        text: str,
        metadata: dict[str, Any] | None = None,
        credential: str | None = None,
    ) -> int:
        """
        Ingest a document into the active backend.

        Args:
            text: Raw document text
            metadata: Provenance metadata copied onto every fragment
            credential: Embedding API key

        Returns:
            int: Number of fragments added

        Raises:
            EmbeddingError: When any chunk fails to embed
            DimensionMismatchError: When an embedding has the wrong length
        """
        backend = self._ensure_backend()
        added = backend.ingest(text, metadata, self._provider, credential)
        logger.info(
            f"{__name__}:add_document - Added {added} chunks",
            extra={"backend": backend.name, "text_length": len(text or "")},
        )
        return added

    def query(
        self,
        question: str,
        credential: str | None = None,
        k: int | None = None,
    ) -> QueryResult:
        """
        Answer question from the top-k fragments.

        An empty corpus returns NO_DOCUMENTS_MESSAGE and a search with no
        matches returns NO_RESULTS_MESSAGE; the generator is not called in
        either case.

        Args:
            question: User question
            credential: API key for embedding and generation
            k: Number of context fragments (service default if None)

        Returns:
            QueryResult: Answer, corpus size and context fragments

        Raises:
            RetrievalError: When k is not positive
            EmbeddingError: When the question cannot be embedded
            GenerationError: When the generation step fails
        """
        k = self._top_k if k is None else k
        if k < 1:
            raise RetrievalError("k must be at least 1", details={"k": k})

        backend = self._ensure_backend()
        total = backend.count()
        if total == 0:
            return QueryResult(answer=NO_DOCUMENTS_MESSAGE, documents_count=0)

        query_embedding = self._provider.embed(question, credential)
        fragments = backend.search_by_vector(query_embedding, k)
        if not fragments:
            logger.warning(
                f"{__name__}:query - No fragments returned",
                extra={"backend": backend.name, "documents_count": total},
            )
            return QueryResult(answer=NO_RESULTS_MESSAGE, documents_count=total)

        context = CONTEXT_SEPARATOR.join(fragment.text for fragment in fragments)
        answer = self._generator.generate(question, context, credential)
        logger.info(
            f"{__name__}:query - Answered from {len(fragments)} fragments",
            extra={"backend": backend.name, "context_length": len(context)},
        )
        return QueryResult(answer=answer, documents_count=total, fragments=fragments)

    def search(
        self,
        question: str,
        k: int | None = None,
        credential: str | None = None,
    ) -> list[ScoredFragment]:
        """Retrieval only: top-k fragments for question, no generation."""
        k = self._top_k if k is None else k
        if k < 1:
            raise RetrievalError("k must be at least 1", details={"k": k})
        return self._ensure_backend().search(question, self._provider, k, credential)

    def document_count(self) -> int:
        """Number of fragments in the active backend."""
        return self._ensure_backend().count()

    def save_state(self) -> None:
        """Snapshot the local store; logs and returns on failure or when remote is active."""
        self._ensure_backend()
        if self._state is not BackendState.LOCAL_ACTIVE:
            logger.info(f"{__name__}:save_state - S3 Vectors active, nothing to save")
            return
        try:
            self._local_store.save()
        except PersistenceError as e:
            logger.error(f"{__name__}:save_state - {e}")

    def load_state(self) -> bool:
        """
        Restore the local store from its snapshot.

        Returns:
            bool: True when a snapshot was loaded; False when missing,
            unreadable, or the remote backend is active
        """
        self._ensure_backend()
        if self._state is not BackendState.LOCAL_ACTIVE:
            logger.info(f"{__name__}:load_state - S3 Vectors active, nothing to load")
            return False
        try:
            return self._local_store.load()
        except PersistenceError as e:
            logger.error(f"{__name__}:load_state - {e}")
            return False

    def backend_info(self) -> dict[str, Any]:
        """Active backend and remote collection details for health checks."""
        backend = self._ensure_backend()
        info: dict[str, Any] = {
            "state": self._state.value,
            "backend": backend.name,
            "remote_configured": self._remote_index is not None,
        }
        if self._remote_index is not None:
            info["collection"] = self._remote_index.collection_info()
        return info
