"""
In-process vector store with JSON snapshot persistence.

Holds fragments in insertion order and ranks them by exhaustive cosine
similarity scan. Every mutation, scan, save and load runs under one
exclusive lock; embedding calls run outside it.

Snapshot format:
    {"saved_at": iso8601, "document_count": n,
     "documents": [{"text": ..., "embedding": [...], "metadata": {...}}, ...]}

Dependencies: json, threading, pydantic, navigator.core
System role: Embedded vector backend (default when S3 Vectors is unreachable)
"""

import json
import logging
import os
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from navigator.boundary.llm.embedding_provider import EmbeddingProvider
from navigator.boundary.vdb.base import VectorBackend
from navigator.core.document_processing.tasks.chunking_task import ChunkingTask
from navigator.core.exceptions import DimensionMismatchError, PersistenceError
from navigator.core.similarity import cosine_similarity
from navigator.models.document import Fragment, ScoredFragment

logger = logging.getLogger(__name__)


class LocalVectorStore(VectorBackend):
    """
    Append-only fragment store with exhaustive similarity search.

    Fragments of one document are appended in a single critical section, so
    their chunk_index values are contiguous even under concurrent ingestion.
    A document whose embedding fails is not stored at all.
    """

    name = "local"

    def __init__(
        self,
        index_file: str | Path = "/tmp/rag_index.json",
        chunker: ChunkingTask | None = None,
        dimension: int | None = None,
    ) -> None:
        """
        Initialize an empty store.

        Args:
            index_file: Snapshot path used by save() and load()
            chunker: Chunking task (defaults to 1000/200 on newlines)
            dimension: Required embedding length; inferred from the first fragment if None
        """
        self._index_file = Path(index_file)
        self._chunker = chunker or ChunkingTask()
        self._dimension = dimension
        self._fragments: list[Fragment] = []
        self._lock = threading.RLock()

    @property
    def index_file(self) -> Path:
        return self._index_file

    def add_document(
        self,
        text: str,
        metadata: dict[str, Any] | None,
        provider: EmbeddingProvider,
        credential: str | None = None,
    ) -> int:
        """
        Chunk, embed and append a document.

        Args:
            text: Raw document text
            metadata: Caller metadata copied onto every fragment
            provider: Embedding provider (one call per chunk, sequential)
            credential: API key for the embedding provider

        Returns:
            int: Number of fragments added

        Raises:
            EmbeddingError: When any chunk fails to embed (nothing is stored)
            DimensionMismatchError: When an embedding has the wrong length
        """
        chunks = self._chunker.split_text(text)
        logger.info(f"{__name__}:add_document - Adding {len(chunks)} chunks to RAG system")
        if not chunks:
            return 0

        embeddings = [provider.embed(chunk, credential) for chunk in chunks]

        with self._lock:
            expected = self._expected_dimension(embeddings[0])
            for embedding in embeddings:
                if len(embedding) != expected:
                    raise DimensionMismatchError(expected=expected, actual=len(embedding))

            base_index = len(self._fragments)
            for offset, (chunk, embedding) in enumerate(zip(chunks, embeddings)):
                chunk_metadata = dict(metadata or {})
                chunk_metadata["chunk_index"] = base_index + offset
                self._fragments.append(
                    Fragment(text=chunk, embedding=list(embedding), metadata=chunk_metadata)
                )

        return len(chunks)

    def ingest(
        self,
        text: str,
        metadata: dict[str, Any] | None,
        provider: EmbeddingProvider,
        credential: str | None = None,
    ) -> int:
        return self.add_document(text, metadata, provider, credential)

    def _expected_dimension(self, fallback: list[float]) -> int:
        if self._dimension is not None:
            return self._dimension
        if self._fragments:
            return len(self._fragments[0].embedding)
        return len(fallback)

    def query(
        self,
        question: str,
        provider: EmbeddingProvider,
        k: int,
        credential: str | None = None,
    ) -> list[ScoredFragment] | None:
        """
        Embed question and return the top-k fragments.

        Returns:
            list[ScoredFragment] | None: Ranked fragments, or None when the store
            holds no fragments (no embedding call is made in that case)
        """
        if self.count() == 0:
            return None
        return self.search(question, provider, k, credential)

    def search_by_vector(self, query_embedding: list[float], k: int) -> list[ScoredFragment]:
        """
        Rank every stored fragment against query_embedding.

        Ties in similarity keep insertion order.

        Raises:
            DimensionMismatchError: When query_embedding length differs from stored vectors
        """
        if k <= 0:
            return []

        with self._lock:
            scored = [
                (cosine_similarity(query_embedding, fragment.embedding), index, fragment)
                for index, fragment in enumerate(self._fragments)
            ]

        scored.sort(key=lambda item: (-item[0], item[1]))
        return [
            ScoredFragment(text=fragment.text, score=score, metadata=dict(fragment.metadata))
            for score, _, fragment in scored[:k]
        ]

    def count(self) -> int:
        with self._lock:
            return len(self._fragments)

    def get_fragments(self) -> list[Fragment]:
        """Return a copy of the stored fragments in insertion order."""
        with self._lock:
            return [fragment.model_copy(deep=True) for fragment in self._fragments]

    def clear(self) -> None:
        """Clear all fragments."""
        with self._lock:
            self._fragments = []

    def save(self) -> None:
        """
        Write the whole store as one snapshot, replacing any previous one.

        Raises:
            PersistenceError: When the snapshot cannot be written
        """
        with self._lock:
            state = {
                "saved_at": datetime.now(timezone.utc).isoformat(),
                "document_count": len(self._fragments),
                "documents": [fragment.model_dump() for fragment in self._fragments],
            }
            tmp_path = self._index_file.with_name(self._index_file.name + ".tmp")
            try:
                self._index_file.parent.mkdir(parents=True, exist_ok=True)
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump(state, f, ensure_ascii=False)
                os.replace(tmp_path, self._index_file)
            except (OSError, TypeError, ValueError) as e:
                try:
                    tmp_path.unlink(missing_ok=True)
                except OSError:
                    pass
                raise PersistenceError(
                    f"Error saving RAG state: {e}", path=str(self._index_file)
                ) from e

        logger.info(
            f"{__name__}:save - RAG state saved to {self._index_file}",
            extra={"document_count": state["document_count"]},
        )

    def load(self) -> bool:
        """
        Replace the in-memory store with the snapshot on disk.

        A missing snapshot empties the store and returns False.

        Returns:
            bool: True when a snapshot was loaded

        Raises:
            PersistenceError: When the snapshot is unreadable or violates the
                embedding invariants; the in-memory store is left untouched
        """
        with self._lock:
            if not self._index_file.exists():
                self._fragments = []
                logger.info(f"{__name__}:load - No RAG state file found at {self._index_file}")
                return False

            try:
                with open(self._index_file, encoding="utf-8") as f:
                    state = json.load(f)
                fragments = [Fragment.model_validate(doc) for doc in state["documents"]]
            except (OSError, ValueError, KeyError, TypeError, PydanticValidationError) as e:
                raise PersistenceError(
                    f"Error loading RAG state: {e}", path=str(self._index_file)
                ) from e

            self._validate_embeddings(fragments)
            self._fragments = fragments

        logger.info(
            f"{__name__}:load - RAG state loaded from {self._index_file}. "
            f"Documents: {len(fragments)}"
        )
        return True

    def _validate_embeddings(self, fragments: list[Fragment]) -> None:
        expected = self._dimension
        for position, fragment in enumerate(fragments):
            if not fragment.embedding:
                raise PersistenceError(
                    "Snapshot fragment has no embedding",
                    path=str(self._index_file),
                    details={"position": position},
                )
            if expected is None:
                expected = len(fragment.embedding)
            if len(fragment.embedding) != expected:
                raise PersistenceError(
                    "Snapshot embeddings have inconsistent dimensions",
                    path=str(self._index_file),
                    details={"position": position, "expected": expected,
                             "actual": len(fragment.embedding)},
                )
