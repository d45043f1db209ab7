"""
Embedding provider contract and Gemini implementation.

The core depends only on EmbeddingProvider.embed(text, credential). Failures
are retried with tenacity and then surface as EmbeddingError; a neutral vector
is never substituted because it would silently corrupt similarity rankings.

Dependencies: tenacity, navigator.boundary.llm.embeddings_wrapper
System role: Text -> vector adapter for ingestion and query pipelines
"""

import logging
import threading
from abc import ABC, abstractmethod

from tenacity import Retrying, stop_after_attempt, wait_exponential_jitter
from tenacity.wait import wait_base

from navigator.boundary.llm.embeddings_wrapper import FixedDimensionEmbeddings
from navigator.core.exceptions import DimensionMismatchError, EmbeddingError

logger = logging.getLogger(__name__)


class EmbeddingProvider(ABC):
    """Abstract interface for text -> embedding vector conversion."""

    @abstractmethod
    def embed(self, text: str, credential: str | None = None) -> list[float]:
        """
        Convert text into a fixed-length embedding vector.

        Args:
            text: Text to embed
            credential: API key for the embedding service (provider default if None)

        Returns:
            list[float]: Embedding of length `dimension`

        Raises:
            EmbeddingError: When the embedding cannot be produced
        """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Return the embedding dimensionality."""


class GeminiEmbeddingProvider(EmbeddingProvider):
    """
    Gemini embeddings via langchain-google-genai.

    One client is created per credential and reused, since callers may pass
    their own API key on every request.
    """

    def __init__(
        self,
        model: str = "models/gemini-embedding-001",
        dimension: int = 1024,
        default_credential: str | None = None,
        retry_attempts: int = 3,
        wait: wait_base | None = None,
    ) -> None:
        """
        Initialize provider.

        Args:
            model: Google embedding model ID
            dimension: Fixed output dimensionality
            default_credential: API key used when a call passes none
            retry_attempts: Attempts per embed call
            wait: Tenacity wait strategy between attempts
        """
        self._model = model
        self._dimension = dimension
        self._default_credential = default_credential
        self._retry_attempts = retry_attempts
        self._wait = wait or wait_exponential_jitter(initial=1, max=10, jitter=1)
        self._clients: dict[str | None, FixedDimensionEmbeddings] = {}
        self._clients_lock = threading.Lock()

    @property
    def dimension(self) -> int:
        return self._dimension

    def _get_client(self, credential: str | None) -> FixedDimensionEmbeddings:
        key = credential or self._default_credential
        with self._clients_lock:
            client = self._clients.get(key)
            if client is None:
                kwargs = {"google_api_key": key} if key else {}
                client = FixedDimensionEmbeddings(
                    model=self._model,
                    output_dimensionality=self._dimension,
                    **kwargs,
                )
                self._clients[key] = client
            return client

    def embed(self, text: str, credential: str | None = None) -> list[float]:
        retryer = Retrying(
            stop=stop_after_attempt(self._retry_attempts),
            wait=self._wait,
            reraise=True,
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:embed - Retry {retry_state.attempt_number}/{self._retry_attempts} "
                f"after {type(retry_state.outcome.exception()).__name__}"
            ),
        )
        try:
            client = self._get_client(credential)
            vector = retryer(client.embed_query, text)
        except Exception as e:
            logger.error(f"{__name__}:embed - FAILED: {type(e).__name__}: {e}")
            raise EmbeddingError(
                f"Failed to generate embedding: {e}",
                details={"model": self._model, "text_length": len(text)},
            ) from e

        vector = [float(v) for v in vector]
        if len(vector) != self._dimension:
            raise DimensionMismatchError(expected=self._dimension, actual=len(vector))
        return vector
