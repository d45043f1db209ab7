"""Tests for the Gemini embedding provider with the LangChain client mocked."""

from unittest.mock import MagicMock, patch

import pytest
from tenacity import wait_none

from navigator.boundary.llm.embedding_provider import GeminiEmbeddingProvider
from navigator.core.exceptions import DimensionMismatchError, EmbeddingError

EMBEDDINGS_PATH = "navigator.boundary.llm.embedding_provider.FixedDimensionEmbeddings"


@pytest.fixture
def mock_embeddings():
    with patch(EMBEDDINGS_PATH) as mock_cls:
        client = MagicMock()
        client.embed_query.return_value = [0.5, 0.25, 0.125]
        mock_cls.return_value = client
        yield mock_cls


class TestGeminiEmbeddingProvider:
    """Test embedding, retry and failure mapping."""

    def test_embed_should_return_float_vector(self, mock_embeddings) -> None:
        provider = GeminiEmbeddingProvider(dimension=3, wait=wait_none())

        vector = provider.embed("cats are mammals")

        assert vector == [0.5, 0.25, 0.125]
        mock_embeddings.assert_called_once_with(
            model="models/gemini-embedding-001",
            output_dimensionality=3,
        )

    def test_client_should_be_cached_per_credential(self, mock_embeddings) -> None:
        provider = GeminiEmbeddingProvider(dimension=3, default_credential="server-key", wait=wait_none())

        provider.embed("a")
        provider.embed("b")
        provider.embed("c", credential="user-key")

        assert mock_embeddings.call_count == 2
        keys = [c.kwargs["google_api_key"] for c in mock_embeddings.call_args_list]
        assert keys == ["server-key", "user-key"]

    def test_transient_failure_should_be_retried(self, mock_embeddings) -> None:
        client = mock_embeddings.return_value
        client.embed_query.side_effect = [ConnectionError("reset"), [1.0, 0.0, 0.0]]
        provider = GeminiEmbeddingProvider(dimension=3, retry_attempts=3, wait=wait_none())

        assert provider.embed("cats") == [1.0, 0.0, 0.0]
        assert client.embed_query.call_count == 2

    def test_exhausted_retries_should_raise_embedding_error(self, mock_embeddings) -> None:
        client = mock_embeddings.return_value
        client.embed_query.side_effect = ConnectionError("down")
        provider = GeminiEmbeddingProvider(dimension=3, retry_attempts=2, wait=wait_none())

        with pytest.raises(EmbeddingError) as exc_info:
            provider.embed("cats")

        assert client.embed_query.call_count == 2
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_wrong_length_should_raise_dimension_mismatch(self, mock_embeddings) -> None:
        provider = GeminiEmbeddingProvider(dimension=4, wait=wait_none())

        with pytest.raises(DimensionMismatchError):
            provider.embed("cats")

    def test_dimension_property_should_reflect_config(self) -> None:
        assert GeminiEmbeddingProvider(dimension=768).dimension == 768
