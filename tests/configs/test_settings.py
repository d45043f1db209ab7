"""Tests for environment-driven settings."""

import pytest

from navigator.configs.llm import LLMSettings
from navigator.configs.rag import RAGSettings
from navigator.configs.vector_store import VectorStoreSettings


class TestSettings:
    """Test defaults and env prefixes of each settings class."""

    def test_rag_defaults(self, monkeypatch) -> None:
        monkeypatch.delenv("RAG_CHUNK_SIZE", raising=False)

        settings = RAGSettings(_env_file=None)

        assert settings.chunk_size == 1000
        assert settings.chunk_overlap == 200
        assert settings.separator == "\n"
        assert settings.top_k == 3
        assert settings.index_file == "/tmp/rag_index.json"

    def test_rag_env_prefix(self, monkeypatch) -> None:
        monkeypatch.setenv("RAG_CHUNK_SIZE", "500")
        monkeypatch.setenv("RAG_TOP_K", "5")

        settings = RAGSettings(_env_file=None)

        assert settings.chunk_size == 500
        assert settings.top_k == 5

    def test_vector_store_bucket_should_default_to_unset(self, monkeypatch) -> None:
        monkeypatch.delenv("VECTOR_STORE_VECTORS_BUCKET", raising=False)

        settings = VectorStoreSettings(_env_file=None)

        assert settings.vectors_bucket is None
        assert settings.index_name == "science-curriculum-g3-g6"
        assert settings.embedding_dimension == 1024

    def test_vector_store_env_prefix(self, monkeypatch) -> None:
        monkeypatch.setenv("VECTOR_STORE_VECTORS_BUCKET", "navigator-vectors")
        monkeypatch.setenv("VECTOR_STORE_READ_TIMEOUT", "12")

        settings = VectorStoreSettings(_env_file=None)

        assert settings.vectors_bucket == "navigator-vectors"
        assert settings.read_timeout == 12

    def test_llm_env_prefix(self, monkeypatch) -> None:
        monkeypatch.setenv("LLM_GOOGLE_API_KEY", "server-key")

        assert LLMSettings(_env_file=None).google_api_key == "server-key"

    def test_invalid_chunk_size_should_fail_validation(self, monkeypatch) -> None:
        monkeypatch.setenv("RAG_CHUNK_SIZE", "0")

        with pytest.raises(ValueError):
            RAGSettings(_env_file=None)
