"""
Dependency injection container.

Lazily builds and caches the process-wide services for FastAPI dependencies.

Dependencies: navigator.configs, navigator.application, navigator.boundary
System role: DI container for service injection
"""

from navigator.application.knowledge_base import KnowledgeBaseLoader
from navigator.application.retrieval_service import RetrievalService
from navigator.boundary.llm.answer_generator import AnswerGenerator
from navigator.boundary.llm.embedding_provider import EmbeddingProvider
from navigator.configs import Settings, get_settings
from navigator.core.document_processing.tasks.parsing_task import ParsingTask


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings
        self._embedding_provider: EmbeddingProvider | None = None
        self._answer_generator: AnswerGenerator | None = None
        self._retrieval_service: RetrievalService | None = None
        self._parser: ParsingTask | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def embedding_provider(self) -> EmbeddingProvider:
        """Get cached Gemini embedding provider."""
        if self._embedding_provider is None:
            from navigator.boundary.llm.embedding_provider import GeminiEmbeddingProvider

            llm = self.settings.llm
            self._embedding_provider = GeminiEmbeddingProvider(
                model=llm.embedding_model,
                dimension=self.settings.vector_store.embedding_dimension,
                default_credential=llm.google_api_key,
                retry_attempts=llm.embedding_retry_attempts,
            )
        return self._embedding_provider

    @property
    def answer_generator(self) -> AnswerGenerator:
        """Get cached Gemini answer generator."""
        if self._answer_generator is None:
            from navigator.boundary.llm.answer_generator import GeminiAnswerGenerator

            llm = self.settings.llm
            self._answer_generator = GeminiAnswerGenerator(
                model_id=llm.chat_model,
                temperature=llm.temperature,
                max_output_tokens=llm.max_output_tokens,
                default_credential=llm.google_api_key,
            )
        return self._answer_generator

    @property
    def retrieval_service(self) -> RetrievalService:
        """Get cached retrieval service with both backends."""
        if self._retrieval_service is None:
            from navigator.boundary.vdb.vector_store_factory import get_local_store, get_remote_index

            self._retrieval_service = RetrievalService(
                embedding_provider=self.embedding_provider,
                answer_generator=self.answer_generator,
                local_store=get_local_store(self.settings),
                remote_index=get_remote_index(self.settings),
                top_k=self.settings.rag.top_k,
            )
        return self._retrieval_service

    @property
    def parser(self) -> ParsingTask:
        if self._parser is None:
            self._parser = ParsingTask()
        return self._parser

    def knowledge_base_loader(self) -> KnowledgeBaseLoader:
        """Build a loader bound to the cached retrieval service."""
        return KnowledgeBaseLoader(
            retrieval_service=self.retrieval_service,
            knowledge_base_path=self.settings.rag.knowledge_base_path,
            credential=self.settings.llm.google_api_key,
            parser=self.parser,
        )

    def clear(self) -> None:
        """Clear all cached instances."""
        self._embedding_provider = None
        self._answer_generator = None
        self._retrieval_service = None
        self._parser = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_retrieval_service() -> RetrievalService:
    """
    Get the process-wide retrieval service.

    Returns:
        RetrievalService: Coordinator with its backend selected on first use
    """
    return get_service_cache().retrieval_service


def get_parser() -> ParsingTask:
    return get_service_cache().parser
