"""
Vector backend factory.

Builds the local store and, when a bucket is configured, the S3 Vectors
index. Choosing between them is the retrieval service's job.

Dependencies: navigator.boundary.vdb, navigator.configs
System role: Vector backend instantiation
"""

import logging

from navigator.boundary.vdb.local_vector_store import LocalVectorStore
from navigator.boundary.vdb.s3_vector_index import S3VectorIndex
from navigator.configs import Settings, get_settings
from navigator.core.document_processing.tasks.chunking_task import ChunkingTask

logger = logging.getLogger(__name__)


def build_chunker(settings: Settings | None = None) -> ChunkingTask:
    """Chunking task configured from RAG settings."""
    settings = settings or get_settings()
    return ChunkingTask(
        chunk_size=settings.rag.chunk_size,
        chunk_overlap=settings.rag.chunk_overlap,
        separator=settings.rag.separator,
    )


def get_local_store(settings: Settings | None = None) -> LocalVectorStore:
    """
    Create the in-process vector store.

    Returns:
        LocalVectorStore: Empty store bound to the configured snapshot file
    """
    settings = settings or get_settings()
    logger.info(f"{__name__}:get_local_store - Creating local vector store ({settings.rag.index_file})")
    return LocalVectorStore(
        index_file=settings.rag.index_file,
        chunker=build_chunker(settings),
        dimension=settings.vector_store.embedding_dimension,
    )


def get_remote_index(settings: Settings | None = None) -> S3VectorIndex | None:
    """
    Create the S3 Vectors index when a bucket is configured.

    Returns:
        S3VectorIndex | None: Remote index (possibly unavailable), or None if no bucket is set
    """
    settings = settings or get_settings()
    config = settings.vector_store
    if not config.vectors_bucket:
        logger.info(f"{__name__}:get_remote_index - No S3 Vectors bucket configured, remote backend disabled")
        return None

    logger.info(f"{__name__}:get_remote_index - Creating S3 Vectors index (bucket={config.vectors_bucket})")
    return S3VectorIndex(
        vectors_bucket=config.vectors_bucket,
        index_name=config.index_name,
        region=config.aws_region,
        dimension=config.embedding_dimension,
        chunker=build_chunker(settings),
        connect_timeout=config.connect_timeout,
        read_timeout=config.read_timeout,
        max_attempts=config.max_attempts,
    )
