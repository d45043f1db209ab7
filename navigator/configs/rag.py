"""
RAG pipeline configuration settings.

Chunking parameters, retrieval depth, local snapshot file and knowledge base location.

Dependencies: pydantic, pydantic_settings
System role: Configuration for ingestion and query pipelines
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RAGSettings(BaseSettings):
    """Settings for the ingestion and query pipelines."""

    model_config = SettingsConfigDict(
        env_prefix="RAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=1000,
        description="Maximum chunk size in characters (soft cap)",
        gt=0,
    )
    chunk_overlap: int = Field(
        default=200,
        description="Characters carried over from the end of the previous chunk",
        ge=0,
    )
    separator: str = Field(
        default="\n",
        description="Separator used to split text into atomic units",
    )

    top_k: int = Field(default=3, description="Number of fragments used as answer context", ge=1)

    index_file: str = Field(
        default="/tmp/rag_index.json",
        description="Path of the local vector store snapshot",
    )
    knowledge_base_path: str = Field(
        default="knowledge",
        description="Directory scanned for documents when no snapshot exists",
    )
