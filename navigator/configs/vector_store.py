"""
Vector store configuration settings.

Manages S3 Vectors configuration for the remote backend and the vector
dimensionality shared by both backends.

Dependencies: pydantic, pydantic_settings
System role: Vector database configuration for RAG retrieval
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class VectorStoreSettings(BaseSettings):
    """Vector store configuration (in-process store, or S3 Vectors when reachable)."""

    vectors_bucket: str | None = Field(
        default=None,
        description="S3 Vectors bucket name; remote backend is never attempted when unset",
    )
    index_name: str = Field(
        default="science-curriculum-g3-g6",
        description="S3 Vectors index (collection) name",
    )
    aws_region: str = Field(default="ap-southeast-2", description="AWS region for S3 Vectors")

    embedding_dimension: int = Field(
        default=1024,
        description="Embedding vector dimension shared by both backends",
        gt=0,
    )

    # Client timeouts, a timeout counts as a backend failure
    connect_timeout: int = Field(default=5, description="Connect timeout in seconds")
    read_timeout: int = Field(default=30, description="Read timeout in seconds")
    max_attempts: int = Field(default=3, description="botocore retry attempts per call")

    class Config:
        """Pydantic config."""

        env_prefix = "VECTOR_STORE_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
