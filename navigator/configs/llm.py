"""
Language model configuration settings.

Settings for Gemini embeddings and chat generation.

Dependencies: pydantic_settings
System role: Model configuration for embedding and generation adapters
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class LLMSettings(BaseSettings):
    """Embedding and chat model configuration."""

    google_api_key: str | None = Field(
        default=None,
        description="Server-side API key used for uploads and knowledge base ingestion",
    )
    embedding_model: str = Field(
        default="models/gemini-embedding-001",
        description="Google Gemini embedding model ID",
    )
    chat_model: str = Field(default="gemini-2.5-flash", description="Chat model for answers")
    temperature: float = Field(default=0.0, description="Chat model temperature")
    max_output_tokens: int = Field(default=1024, description="Maximum answer length in tokens")
    embedding_retry_attempts: int = Field(
        default=3,
        description="Attempts per embedding call before failing the ingestion",
        ge=1,
    )

    class Config:
        """Pydantic config for environment variable loading."""

        env_prefix = "LLM_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"
