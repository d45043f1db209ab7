"""
Language model boundary layer.

Embedding and answer generation adapters behind narrow interfaces.
"""

from navigator.boundary.llm.embedding_provider import EmbeddingProvider
from navigator.boundary.llm.answer_generator import AnswerGenerator

__all__ = ["EmbeddingProvider", "AnswerGenerator"]
