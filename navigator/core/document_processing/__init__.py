"""
Document processing module.

Text extraction and chunking used ahead of embedding and storage.
"""

from navigator.core.document_processing.tasks import (
    ChunkingTask,
    ParsingTask,
    split_by_characters,
)

__all__ = ["ChunkingTask", "ParsingTask", "split_by_characters"]
