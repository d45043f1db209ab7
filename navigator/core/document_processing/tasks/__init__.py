"""Document processing tasks."""

from .chunking_task import ChunkingTask, split_by_characters
from .parsing_task import ParsingTask

__all__ = ["ChunkingTask", "ParsingTask", "split_by_characters"]
