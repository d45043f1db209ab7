"""
Text chunking task using separator-based greedy splitting.

Splits raw document text into bounded, overlapping fragments. Overlap is taken
from the character tail of the previous chunk, not aligned to separator units.

Dependencies: navigator.core.exceptions
System role: First stage of the ingestion pipeline (chunk -> embed -> store)
"""

from navigator.core.exceptions import ValidationError


class ChunkingTask:
    """Split text into chunks of at most chunk_size characters."""

    def __init__(
        self,
        chunk_size: int = 1000,
        chunk_overlap: int = 200,
        separator: str = "\n",
    ) -> None:
        """
        Initialize chunking task with splitter configuration.

        Args:
            chunk_size: Maximum chunk size in characters (soft cap)
            chunk_overlap: Characters carried over from the end of the previous chunk
            separator: Separator used to split text into atomic units

        Raises:
            ValidationError: When chunk_size, chunk_overlap or separator is invalid
        """
        if chunk_size <= 0:
            raise ValidationError("chunk_size must be positive", field="chunk_size")
        if not 0 <= chunk_overlap < chunk_size:
            raise ValidationError(
                "chunk_overlap must be in [0, chunk_size)",
                field="chunk_overlap",
                details={"chunk_size": chunk_size, "chunk_overlap": chunk_overlap},
            )
        if not separator:
            raise ValidationError("separator cannot be empty", field="separator")

        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap
        self._separator = separator

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def chunk_overlap(self) -> int:
        return self._chunk_overlap

    def split_text(self, text: str | None) -> list[str]:
        """
        Split text into chunks with overlap.

        A single unit longer than chunk_size is kept whole, so chunk_size is a
        soft cap. The carried-over tail is shortened when keeping all of it
        would push the next chunk past chunk_size.

        Args:
            text: Raw document text

        Returns:
            list[str]: Trimmed, non-empty chunks in document order
        """
        if not text:
            return []

        chunks: list[str] = []
        buffer = ""
        separator = self._separator

        for unit in text.split(separator):
            if buffer and len(buffer) + len(unit) + len(separator) > self._chunk_size:
                self._flush(buffer, chunks)
                room = self._chunk_size - len(unit) - len(separator)
                buffer = self._tail(buffer, min(self._chunk_overlap, room))

            if buffer:
                buffer += separator
            buffer += unit

        if buffer:
            self._flush(buffer, chunks)

        return chunks

    @staticmethod
    def _flush(buffer: str, chunks: list[str]) -> None:
        """Append the trimmed buffer unless it is only whitespace."""
        chunk = buffer.strip()
        if chunk:
            chunks.append(chunk)

    @staticmethod
    def _tail(text: str, length: int) -> str:
        """Get overlap text from the end of the flushed chunk."""
        if length <= 0:
            return ""
        if len(text) <= length:
            return text
        return text[len(text) - length:]


def split_by_characters(text: str | None, chunk_size: int) -> list[str]:
    """
    Simple fixed-width character splitting (fallback).

    Args:
        text: Raw text
        chunk_size: Width of every chunk except possibly the last

    Returns:
        list[str]: Consecutive slices of text
    """
    if chunk_size <= 0:
        raise ValidationError("chunk_size must be positive", field="chunk_size")
    if not text:
        return []
    return [text[i:i + chunk_size] for i in range(0, len(text), chunk_size)]
