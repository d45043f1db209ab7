"""Tests for text extraction from source files."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from langchain_core.documents import Document

from navigator.core.document_processing.tasks.parsing_task import ParsingTask
from navigator.core.exceptions import ParsingError


class TestParsingTask:
    """Test ParsingTask for text and PDF inputs."""

    def test_text_file_should_be_read_as_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "photosynthesis.md"
        path.write_text("Plants use sun and water.", encoding="utf-8")

        parsed = ParsingTask().parse(path)

        assert parsed.text == "Plants use sun and water."
        assert parsed.metadata == {"filename": "photosynthesis.md", "pages": 1}

    def test_missing_file_should_raise(self, tmp_path: Path) -> None:
        with pytest.raises(ParsingError, match="File not found"):
            ParsingTask().parse(tmp_path / "missing.txt")

    def test_unsupported_suffix_should_raise(self, tmp_path: Path) -> None:
        path = tmp_path / "slides.pptx"
        path.write_bytes(b"binary")

        with pytest.raises(ParsingError) as exc_info:
            ParsingTask().parse(path)

        assert exc_info.value.details["file_type"] == ".pptx"

    def test_pdf_pages_should_be_joined_with_metadata(self, tmp_path: Path) -> None:
        # Arrange
        path = tmp_path / "upload.pdf"
        path.write_bytes(b"%PDF-1.4")
        loader = MagicMock()
        loader.load.return_value = [
            Document(page_content="Page one", metadata={"title": "Rocks", "page": 0}),
            Document(page_content="Page two", metadata={"page": 1}),
        ]

        # Act
        with patch(
            "navigator.core.document_processing.tasks.parsing_task.PyPDFLoader",
            return_value=loader,
        ):
            parsed = ParsingTask().parse(path, filename="rocks.pdf")

        # Assert
        assert parsed.text == "Page one\nPage two"
        assert parsed.metadata == {"filename": "rocks.pdf", "pages": 2, "title": "Rocks"}

    def test_pdf_loader_failure_should_raise_parsing_error(self, tmp_path: Path) -> None:
        path = tmp_path / "broken.pdf"
        path.write_bytes(b"not a pdf")

        with patch(
            "navigator.core.document_processing.tasks.parsing_task.PyPDFLoader",
            side_effect=ValueError("bad header"),
        ):
            with pytest.raises(ParsingError, match="Failed to parse PDF"):
                ParsingTask().parse(path)
