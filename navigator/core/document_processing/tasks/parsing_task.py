"""
Document parsing task using LangChain PyPDFLoader.

Extracts raw text from PDF, plain text and markdown files.

Dependencies: langchain_community.document_loaders
System role: Text extraction ahead of the ingestion pipeline
"""

from pathlib import Path

from langchain_community.document_loaders import PyPDFLoader

from navigator.core.exceptions import ParsingError
from navigator.models.document import ParsedDocument

TEXT_SUFFIXES = {".txt", ".md"}
SUPPORTED_SUFFIXES = TEXT_SUFFIXES | {".pdf"}


class ParsingTask:
    """Parse source files into plain text with provenance metadata."""

    def parse(self, file_path: str | Path, filename: str | None = None) -> ParsedDocument:
        """
        Parse a document into text.

        Args:
            file_path: Path to the document on disk
            filename: Display filename (defaults to the path's name, used for temp uploads)

        Returns:
            ParsedDocument: Extracted text and metadata (filename, pages, title, author)

        Raises:
            ParsingError: When the file is missing, unsupported, or unreadable
        """
        path = Path(file_path)
        name = filename or path.name
        if not path.exists():
            raise ParsingError(f"File not found: {file_path}", document_id=name)

        suffix = Path(name).suffix.lower()
        if suffix not in SUPPORTED_SUFFIXES:
            raise ParsingError(
                f"Unsupported file format: {suffix}. Supported: {sorted(SUPPORTED_SUFFIXES)}",
                document_id=name,
                file_type=suffix,
            )

        if suffix in TEXT_SUFFIXES:
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ParsingError(f"Failed to read text file: {e}", name, suffix) from e
            return ParsedDocument(text=text, metadata={"filename": name, "pages": 1})

        return self._parse_pdf(path, name)

    def _parse_pdf(self, path: Path, name: str) -> ParsedDocument:
        try:
            pages = PyPDFLoader(str(path)).load()
        except Exception as e:
            raise ParsingError(f"Failed to parse PDF: {e}", name, ".pdf") from e

        if not pages:
            raise ParsingError("PDF document contains no extractable text", name, ".pdf")

        metadata: dict = {"filename": name, "pages": len(pages)}
        first = pages[0].metadata or {}
        for key in ("title", "author"):
            value = first.get(key)
            if isinstance(value, str) and value:
                metadata[key] = value

        text = "\n".join(page.page_content for page in pages)
        return ParsedDocument(text=text, metadata=metadata)
