"""
Knowledge base bootstrap.

Restores the saved local snapshot or, when there is none, ingests every
document found under the knowledge base directory.

Expected layout: grades/<grade>/<subject>/<file>. Files outside that layout
are still ingested with grade and subject set to "unknown".

Dependencies: navigator.application.retrieval_service, navigator.core.document_processing
System role: Startup corpus loading
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from navigator.application.retrieval_service import RetrievalService
from navigator.core.document_processing.tasks.parsing_task import SUPPORTED_SUFFIXES, ParsingTask
from navigator.core.exceptions import NavigatorException
from navigator.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class KnowledgeBaseReport(BaseModel):
    """Outcome of a bootstrap run."""

    files_found: int = Field(default=0, description="Supported files discovered")
    files_processed: int = Field(default=0, description="Files ingested successfully")
    chunks_added: int = Field(default=0, description="Fragments added across all files")
    loaded_from_snapshot: bool = Field(default=False, description="State restored from snapshot")


def metadata_from_path(relative_path: str, filename: str) -> dict[str, Any]:
    """Derive filename, path, grade and subject from a path relative to the knowledge base."""
    metadata: dict[str, Any] = {"filename": filename, "path": relative_path}
    parts = relative_path.replace("\\", "/").split("/")
    if len(parts) >= 3 and parts[0] == "grades":
        metadata["grade"] = parts[1]
        metadata["subject"] = parts[2]
    else:
        metadata["grade"] = "unknown"
        metadata["subject"] = "unknown"
    return metadata


class KnowledgeBaseLoader:
    """Loads the startup corpus into a retrieval service."""

    def __init__(
        self,
        retrieval_service: RetrievalService,
        knowledge_base_path: str | Path = "knowledge",
        credential: str | None = None,
        parser: ParsingTask | None = None,
    ) -> None:
        self._service = retrieval_service
        self._root = Path(knowledge_base_path)
        self._credential = credential
        self._parser = parser or ParsingTask()

    def initialize(self) -> KnowledgeBaseReport:
        """
        Restore the snapshot, or scan and ingest the knowledge base.

        Returns:
            KnowledgeBaseReport: Files found/processed and chunks added
        """
        if self._service.load_state():
            logger.info(
                f"{__name__}:initialize - RAG system initialized with "
                f"{self._service.document_count()} document chunks from saved state"
            )
            return KnowledgeBaseReport(loaded_from_snapshot=True)

        logger.info(f"{__name__}:initialize - No saved RAG state found. Loading from knowledge base")
        return self.load_knowledge_base()

    def find_files(self) -> list[Path]:
        """Supported files under the knowledge base, in sorted order."""
        return sorted(
            path for path in self._root.rglob("*")
            if path.is_file() and path.suffix.lower() in SUPPORTED_SUFFIXES
        )

    def load_knowledge_base(self) -> KnowledgeBaseReport:
        """Ingest every supported file; per-file failures are logged and skipped."""
        report = KnowledgeBaseReport()
        if not self._root.exists():
            logger.warning(
                f"{__name__}:load_knowledge_base - Knowledge base path not found: {self._root}. "
                "RAG system started empty."
            )
            return report

        logger.info(f"{__name__}:load_knowledge_base - Scanning knowledge base at {self._root.resolve()}")
        files = self.find_files()
        report.files_found = len(files)

        for path in files:
            relative_path = path.relative_to(self._root).as_posix()
            try:
                parsed = self._parser.parse(path)
                metadata = metadata_from_path(relative_path, path.name)
                metadata["pages"] = parsed.metadata.get("pages", 1)
                metadata["source"] = "knowledge_base"
                metadata["loaded_at"] = datetime.now(timezone.utc).isoformat()

                added = self._service.add_document(parsed.text, metadata, self._credential)
            except NavigatorException as e:
                log_exception_with_context(
                    logger,
                    f"{__name__}:load_knowledge_base - Failed to process {path.name}",
                    e,
                    path=relative_path,
                )
                continue

            report.files_processed += 1
            report.chunks_added += added
            logger.info(
                f"{__name__}:load_knowledge_base - Loaded: {path.name} ({added} chunks) - "
                f"Grade {metadata['grade']}, Subject: {metadata['subject']}"
            )

        if report.files_processed > 0:
            self._service.save_state()
            logger.info(
                f"{__name__}:load_knowledge_base - Knowledge base loaded: "
                f"{report.files_processed} of {report.files_found} files processed, "
                f"{report.chunks_added} total chunks"
            )
        else:
            logger.warning(f"{__name__}:load_knowledge_base - No documents loaded from {self._root}")
        return report
