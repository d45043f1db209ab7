"""
RAG API endpoints.

Routes:
- POST /rag/documents - Ingest raw text
- POST /rag/upload - Ingest uploaded PDF files
- POST /rag/chat - Answer a question from the corpus
- GET /rag/status - Corpus status
- GET /rag/status/{user_id} - Corpus status (single global corpus)

Dependencies: navigator.application.retrieval_service, navigator.core.document_processing
System role: Ingestion and question answering HTTP API
"""

import logging
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.concurrency import run_in_threadpool

from navigator.api.deps import get_parser, get_retrieval_service
from navigator.api.routers.errors import to_http_exception
from navigator.application.retrieval_service import RetrievalService
from navigator.core.document_processing.tasks.parsing_task import ParsingTask
from navigator.core.exceptions import NavigatorException
from navigator.models.rag import (
    AddDocumentRequest,
    AddDocumentResponse,
    ChatRequest,
    RAGResponse,
    RAGStatusResponse,
    UploadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/rag", tags=["rag"])

ALLOWED_EXTENSIONS = {".pdf"}


@router.post("/documents", response_model=AddDocumentResponse)
async def add_document(
    request: AddDocumentRequest,
    service: RetrievalService = Depends(get_retrieval_service),
) -> AddDocumentResponse:
    """
    Ingest raw text and persist the corpus.

    Raises:
        HTTPException(400): Invalid embedding dimension
        HTTPException(502): Embedding service failure
    """
    try:
        added = await run_in_threadpool(
            service.add_document, request.text, request.metadata, request.api_key
        )
    except NavigatorException as e:
        raise to_http_exception(e)

    await run_in_threadpool(service.save_state)
    total = await run_in_threadpool(service.document_count)
    return AddDocumentResponse(chunks_added=added, total_chunks=total)


def _ingest_upload(
    service: RetrievalService,
    parser: ParsingTask,
    filename: str,
    content: bytes,
) -> int:
    with tempfile.TemporaryDirectory(prefix="navigator_") as temp_dir:
        temp_path = Path(temp_dir) / f"upload{Path(filename).suffix.lower()}"
        temp_path.write_bytes(content)
        parsed = parser.parse(temp_path, filename=filename)

    metadata = {
        "filename": filename,
        "pages": parsed.metadata.get("pages", 1),
        "upload_time": datetime.now(timezone.utc).isoformat(),
    }
    return service.add_document(parsed.text, metadata)


@router.post("/upload", response_model=UploadResponse)
async def upload_documents(
    files: list[UploadFile] = File(...),
    service: RetrievalService = Depends(get_retrieval_service),
    parser: ParsingTask = Depends(get_parser),
) -> UploadResponse:
    """
    Upload PDF files into the corpus.

    Empty and non-PDF files are skipped. Ingestion uses the server credential.

    Raises:
        HTTPException(400): Unparseable PDF
        HTTPException(502): Embedding service failure
    """
    files_processed = 0
    chunks_added = 0

    for file in files:
        filename = file.filename or ""
        if Path(filename).suffix.lower() not in ALLOWED_EXTENSIONS:
            logger.info(f"{__name__}:upload_documents - Skipping non-PDF file: {filename}")
            continue

        content = await file.read()
        if not content:
            logger.info(f"{__name__}:upload_documents - Skipping empty file: {filename}")
            continue

        try:
            added = await run_in_threadpool(_ingest_upload, service, parser, filename, content)
        except NavigatorException as e:
            logger.error(f"{__name__}:upload_documents - Failed to process {filename}: {e}")
            raise to_http_exception(e)

        files_processed += 1
        chunks_added += added
        logger.info(f"{__name__}:upload_documents - Processed: {filename} ({added} chunks)")

    await run_in_threadpool(service.save_state)
    total = await run_in_threadpool(service.document_count)
    return UploadResponse(
        files_processed=files_processed,
        chunks_added=chunks_added,
        total_chunks=total,
    )


@router.post("/chat", response_model=RAGResponse)
async def rag_chat(
    request: ChatRequest,
    service: RetrievalService = Depends(get_retrieval_service),
) -> RAGResponse:
    """
    Answer a question from the corpus.

    Raises:
        HTTPException(502): Embedding or generation failure
    """
    logger.info(
        f"{__name__}:rag_chat - Question received",
        extra={"user_id": request.user_id, "message_length": len(request.user_message)},
    )
    try:
        result = await run_in_threadpool(service.query, request.user_message, request.api_key)
    except NavigatorException as e:
        raise to_http_exception(e)

    return RAGResponse(message=result.answer, documents_count=result.documents_count)


@router.get("/status", response_model=RAGStatusResponse)
async def rag_status(
    service: RetrievalService = Depends(get_retrieval_service),
) -> RAGStatusResponse:
    """Report whether the corpus holds any fragments."""
    count = await run_in_threadpool(service.document_count)
    if count > 0:
        return RAGStatusResponse(
            has_index=True,
            documents_count=count,
            status="ready",
            message=f"RAG system ready with {count} document chunks",
        )
    return RAGStatusResponse(
        has_index=False,
        documents_count=0,
        status="empty",
        message="No documents indexed yet. Upload PDFs to get started.",
    )


@router.get("/status/{user_id}", response_model=RAGStatusResponse)
async def rag_status_for_user(
    user_id: str,
    service: RetrievalService = Depends(get_retrieval_service),
) -> RAGStatusResponse:
    """Corpus status; the corpus is global so user_id does not change the result."""
    return await rag_status(service)
