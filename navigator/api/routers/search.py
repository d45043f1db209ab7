"""
Search API endpoint.

Routes: POST /search

Dependencies: navigator.application.retrieval_service
System role: Retrieval-only HTTP API
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from navigator.api.deps import get_retrieval_service
from navigator.api.routers.errors import to_http_exception
from navigator.application.retrieval_service import RetrievalService
from navigator.core.exceptions import NavigatorException
from navigator.models.rag import SearchRequest, SearchResult

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])


@router.post("", response_model=list[SearchResult])
async def search(
    request: SearchRequest,
    service: RetrievalService = Depends(get_retrieval_service),
) -> list[SearchResult]:
    """
    Rank fragments against a query without generating an answer.

    Raises:
        HTTPException(502): Embedding service failure
    """
    try:
        fragments = await run_in_threadpool(
            service.search, request.query, request.top_k, request.api_key
        )
    except NavigatorException as e:
        raise to_http_exception(e)

    logger.info(
        f"{__name__}:search - Returned {len(fragments)} results",
        extra={"backend": service.active_backend.name, "top_k": request.top_k},
    )
    return [
        SearchResult(text=f.text, score=f.score, metadata=f.metadata) for f in fragments
    ]
