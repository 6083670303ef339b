"""
EduPro Backend: Web Search Route Handlers
============================================

What:  Exposes SearchService over HTTP.
Why:   The frontend uses snippets as extra context when generating notes.
How:   Thin pass-through; the service never raises, so every call answers 200
       with a SnippetResult and the client branches on `ok`.

Not gated by identity: search results are public data and nothing is stored.
"""

from fastapi import APIRouter, Depends, Query

from edupro.dependencies import get_search_service
from edupro.schemas.search import SearchHealth, SnippetResult
from edupro.services.search_service import SearchService

router = APIRouter(prefix="/api/search", tags=["Search"])


@router.get(
    "",
    response_model=SnippetResult,
    summary="Instant-answer web search",
)
async def web_search(
    q: str = Query(min_length=1, max_length=500, description="Search query"),
    max_results: int = Query(default=3, ge=1, le=10, description="Maximum snippets to return"),
    search_service: SearchService = Depends(get_search_service),
) -> SnippetResult:
    return await search_service.web_search(q, max_results)


@router.get(
    "/wikipedia",
    response_model=SnippetResult,
    summary="Wikipedia search (fallback provider)",
)
async def wikipedia_search(
    q: str = Query(min_length=1, max_length=500, description="Search query"),
    search_service: SearchService = Depends(get_search_service),
) -> SnippetResult:
    return await search_service.search_wikipedia(q)


@router.get(
    "/health",
    response_model=SearchHealth,
    summary="Live probe of the web search provider",
)
async def search_health(
    search_service: SearchService = Depends(get_search_service),
) -> SearchHealth:
    return await search_service.check_search_health()
