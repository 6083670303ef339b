"""
EduPro Backend: Web Search Service
=====================================

What:  Best-effort snippet lookup against public search endpoints.
Why:   Gives note and career generation a little fresh context from the web
       without an API key.
How:   Issues one GET per call through the shared httpx client, bounded by
       asyncio.wait_for(), and turns the JSON answer into an indexed text block.
Who:   Built once in the lifespan; called by the /api/search routes and /health.

Providers:
    - DuckDuckGo Instant Answer API (web_search): abstract + related topics
    - Wikipedia full-text search (search_wikipedia): independent fallback,
      the caller decides which one to use; nothing is chained automatically

Never-raise contract:
    Public methods always return a SnippetResult. Timeouts and provider errors
    are raised internally as SearchTimeoutError / SearchProviderError and
    converted at the method boundary; anything unexpected is converted too.

Output format:
    [1] First snippet text

    [2] Second snippet text
"""

import asyncio
import logging
import re
import time
from typing import Any, Dict, List

import httpx

from edupro.exceptions import SearchProviderError, SearchTimeoutError
from edupro.schemas.search import SearchHealth, SnippetResult

logger = logging.getLogger(__name__)

DUCKDUCKGO_API_URL = "https://api.duckduckgo.com/"
WIKIPEDIA_API_URL = "https://en.wikipedia.org/w/api.php"

# Snippets of this length or shorter are dropped as near-empty fragments
MIN_SNIPPET_LENGTH = 20

WIKIPEDIA_MAX_RESULTS = 3

_HTML_TAG_RE = re.compile(r"<[^>]*>")


def format_snippets(snippets: List[str]) -> str:
    """Number snippets from 1 and separate them with a blank line."""
    return "\n\n".join(f"[{idx}] {snippet}" for idx, snippet in enumerate(snippets, start=1))


def strip_markup(text: str) -> str:
    """Remove HTML tags such as Wikipedia's <span class="searchmatch">."""
    return _HTML_TAG_RE.sub("", text)


class SearchService:
    """
    Client for the public instant-answer and encyclopedia search endpoints.

    Args:
        http_client: Shared AsyncClient (owned by the app lifespan)
        timeout: Per-call deadline in seconds (default 10)
        user_agent: Sent with every request; Wikipedia rejects anonymous agents
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        timeout: float = 10.0,
        user_agent: str = "EduProAI/1.0",
    ):
        self.http_client = http_client
        self.timeout = timeout
        self.user_agent = user_agent

    async def _get_json(self, url: str, params: Dict[str, Any], provider: str) -> Any:
        """
        GET `url` under the deadline and decode the JSON body.

        Raises:
            SearchTimeoutError: Deadline elapsed; the request was cancelled.
            SearchProviderError: Non-success HTTP status.
            httpx.HTTPError / ValueError: Transport failure or malformed JSON.
        """
        try:
            response = await asyncio.wait_for(
                self.http_client.get(
                    url,
                    params=params,
                    headers={"User-Agent": self.user_agent},
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            raise SearchTimeoutError(context={"provider": provider, "timeout_seconds": self.timeout})

        if not response.is_success:
            raise SearchProviderError(
                message=f"Search API returned {response.status_code}",
                status_code=response.status_code,
                context={"provider": provider},
            )

        return response.json()

    async def web_search(self, query: str, max_results: int = 3) -> SnippetResult:
        """
        Search DuckDuckGo and return up to `max_results` indexed snippets.

        Candidate order:
            1. The top-level Abstract, if present
            2. Text of the first `max_results` RelatedTopics entries that have one

        Candidates of MIN_SNIPPET_LENGTH characters or fewer are dropped before
        truncating to `max_results`. If nothing survives, the result is the
        empty success (ok=True, snippets=None), not a failure.
        """
        start_time = time.perf_counter()
        logger.info("Searching for: %r", query)

        try:
            data = await self._get_json(
                DUCKDUCKGO_API_URL,
                params={
                    "q": query,
                    "format": "json",
                    "no_html": 1,
                    "skip_disambig": 1,
                },
                provider="duckduckgo",
            )

            candidates: List[str] = []

            abstract = data.get("Abstract")
            if abstract:
                candidates.append(abstract)

            related = data.get("RelatedTopics")
            if isinstance(related, list):
                for topic in related[:max_results]:
                    # Grouped topics ({"Name": ..., "Topics": [...]}) have no Text
                    text = topic.get("Text") if isinstance(topic, dict) else None
                    if text:
                        candidates.append(text)

            snippets = [s for s in candidates if len(s) > MIN_SNIPPET_LENGTH][:max_results]

            logger.info(
                "Search completed in %.2fs, found %d snippets",
                time.perf_counter() - start_time,
                len(snippets),
            )

            if not snippets:
                return SnippetResult.empty()
            return SnippetResult.found(format_snippets(snippets))

        except SearchTimeoutError as e:
            logger.error("Search timeout after %.1fs", self.timeout)
            return SnippetResult.failed(e.message)
        except SearchProviderError as e:
            logger.error("Search error: %s", e.message)
            return SnippetResult.failed(e.message)
        except Exception as e:
            logger.error("Search error: %s", str(e))
            return SnippetResult.failed(str(e) or type(e).__name__)

    async def search_wikipedia(self, query: str) -> SnippetResult:
        """
        Search Wikipedia and return up to three `[i] Title: snippet` entries.

        The snippet text comes back with highlight markup, which is stripped.
        Hits whose entry is MIN_SNIPPET_LENGTH characters or shorter are dropped.
        Same deadline and never-raise contract as web_search().
        """
        try:
            data = await self._get_json(
                WIKIPEDIA_API_URL,
                params={
                    "action": "query",
                    "list": "search",
                    "srsearch": query,
                    "format": "json",
                    "srlimit": WIKIPEDIA_MAX_RESULTS,
                },
                provider="wikipedia",
            )

            hits = (data.get("query") or {}).get("search") or []

            entries = []
            for hit in hits[:WIKIPEDIA_MAX_RESULTS]:
                snippet = strip_markup(hit.get("snippet") or "").strip()
                entry = f"{hit.get('title', '')}: {snippet}"
                # Same near-empty cutoff as web_search
                if snippet and len(entry) > MIN_SNIPPET_LENGTH:
                    entries.append(entry)

            if not entries:
                return SnippetResult.empty()
            return SnippetResult.found(format_snippets(entries))

        except SearchTimeoutError as e:
            logger.error("Wikipedia search timeout after %.1fs", self.timeout)
            return SnippetResult.failed(e.message)
        except SearchProviderError as e:
            logger.error("Wikipedia search error: HTTP %s", e.status_code)
            return SnippetResult.failed("Wikipedia API failed")
        except Exception as e:
            logger.error("Wikipedia search error: %s", str(e))
            return SnippetResult.failed(str(e) or type(e).__name__)

    async def check_search_health(self) -> SearchHealth:
        """
        Live probe of the search dependency.

        Makes a real request (web_search("test", 1)) every time it is called.
        """
        try:
            result = await self.web_search("test", 1)
            return SearchHealth(ok=result.ok, error=result.error)
        except Exception as e:
            return SearchHealth(ok=False, error=str(e))
