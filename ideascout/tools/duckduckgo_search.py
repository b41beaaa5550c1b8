from __future__ import annotations

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from ideascout.config import settings
from ideascout.research_core.models.interfaces import SearchResult
from ideascout.tools import web_utils

DUCKDUCKGO_HTML_URL = "https://duckduckgo.com/html/"


def _parse_results(html: str, max_results: int) -> list[SearchResult]:
    soup = BeautifulSoup(html, "html.parser")
    results: list[SearchResult] = []
    for anchor in soup.select("a.result__a"):
        if len(results) >= max_results:
            break
        results.append(
            SearchResult(
                url=web_utils.normalize_url(anchor.get("href") or ""),
                title=anchor.get_text(),
                snippet="",
            )
        )
    return results


async def _fetch_page(query: str) -> str:
    async with httpx.AsyncClient(
        timeout=settings.search_timeout_seconds,
        follow_redirects=True,
    ) as client:
        response = await client.get(
            DUCKDUCKGO_HTML_URL,
            params={"q": query},
            headers=web_utils.browser_headers(),
        )
        response.raise_for_status()
        return response.text


async def search(query: str, *, max_results: int = 50) -> list[SearchResult]:
    """General web search via the DuckDuckGo HTML results page."""
    try:
        html = await _fetch_page(query)
        return _parse_results(html, max_results)
    except Exception as exc:
        logger.warning(f"DuckDuckGo search failed for {query!r}: {exc}")
        return []
