from __future__ import annotations

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from ideascout.config import settings
from ideascout.research_core.models.interfaces import SearchResult
from ideascout.tools import web_utils

REDDIT_SEARCH_URL = "https://old.reddit.com/search"


def _parse_results(html: str, max_results: int) -> list[SearchResult]:
    soup = BeautifulSoup(html, "html.parser")
    results: list[SearchResult] = []
    for anchor in soup.select("a.search-title"):
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
            REDDIT_SEARCH_URL,
            params={"q": query, "type": "link"},
            headers=web_utils.browser_headers(),
        )
        response.raise_for_status()
        return response.text


async def search(query: str, *, max_results: int = 30) -> list[SearchResult]:
    """Discussion search via the old.reddit.com search page."""
    try:
        html = await _fetch_page(query)
        return _parse_results(html, max_results)
    except Exception as exc:
        logger.warning(f"Reddit search failed for {query!r}: {exc}")
        return []
