from __future__ import annotations

from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from ideascout.config import settings
from ideascout.research_core.models.interfaces import SearchResult
from ideascout.tools import web_utils

WIKIPEDIA_API_URL = "https://en.wikipedia.org/w/api.php"
WIKIPEDIA_ARTICLE_URL = "https://en.wikipedia.org/wiki/"


def _article_url(title: str) -> str:
    return web_utils.normalize_url(WIKIPEDIA_ARTICLE_URL + quote(title, safe=""))


def _parse_results(payload: dict[str, Any]) -> list[SearchResult]:
    items = (payload.get("query") or {}).get("search") or []
    results: list[SearchResult] = []
    for item in items:
        title = item.get("title") or ""
        if not title:
            continue
        results.append(
            SearchResult(
                url=_article_url(title),
                title=title,
                snippet=item.get("snippet") or "",
            )
        )
    return results


async def search(query: str, *, max_results: int = 10) -> list[SearchResult]:
    """Encyclopedia search via the MediaWiki JSON API."""
    params = {
        "action": "query",
        "list": "search",
        "srsearch": query,
        "format": "json",
        "srlimit": max_results,
    }
    try:
        async with httpx.AsyncClient(
            timeout=settings.search_timeout_seconds,
            follow_redirects=True,
        ) as client:
            response = await client.get(
                WIKIPEDIA_API_URL,
                params=params,
                headers=web_utils.browser_headers(),
            )
            response.raise_for_status()
            payload = response.json()
        return _parse_results(payload)
    except Exception as exc:
        logger.warning(f"Wikipedia search failed for {query!r}: {exc}")
        return []
