from __future__ import annotations

import feedparser
import httpx
from bs4 import BeautifulSoup
from loguru import logger

from ideascout.config import settings
from ideascout.research_core.models.interfaces import SearchResult
from ideascout.tools import web_utils


def _plain_text(summary: str) -> str:
    if not summary:
        return ""
    text = BeautifulSoup(summary, "html.parser").get_text()
    return web_utils.clean_content(text, max_length=len(text))


def _matching_items(feed_text: str, query: str) -> list[SearchResult]:
    # Only titles are matched; descriptions are intentionally not searched.
    needle = query.lower()
    parsed = feedparser.parse(feed_text)
    results: list[SearchResult] = []
    for entry in parsed.entries:
        title = entry.get("title") or ""
        if needle not in title.lower():
            continue
        results.append(
            SearchResult(
                url=web_utils.normalize_url(entry.get("link") or ""),
                title=title,
                snippet=_plain_text(entry.get("summary") or ""),
            )
        )
    return results


async def _fetch_feed(client: httpx.AsyncClient, feed_url: str) -> str:
    response = await client.get(feed_url, headers=web_utils.browser_headers())
    response.raise_for_status()
    return response.text


async def search(query: str, *, feeds: list[str] | None = None) -> list[SearchResult]:
    """Filter a fixed set of news feeds by title. There is no result limit."""
    feed_urls = feeds if feeds is not None else settings.rss_feed_list
    results: list[SearchResult] = []
    try:
        async with httpx.AsyncClient(
            timeout=settings.search_timeout_seconds,
            follow_redirects=True,
        ) as client:
            for feed_url in feed_urls:
                try:
                    feed_text = await _fetch_feed(client, feed_url)
                    results.extend(_matching_items(feed_text, query))
                except Exception as exc:
                    logger.warning(f"Failed to read feed {feed_url}: {exc}")
    except Exception as exc:
        logger.warning(f"RSS news search failed for {query!r}: {exc}")
    return results
