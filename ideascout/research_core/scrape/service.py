from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable, Sequence

import httpx
from loguru import logger

from ideascout.research_core.extract.service import extract_page_text
from ideascout.research_core.models.interfaces import SearchResult
from ideascout.tools import web_utils

Fetcher = Callable[[str, float], Awaitable[str]]
ProgressCallback = Callable[[float], None]


async def fetch_html(url: str, timeout: float) -> str:
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        response = await client.get(url, headers=web_utils.browser_headers())
        return response.text


class ContentFetcher:
    """Sequential page fetcher.

    URLs are fetched one at a time. Each fetch is capped at `timeout` seconds;
    a failed or slow page only loses its own content.
    """

    def __init__(
        self,
        *,
        timeout: float = 5.0,
        max_chars: int = 5000,
        min_chars: int = 200,
        fetcher: Fetcher | None = None,
    ):
        self.timeout = float(timeout)
        self.max_chars = int(max_chars)
        self.min_chars = int(min_chars)
        self._fetcher = fetcher or fetch_html

    async def scrape_content(self, url: str) -> str:
        """Fetch one page and return its cleaned text, or "" on any failure."""
        normalized = web_utils.normalize_url(url)
        started = time.monotonic()
        try:
            raw_html = await asyncio.wait_for(
                self._fetcher(normalized, self.timeout),
                timeout=self.timeout,
            )
            return extract_page_text(raw_html, max_chars=self.max_chars)
        except Exception as exc:
            elapsed_ms = int((time.monotonic() - started) * 1000)
            logger.debug(f"Scrape failed for {normalized} after {elapsed_ms}ms: {exc!r}")
            return ""

    async def scrape_results(
        self,
        results: Sequence[SearchResult],
        on_progress: ProgressCallback | None = None,
    ) -> list[SearchResult]:
        scraped: list[SearchResult] = []
        total = len(results)
        for index, result in enumerate(results):
            content = await self.scrape_content(result.url)
            if len(content) > self.min_chars:
                scraped.append(result.with_content(content))
            if on_progress is not None:
                on_progress((index + 1) / total)
        return scraped
