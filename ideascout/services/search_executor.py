from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from loguru import logger

from ideascout.config import settings
from ideascout.research_core.aggregate.service import aggregate_results
from ideascout.research_core.models.interfaces import SearchResult, SourceName
from ideascout.tools import duckduckgo_search, reddit_search, rss_news, wikipedia_search

SourceSearch = Callable[[str], Awaitable[list[SearchResult]]]


@dataclass(slots=True)
class SourceSearchResult:
    source: SourceName
    results: list[SearchResult] = field(default_factory=list)
    error: str | None = None


def default_sources() -> list[tuple[SourceName, SourceSearch]]:
    """Connectors in precedence order; earlier sources win URL collisions."""
    return [
        (
            "duckduckgo",
            lambda q: duckduckgo_search.search(q, max_results=settings.duckduckgo_max_results),
        ),
        (
            "reddit",
            lambda q: reddit_search.search(q, max_results=settings.reddit_max_results),
        ),
        (
            "wikipedia",
            lambda q: wikipedia_search.search(q, max_results=settings.wikipedia_max_results),
        ),
        ("rss", rss_news.search),
    ]


async def run_source_searches(
    query: str,
    sources: list[tuple[SourceName, SourceSearch]] | None = None,
) -> list[SourceSearchResult]:
    """Run every connector concurrently and wait for all of them to settle."""
    active = sources if sources is not None else default_sources()
    raw_results = await asyncio.gather(
        *(search(query) for _, search in active),
        return_exceptions=True,
    )

    settled: list[SourceSearchResult] = []
    for (source, _), item in zip(active, raw_results):
        if isinstance(item, BaseException):
            logger.warning(f"Source {source} raised during search: {item!r}")
            settled.append(SourceSearchResult(source=source, error=str(item) or type(item).__name__))
            continue
        settled.append(SourceSearchResult(source=source, results=list(item)))
    return settled


async def collect_candidates(
    query: str,
    *,
    sources: list[tuple[SourceName, SourceSearch]] | None = None,
    max_results: int | None = None,
) -> list[SearchResult]:
    settled = await run_source_searches(query, sources)
    for item in settled:
        logger.debug(f"Source {item.source} returned {len(item.results)} results")
    cap = max_results if max_results is not None else settings.aggregate_max_results
    return aggregate_results((item.results for item in settled), max_results=cap)
