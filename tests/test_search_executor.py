from __future__ import annotations

import asyncio

import pytest

from ideascout.research_core.models.interfaces import SearchResult
from ideascout.services import search_executor


def _source(results: list[SearchResult], delay: float = 0.0):
    async def search(_query: str) -> list[SearchResult]:
        if delay:
            await asyncio.sleep(delay)
        return results

    return search


@pytest.mark.asyncio
async def test_collect_candidates_respects_source_precedence():
    sources = [
        ("duckduckgo", _source([SearchResult(url="https://example.com/a", title="web")], delay=0.05)),
        ("reddit", _source([SearchResult(url="https://example.com/a", title="forum")])),
        ("wikipedia", _source([SearchResult(url="https://en.wikipedia.org/wiki/A", title="wiki")])),
        ("rss", _source([])),
    ]

    results = await search_executor.collect_candidates("a", sources=sources)

    assert [r.title for r in results] == ["web", "wiki"]


@pytest.mark.asyncio
async def test_raising_source_contributes_nothing():
    async def broken(_query: str) -> list[SearchResult]:
        raise RuntimeError("parser exploded")

    sources = [
        ("duckduckgo", broken),
        ("reddit", _source([SearchResult(url="https://old.reddit.com/r/x", title="forum")])),
    ]

    settled = await search_executor.run_source_searches("x", sources)

    assert settled[0].results == []
    assert settled[0].error == "parser exploded"
    assert [r.title for r in settled[1].results] == ["forum"]


@pytest.mark.asyncio
async def test_sources_run_concurrently():
    sources = [(name, _source([], delay=0.2)) for name in ("duckduckgo", "reddit", "wikipedia", "rss")]

    loop = asyncio.get_running_loop()
    started = loop.time()
    await search_executor.run_source_searches("x", sources)

    assert loop.time() - started < 0.6


def test_default_sources_order():
    assert [name for name, _ in search_executor.default_sources()] == [
        "duckduckgo",
        "reddit",
        "wikipedia",
        "rss",
    ]
