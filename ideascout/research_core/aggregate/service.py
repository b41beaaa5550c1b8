from __future__ import annotations

from collections.abc import Iterable, Sequence

from ideascout.research_core.models.interfaces import SearchResult
from ideascout.tools import web_utils


def aggregate_results(
    groups: Iterable[Sequence[SearchResult]],
    *,
    max_results: int = 50,
) -> list[SearchResult]:
    """Merge connector outputs in order; the first result for a URL wins."""
    merged: list[SearchResult] = []
    seen: set[str] = set()
    for group in groups:
        for result in group:
            key = web_utils.normalize_url(result.url)
            if not web_utils.is_valid_url(key):
                continue
            if key in seen:
                continue
            seen.add(key)
            merged.append(result)
            if len(merged) >= max_results:
                return merged
    return merged
