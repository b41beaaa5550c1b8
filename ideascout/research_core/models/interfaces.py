from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

SourceName = Literal["duckduckgo", "reddit", "wikipedia", "rss"]


@dataclass(frozen=True, slots=True)
class SearchResult:
    """Normalized search hit. `url` is always absolute and scheme-qualified."""

    url: str
    title: str
    snippet: str = ""
    content: str | None = None

    def with_content(self, content: str) -> SearchResult:
        return replace(self, content=content)
