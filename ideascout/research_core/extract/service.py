from __future__ import annotations

from collections.abc import Iterable

from bs4 import BeautifulSoup

from ideascout.tools import web_utils

NON_CONTENT_TAGS = ("script", "style", "nav", "footer")


def extract_page_text(raw_html: str, *, max_chars: int = 5000) -> str:
    """Strip non-content markup and return the collapsed body text."""
    soup = BeautifulSoup(raw_html, "html.parser")
    for tag in soup(list(NON_CONTENT_TAGS)):
        tag.decompose()
    root = soup.body or soup
    return web_utils.clean_content(root.get_text(" "), max_length=max_chars)


def chunk_text(text: str, *, chunk_size: int = 2000) -> list[str]:
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    return [text[start : start + chunk_size] for start in range(0, len(text), chunk_size)]


def build_evidence_chunks(
    contents: Iterable[str],
    *,
    chunk_size: int = 2000,
    max_chunks: int = 5,
) -> list[str]:
    combined = "\n\n".join(contents)
    return chunk_text(combined, chunk_size=chunk_size)[:max_chunks]
