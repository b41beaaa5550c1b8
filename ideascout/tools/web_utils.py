from __future__ import annotations

import re
from urllib.parse import urlparse

from ideascout.config import settings


def normalize_url(url: str) -> str:
    """Make a scraped href absolute and scheme-qualified."""
    url = url.strip()
    if url.startswith("//"):
        return "https:" + url
    if not url.startswith(("http://", "https://")):
        return "https://" + url
    return url


def is_valid_url(url: str) -> bool:
    """Basic URL validation."""
    try:
        result = urlparse(url)
        return all([result.scheme in ("http", "https"), result.netloc])
    except ValueError:
        return False


def clean_content(text: str, max_length: int = 5000) -> str:
    """Collapse whitespace and hard-cut to max length."""
    text = re.sub(r"\s+", " ", text).strip()
    return text[:max_length]


def browser_headers() -> dict[str, str]:
    return {"User-Agent": settings.user_agent}
