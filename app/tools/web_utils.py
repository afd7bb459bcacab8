from __future__ import annotations

import re
from urllib.parse import urlparse

import httpx

from app.config import settings


def browser_headers() -> dict[str, str]:
    """Request headers that look like a desktop browser."""
    return {
        "User-Agent": settings.user_agent,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.9",
    }


def build_http_client(**kwargs) -> httpx.AsyncClient:
    """Create the per-request HTTP client used for search and page fetches."""
    kwargs.setdefault("headers", browser_headers())
    kwargs.setdefault("timeout", settings.http_timeout_seconds)
    kwargs.setdefault("follow_redirects", True)
    return httpx.AsyncClient(**kwargs)


def is_http_url(url: str) -> bool:
    """True for absolute http(s) URLs with a host."""
    try:
        result = urlparse(url)
    except ValueError:
        return False
    return result.scheme in ("http", "https") and bool(result.netloc)


def squash_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()


def extract_domain(url: str) -> str:
    """Extract domain from URL for display."""
    try:
        return urlparse(url).netloc
    except ValueError:
        return url
