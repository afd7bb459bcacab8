from __future__ import annotations

import re

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from app.config import settings
from app.research_core.models.interfaces import ExtractedContent
from app.services import logger as log_service
from app.tools import web_utils

NON_CONTENT_TAGS = (
    "script",
    "style",
    "nav",
    "header",
    "footer",
    "aside",
    "iframe",
    "img",
)

CONTENT_SELECTORS = (
    "article",
    "main",
    ".content",
    ".post-content",
    ".article-content",
    "#content",
    "#main-content",
)


def _normalize_text(text: str) -> str:
    text = text.replace("\xa0", " ")
    text = re.sub(r"\r\n?", "\n", text)
    lines = [re.sub(r"[^\S\n]+", " ", line).strip() for line in text.split("\n")]
    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _truncate(text: str, max_chars: int) -> str:
    if max_chars <= 0 or len(text) <= max_chars:
        return text
    return text[:max_chars].rstrip()


def strip_non_content(soup: BeautifulSoup) -> None:
    for node in soup(list(NON_CONTENT_TAGS)):
        node.decompose()


def select_main_text(soup: BeautifulSoup) -> tuple[str, str | None]:
    """Return (text, selector) for the first content selector with non-empty text."""
    for selector in CONTENT_SELECTORS:
        matched = soup.select(selector)
        if not matched:
            continue
        text = "\n\n".join(node.get_text(" ") for node in matched).strip()
        if text:
            return text, selector
    return "", None


def paragraph_text(soup: BeautifulSoup, *, min_chars: int) -> str:
    paragraphs = [p.get_text(" ").strip() for p in soup.find_all("p")]
    return "\n\n".join(p for p in paragraphs if len(p) > min_chars)


def extract_from_html(
    url: str,
    raw_html: str,
    *,
    max_chars: int | None = None,
    min_paragraph_chars: int | None = None,
) -> ExtractedContent:
    """Reduce a page's markup to bounded, whitespace-normalized prose."""
    target_chars = max_chars if max_chars is not None else settings.extractor_max_chars
    min_chars = (
        min_paragraph_chars
        if min_paragraph_chars is not None
        else settings.extractor_min_paragraph_chars
    )

    soup = BeautifulSoup(raw_html, "html.parser")
    strip_non_content(soup)

    text, selector = select_main_text(soup)
    method = "selector"
    if not text:
        text = paragraph_text(soup, min_chars=min_chars)
        method = "paragraphs"

    cleaned = _truncate(_normalize_text(text), target_chars)
    if not cleaned:
        return ExtractedContent(url=url, error="no extractable text")
    return ExtractedContent(url=url, text=cleaned, method=method, selector=selector)


async def extract(
    url: str,
    *,
    client: httpx.AsyncClient | None = None,
) -> ExtractedContent:
    """Fetch a page and extract its main text. Never raises; failures yield empty text."""
    if not web_utils.is_http_url(url):
        log_service.log_pipeline_step("extraction", "degraded", {"url": url, "error": "invalid url"})
        return ExtractedContent(url=url, error="invalid url")

    try:
        if client is None:
            async with web_utils.build_http_client() as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url)
        response.raise_for_status()
    except httpx.HTTPError as e:
        log_service.log_pipeline_step("extraction", "degraded", {"url": url, "error": repr(e)})
        return ExtractedContent(url=url, error=repr(e))
    except Exception as e:
        # httpx rejects some hrefs (bad port, IDNA host) while building the request.
        logger.warning(f"Could not fetch {url}: {e!r}")
        log_service.log_pipeline_step("extraction", "degraded", {"url": url, "error": repr(e)})
        return ExtractedContent(url=url, error=repr(e))

    try:
        extracted = extract_from_html(url, response.text)
    except Exception as e:
        logger.warning(f"Error extracting content from {url}: {e!r}")
        return ExtractedContent(url=url, error=repr(e))

    log_service.log_pipeline_step(
        "extraction",
        "completed" if extracted.ok else "degraded",
        {
            "url": url,
            "domain": web_utils.extract_domain(url),
            "method": extracted.method,
            "chars": len(extracted.text),
        },
    )
    return extracted
