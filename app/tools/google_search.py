from __future__ import annotations

from typing import Any

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from app.config import settings
from app.research_core.models.interfaces import SearchPage, SearchResult
from app.services import logger as log_service
from app.tools import web_utils

RESULT_CONTAINER_SELECTOR = "div.g"


def parse_search_results(
    html: str,
    *,
    max_results: int = 8,
    snippet_class: str | None = None,
) -> list[SearchResult]:
    """Parse a results page into SearchResult entries in document order.

    A container is kept only when it has a heading, a first link pointing at
    an http(s) URL and a snippet node carrying the snippet class.
    """
    snippet_selector = f"div.{snippet_class or settings.search_snippet_class}"
    soup = BeautifulSoup(html, "html.parser")
    results: list[SearchResult] = []

    for container in soup.select(RESULT_CONTAINER_SELECTOR):
        heading = container.find("h3")
        link = container.find("a")
        snippet_node = container.select_one(snippet_selector)

        title = web_utils.squash_whitespace(heading.get_text(" ")) if heading else ""
        href = link.get("href") if link else None
        url = href.strip() if isinstance(href, str) else ""
        snippet = web_utils.squash_whitespace(snippet_node.get_text(" ")) if snippet_node else ""

        if not (title and snippet and url.startswith("http")):
            continue
        results.append(SearchResult(title=title, url=url, snippet=snippet))

    return results[:max_results]


def build_search_params(query: str) -> dict[str, Any]:
    return {"q": query, "num": settings.search_result_count_param}


async def search(
    query: str,
    *,
    client: httpx.AsyncClient | None = None,
    max_results: int | None = None,
) -> SearchPage:
    """Fetch and parse one results page. Never raises; failures yield an empty page."""
    limit = max_results if max_results is not None else settings.search_max_results

    try:
        if client is None:
            async with web_utils.build_http_client() as own_client:
                response = await own_client.get(settings.search_url, params=build_search_params(query))
        else:
            response = await client.get(settings.search_url, params=build_search_params(query))
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        log_service.log_pipeline_step(
            "search", "degraded", {"query": query, "status_code": status}
        )
        return SearchPage(query=query, status_code=status, error=f"HTTP {status}")
    except httpx.HTTPError as e:
        log_service.log_pipeline_step(
            "search", "degraded", {"query": query, "error": repr(e)}
        )
        return SearchPage(query=query, error=repr(e))

    try:
        results = parse_search_results(response.text, max_results=limit)
    except Exception as e:
        logger.exception(f"Failed to parse results page for query: {query[:100]}")
        return SearchPage(query=query, status_code=response.status_code, error=repr(e))

    log_service.log_pipeline_step(
        "search", "completed", {"query": query, "results": len(results)}
    )
    return SearchPage(query=query, results=results, status_code=response.status_code)
