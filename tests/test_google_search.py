from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from app.tools import google_search

FIXTURES = Path(__file__).parent / "fixtures"


def _results_page() -> str:
    return (FIXTURES / "results_page.html").read_text(encoding="utf-8")


def _container(i: int) -> str:
    return (
        f'<div class="g"><a href="https://example.com/{i}"><h3>Title {i}</h3></a>'
        f'<div class="VwiC3b">Snippet {i}</div></div>'
    )


def test_parse_search_results_skips_malformed_containers():
    results = google_search.parse_search_results(_results_page(), snippet_class="VwiC3b")

    assert [r.url for r in results] == [
        "https://www.usgs.gov/boiling-point",
        "http://chem.example.edu/water",
    ]
    assert results[0].title == "Boiling Point of Water | USGS"
    assert results[0].snippet == "At sea level, pure water boils at 100 °C (212 °F)."
    assert results[1].title == "Water phase diagram"


def test_parse_search_results_truncates_to_first_eight_in_document_order():
    html = "<html><body>" + "".join(_container(i) for i in range(12)) + "</body></html>"

    results = google_search.parse_search_results(html, max_results=8, snippet_class="VwiC3b")

    assert len(results) == 8
    assert [r.title for r in results] == [f"Title {i}" for i in range(8)]
    for result in results:
        assert result.title
        assert result.snippet
        assert result.url.startswith("http")


def test_parse_search_results_honors_snippet_class_override():
    results = google_search.parse_search_results(_results_page(), snippet_class="st")

    assert [r.url for r in results] == ["https://example.net/old-class"]


def test_parse_search_results_handles_page_without_results():
    assert google_search.parse_search_results("<html><body><p>captcha</p></body></html>") == []


@pytest.mark.asyncio
async def test_search_requests_extra_results_and_parses_page():
    seen: dict[str, httpx.Request] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return httpx.Response(200, text=_results_page())

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        page = await google_search.search("boiling point of water", client=client)

    params = seen["request"].url.params
    assert params["q"] == "boiling point of water"
    assert params["num"] == "16"
    assert page.error is None
    assert page.status_code == 200
    assert len(page.results) == 2


@pytest.mark.asyncio
async def test_search_returns_empty_page_on_http_error_status():
    transport = httpx.MockTransport(lambda request: httpx.Response(429, text="Too Many Requests"))

    async with httpx.AsyncClient(transport=transport) as client:
        page = await google_search.search("anything", client=client)

    assert page.results == []
    assert page.status_code == 429
    assert page.error == "HTTP 429"


@pytest.mark.asyncio
async def test_search_returns_empty_page_on_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        page = await google_search.search("anything", client=client)

    assert page.results == []
    assert page.status_code is None
    assert "ConnectError" in (page.error or "")
