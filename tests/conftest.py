from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from app.agents.orchestrator import SearchOrchestrator
from app.agents.query_expander import QueryExpander
from app.agents.synthesizer import Synthesizer
from app.llm_client import Completion
from app.research_core.models.interfaces import ExtractedContent, SearchPage, SearchResult
from app.services.politeness import NoDelayPolicy

BOILING_QUESTION = "What is the boiling point of water at sea level?"
BOILING_URL = "https://www.usgs.gov/boiling-point"
BOILING_CONTENT = "Water boils at 100°C at sea level."


def _offline_client() -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError(f"unexpected network call to {request.url}")

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def fake_llm_client(*, fail_callers: tuple[str, ...] = ()) -> MagicMock:
    async def complete(*, model, messages, max_tokens=None, caller="unknown"):
        if caller in fail_callers:
            raise RuntimeError(f"{caller} unavailable")
        if caller == "query_expander":
            return Completion(text="boiling point of water sea level\nwater boiling temperature 1 atm")
        return Completion(text="Water boils at 100°C (212°F) at sea level [1].")

    client = MagicMock()
    client.complete = AsyncMock(side_effect=complete)
    return client


@pytest.fixture
def build_orchestrator():
    """Factory for an orchestrator whose search and extraction stages are stubbed."""

    def _build(*, fail_callers: tuple[str, ...] = ()) -> SearchOrchestrator:
        llm = fake_llm_client(fail_callers=fail_callers)
        searcher = AsyncMock(
            side_effect=lambda query, client=None: SearchPage(
                query=query,
                results=[
                    SearchResult(
                        title="Boiling Point of Water",
                        url=BOILING_URL,
                        snippet="At sea level, pure water boils at 100 °C.",
                    )
                ]
                if query == "boiling point of water sea level"
                else [],
            )
        )
        extractor = AsyncMock(
            side_effect=lambda url, client=None: ExtractedContent(
                url=url, text=BOILING_CONTENT, method="selector"
            )
        )
        policy = NoDelayPolicy()
        return SearchOrchestrator(
            expander=QueryExpander(model="gpt-4o", client=llm),
            synthesizer=Synthesizer(
                model="gpt-4o", client=llm, extractor=extractor, politeness=policy
            ),
            searcher=searcher,
            politeness=policy,
            http_client_factory=_offline_client,
        )

    return _build
