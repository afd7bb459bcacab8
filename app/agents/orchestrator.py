from __future__ import annotations

import time
from typing import Awaitable, Callable

import httpx
from loguru import logger

from app.agents.query_expander import QueryExpander
from app.agents.synthesizer import Synthesizer
from app.models.schemas import SearchResponse
from app.research_core.models.interfaces import SearchPage, SearchResult
from app.services import logger as log_service
from app.services.politeness import PolitenessPolicy, default_policy
from app.tools import google_search, web_utils

Searcher = Callable[..., Awaitable[SearchPage]]
ClientFactory = Callable[[], httpx.AsyncClient]


class SearchOrchestrator:
    """Runs expansion, retrieval, extraction and synthesis for one question.

    Every stage runs sequentially. Stages degrade to empty or fallback values
    instead of raising, so a request only fails when something escapes them.
    Sources are not deduplicated across expanded queries.
    """

    def __init__(
        self,
        model: str | None = None,
        *,
        expander: QueryExpander | None = None,
        synthesizer: Synthesizer | None = None,
        searcher: Searcher | None = None,
        politeness: PolitenessPolicy | None = None,
        http_client_factory: ClientFactory | None = None,
    ):
        self.politeness = politeness or default_policy()
        self.expander = expander or QueryExpander(model=model)
        if synthesizer is None:
            synthesizer = Synthesizer(model=model, politeness=self.politeness)
        elif politeness is not None:
            # One pacing policy per run covers both query and source waits.
            synthesizer.politeness = politeness
        self.synthesizer = synthesizer
        self.searcher = searcher or google_search.search
        self.http_client_factory = http_client_factory or web_utils.build_http_client

    async def gather_sources(
        self,
        queries: list[str],
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> list[SearchResult]:
        sources: list[SearchResult] = []
        for index, query in enumerate(queries):
            if index:
                await self.politeness.after_query()
            page = await self.searcher(query, client=http_client)
            sources.extend(page.results)
        return sources

    async def run(self, question: str) -> SearchResponse:
        started = time.monotonic()
        logger.info(f"Starting search pipeline for question: {question[:100]}")

        expansion = await self.expander.expand(question)

        async with self.http_client_factory() as http_client:
            sources = await self.gather_sources(expansion.queries, http_client=http_client)
            logger.info(f"Collected {len(sources)} sources from {len(expansion.queries)} queries")
            synthesis = await self.synthesizer.synthesize(
                question, sources, http_client=http_client
            )

        log_service.log_event(
            event_type="search_complete",
            message="Search pipeline finished",
            runtime_ms=int((time.monotonic() - started) * 1000),
            queries=len(expansion.queries),
            sources=len(sources),
            citations=len(synthesis.citations),
            expansion_fallback=expansion.fallback_used,
            synthesis_error=synthesis.error,
        )
        return SearchResponse(
            query=question,
            answer=synthesis.answer,
            citations=synthesis.citations,
            search_queries_used=expansion.queries,
        )
