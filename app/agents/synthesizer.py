from __future__ import annotations

from typing import Awaitable, Callable, Sequence

import httpx
from loguru import logger

from app.agents.base import BaseAgent
from app.research_core.models.interfaces import (
    ExtractedContent,
    SearchResult,
    SynthesisInput,
    SynthesisResult,
)
from app.services import logger as log_service
from app.services.politeness import NoDelayPolicy, PolitenessPolicy
from app.services.prompt_store import render_prompt
from app.tools import content_extractor

SYNTHESIS_ERROR_MESSAGE = "Error synthesizing information."
EMPTY_COMPLETION_MESSAGE = "No content available"

Extractor = Callable[..., Awaitable[ExtractedContent]]


class Synthesizer(BaseAgent):
    """Extracts each source's page text and asks the model for a cited answer."""

    name = "synthesizer"

    def __init__(
        self,
        model=None,
        client=None,
        *,
        extractor: Extractor | None = None,
        politeness: PolitenessPolicy | None = None,
    ):
        super().__init__(model, client)
        self.extractor = extractor or content_extractor.extract
        self.politeness = politeness or NoDelayPolicy()

    async def collect(
        self,
        sources: Sequence[SearchResult],
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> SynthesisInput:
        """Build the ordered content/snippet blocks and the citation list."""
        synthesis_input = SynthesisInput()

        for index, source in enumerate(sources):
            if index:
                await self.politeness.after_source()

            try:
                extracted = await self.extractor(source.url, client=http_client)
            except Exception as e:
                logger.warning(f"Error processing source {source.url}: {e!r}")
                extracted = ExtractedContent(url=source.url, error=repr(e))

            if extracted.text:
                synthesis_input.add_content(source.url, extracted.text)
            if source.snippet:
                synthesis_input.add_snippet(source.snippet, source.url)

        return synthesis_input

    async def synthesize(
        self,
        question: str,
        sources: Sequence[SearchResult],
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> SynthesisResult:
        try:
            synthesis_input = await self.collect(sources, http_client=http_client)
            log_service.log_pipeline_step(
                "synthesis",
                "started",
                {
                    "sources": len(sources),
                    "blocks": len(synthesis_input.blocks),
                    "citations": len(synthesis_input.citations),
                },
            )

            answer = await self.complete(
                render_prompt("synthesizer.system_prompt"),
                render_prompt(
                    "synthesizer.user_prompt",
                    question=question,
                    sources=synthesis_input.render(),
                ),
            )
        except Exception as e:
            logger.exception("Error synthesizing information")
            log_service.log_pipeline_step("synthesis", "degraded", {"error": repr(e)})
            return SynthesisResult(answer=SYNTHESIS_ERROR_MESSAGE, error=repr(e))

        log_service.log_pipeline_step("synthesis", "completed", {"citations": synthesis_input.citations})
        return SynthesisResult(
            answer=answer or EMPTY_COMPLETION_MESSAGE,
            citations=list(synthesis_input.citations),
        )
