from __future__ import annotations

from app.agents.base import BaseAgent
from app.config import settings
from app.research_core.models.interfaces import ExpansionResult
from app.services import logger as log_service
from app.services.prompt_store import render_prompt


def parse_queries(text: str) -> list[str]:
    """One query per non-blank line."""
    return [line.strip() for line in text.splitlines() if line.strip()]


class QueryExpander(BaseAgent):
    """Turns one question into several targeted search-engine queries."""

    name = "query_expander"
    max_tokens = 300

    def __init__(self, model=None, client=None, *, query_count: int | None = None):
        super().__init__(model, client)
        self.query_count = query_count or settings.expansion_query_count

    async def expand(self, question: str) -> ExpansionResult:
        system = render_prompt("query_expander.system_prompt", count=self.query_count)
        user = render_prompt("query_expander.user_prompt", question=question)

        try:
            text = await self.complete(system, user)
        except Exception as e:
            return self._fallback(question, repr(e))

        queries = parse_queries(text or "")
        if not queries:
            return self._fallback(question, "empty completion")

        log_service.log_pipeline_step("expansion", "completed", {"queries": queries})
        return ExpansionResult(queries=queries)

    def _fallback(self, question: str, error: str) -> ExpansionResult:
        log_service.log_pipeline_step("expansion", "degraded", {"error": error})
        return ExpansionResult(queries=[question], fallback_used=True, error=error)
