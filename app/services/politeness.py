"""Fixed politeness delays between outbound requests.

The orchestrator waits after each search-engine query and the synthesizer
waits after each page fetch. Both go through a policy object so callers
can swap in a different pacing strategy (or none at all in tests).
"""
from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from app.config import settings

Sleeper = Callable[[float], Awaitable[None]]


class PolitenessPolicy:
    """Base pacing strategy. Does not wait."""

    async def after_source(self) -> None:
        return None

    async def after_query(self) -> None:
        return None


class NoDelayPolicy(PolitenessPolicy):
    pass


class FixedDelayPolicy(PolitenessPolicy):
    def __init__(
        self,
        source_delay: float,
        query_delay: float,
        *,
        sleep: Sleeper = asyncio.sleep,
    ):
        self.source_delay = max(float(source_delay), 0.0)
        self.query_delay = max(float(query_delay), 0.0)
        self._sleep = sleep

    async def after_source(self) -> None:
        if self.source_delay:
            await self._sleep(self.source_delay)

    async def after_query(self) -> None:
        if self.query_delay:
            await self._sleep(self.query_delay)


def default_policy() -> PolitenessPolicy:
    return FixedDelayPolicy(
        settings.source_delay_seconds,
        settings.query_delay_seconds,
    )
