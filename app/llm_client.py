"""OpenAI-compatible completion client factory."""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any

from app.config import settings
from app.services import logger as log_service


@dataclass
class Usage:
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass
class Completion:
    text: str | None
    usage: Usage = field(default_factory=Usage)


class ChatCompletionAdapter:
    """Thin wrapper over `chat.completions.create` that returns the first choice's text."""

    def __init__(self, openai_client: Any):
        self._client = openai_client

    @staticmethod
    def _temperature_for_model(model: str) -> float | None:
        # Reasoning-style models reject an explicit temperature.
        lowered = (model or "").lower()
        if "gpt-5" in lowered or lowered.startswith(("o1", "o3", "o4")):
            return None
        return 0.2

    @staticmethod
    def _normalize_messages(messages: list[dict[str, Any]]) -> list[dict[str, str]]:
        normalized: list[dict[str, str]] = []
        for message in messages:
            role = message["role"]
            if role not in ("system", "user", "assistant"):
                raise ValueError(f"Unsupported message role: {role}")
            normalized.append({"role": role, "content": str(message.get("content", ""))})
        return normalized

    def _from_openai_response(self, response: Any) -> Completion:
        choices = getattr(response, "choices", None) or []
        text: str | None = None
        if choices:
            message = getattr(choices[0], "message", None)
            text = getattr(message, "content", None) if message is not None else None

        usage = getattr(response, "usage", None)
        return Completion(
            text=text,
            usage=Usage(
                input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
                output_tokens=getattr(usage, "completion_tokens", 0) or 0,
            ),
        )

    async def complete(
        self,
        *,
        model: str,
        messages: list[dict[str, Any]],
        max_tokens: int | None = None,
        caller: str = "unknown",
    ) -> Completion:
        kwargs: dict[str, Any] = {
            "model": model,
            "messages": self._normalize_messages(messages),
            "max_tokens": max_tokens or settings.llm_max_tokens,
        }
        temperature = self._temperature_for_model(model)
        if temperature is not None:
            kwargs["temperature"] = temperature

        started = time.monotonic()
        try:
            response = await self._client.chat.completions.create(**kwargs)
        except Exception as e:
            log_service.log_llm_call(
                model=model,
                caller=caller,
                duration_ms=int((time.monotonic() - started) * 1000),
                status="error",
                error=repr(e),
            )
            raise

        completion = self._from_openai_response(response)
        log_service.log_llm_call(
            model=model,
            caller=caller,
            input_tokens=completion.usage.input_tokens,
            output_tokens=completion.usage.output_tokens,
            duration_ms=int((time.monotonic() - started) * 1000),
        )
        return completion


def get_client() -> ChatCompletionAdapter:
    """Create a completion client. SDK retries are disabled; failures surface immediately."""
    from openai import AsyncOpenAI

    base_url = settings.openai_base_url.strip() or "https://api.openai.com/v1"
    openai_client = AsyncOpenAI(
        api_key=settings.openai_api_key,
        base_url=base_url,
        timeout=settings.llm_timeout_seconds,
        max_retries=0,
    )
    return ChatCompletionAdapter(openai_client)


def get_model() -> str:
    """Get the active model id."""
    return settings.default_model


_client: ChatCompletionAdapter | None = None


def client() -> ChatCompletionAdapter:
    """Get or create the completion client."""
    global _client
    if _client is None:
        _client = get_client()
    return _client
