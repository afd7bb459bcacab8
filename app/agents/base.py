from __future__ import annotations

from app.llm_client import ChatCompletionAdapter, client as llm_client, get_model


class BaseAgent:
    """Base for pipeline stages that talk to the completion service.

    Subclasses set `name` and build their own messages; `complete` sends them
    with the agent's model and returns the first completion's text.
    """

    name: str = "base"
    max_tokens: int | None = None

    def __init__(self, model: str | None = None, client: ChatCompletionAdapter | None = None):
        self.model = model or get_model()
        self.client = client

    async def complete(self, system: str, user: str) -> str | None:
        active_client = self.client or llm_client()
        completion = await active_client.complete(
            model=self.model,
            messages=[
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            max_tokens=self.max_tokens,
            caller=self.name,
        )
        return completion.text
