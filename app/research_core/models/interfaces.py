from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal


ExtractMethod = Literal["selector", "paragraphs", "none"]
BlockKind = Literal["content", "snippet"]


@dataclass(frozen=True, slots=True)
class SearchResult:
    title: str
    url: str
    snippet: str


@dataclass(slots=True)
class ExpansionResult:
    queries: list[str]
    fallback_used: bool = False
    error: str | None = None


@dataclass(slots=True)
class SearchPage:
    query: str
    results: list[SearchResult] = field(default_factory=list)
    status_code: int | None = None
    error: str | None = None


@dataclass(slots=True)
class ExtractedContent:
    url: str
    text: str = ""
    method: ExtractMethod = "none"
    selector: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return bool(self.text)


@dataclass(slots=True)
class SourceBlock:
    kind: BlockKind
    text: str
    url: str | None = None

    def render(self) -> str:
        if self.kind == "content":
            return f"Content from {self.url}:\n{self.text}"
        return f"Snippet: {self.text}"


@dataclass(slots=True)
class SynthesisInput:
    blocks: list[SourceBlock] = field(default_factory=list)
    citations: list[str] = field(default_factory=list)

    def add_content(self, url: str, text: str) -> None:
        self.blocks.append(SourceBlock(kind="content", text=text, url=url))
        if url not in self.citations:
            self.citations.append(url)

    def add_snippet(self, snippet: str, url: str | None = None) -> None:
        self.blocks.append(SourceBlock(kind="snippet", text=snippet, url=url))

    def render(self) -> str:
        return "\n\n".join(block.render() for block in self.blocks)


@dataclass(slots=True)
class SynthesisResult:
    answer: str
    citations: list[str] = field(default_factory=list)
    error: str | None = None
