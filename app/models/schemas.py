from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


# --- Requests ---


class SearchRequest(BaseModel):
    query: str


# --- Responses ---


class SearchResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    query: str
    answer: str
    citations: list[str] = Field(default_factory=list)
    search_queries_used: list[str] = Field(default_factory=list, alias="searchQueriesUsed")


class ErrorResponse(BaseModel):
    error: str
