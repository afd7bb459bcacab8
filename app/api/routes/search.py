from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from loguru import logger

from app.agents.orchestrator import SearchOrchestrator
from app.models.schemas import ErrorResponse, SearchRequest, SearchResponse
from app.services import logger as log_service

router = APIRouter(prefix="/api/search", tags=["search"])

FAILURE_MESSAGE = "Failed to process search"


def get_orchestrator() -> SearchOrchestrator:
    return SearchOrchestrator()


@router.post(
    "",
    response_model=SearchResponse,
    responses={500: {"model": ErrorResponse}},
)
async def run_search(request: Request):
    """Answer a question with a synthesized, cited response."""
    try:
        payload = SearchRequest.model_validate(await request.json())
        log_service.log_event(
            event_type="search_started",
            message="Search started",
            query=payload.query[:100],
        )
        response = await get_orchestrator().run(payload.query)
    except Exception:
        logger.exception("Error processing search")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=FAILURE_MESSAGE).model_dump(),
        )
    return JSONResponse(content=response.model_dump(by_alias=True))
