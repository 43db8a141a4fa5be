"""Chat turn and message history routes."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import JSONResponse

from chat import ChatService, PersistenceError, ResolutionError, ValidationError
from web.deps import get_chat_service
from web.models import ClearResponse, ErrorResponse, HistoryResponse, TurnRequest, TurnResponse

logger = structlog.get_logger()

router = APIRouter(prefix="/api", tags=["chat"])


def _internal_error(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={"error": "Internal server error", "message": str(exc)},
    )


@router.post(
    "/turn",
    response_model=TurnResponse,
    responses={400: {"description": "Message missing"}, 500: {"model": ErrorResponse}},
)
@router.post("/chat", response_model=TurnResponse, include_in_schema=False)
async def post_turn(
    body: TurnRequest,
    service: ChatService = Depends(get_chat_service),
):
    try:
        reply = service.handle_turn(body.message)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (PersistenceError, ResolutionError) as e:
        logger.error("chat.turn_failed", error=str(e))
        return _internal_error(e)
    return reply.to_dict()


@router.get("/history", response_model=HistoryResponse, responses={500: {"model": ErrorResponse}})
@router.get("/messages", response_model=HistoryResponse, include_in_schema=False)
async def get_history(
    page: int | None = Query(None),
    limit: int | None = Query(None),
    service: ChatService = Depends(get_chat_service),
):
    """Messages oldest first. Page/limit below 1 fall back to defaults."""
    try:
        history = service.history(page=page, limit=limit)
    except PersistenceError as e:
        logger.error("chat.history_failed", error=str(e))
        return _internal_error(e)
    return history.to_dict()


@router.delete("/history", response_model=ClearResponse, responses={500: {"model": ErrorResponse}})
@router.delete("/messages", response_model=ClearResponse, include_in_schema=False)
async def clear_history(service: ChatService = Depends(get_chat_service)):
    try:
        deleted = service.clear_history()
    except PersistenceError as e:
        logger.error("chat.clear_failed", error=str(e))
        return _internal_error(e)
    return ClearResponse(message="Chat history cleared successfully", deleted=deleted)
