"""Chat and context endpoints."""

import logging

from fastapi import APIRouter, Depends

from .....composition.container import get_chat_service
from .....core.services.chat_service import ChatService
from .....core.services.context_service import NO_CONTEXT_FOUND
from ..models import (
    AnswerResponse,
    ContextRequest,
    ContextResponse,
    ErrorResponse,
    QuestionRequest,
    ToolCallInfo,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["chat"])


@router.post(
    "/ask",
    response_model=AnswerResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request"},
        429: {"model": ErrorResponse, "description": "LLM rate limit reached"},
        500: {"model": ErrorResponse, "description": "Internal server error"},
    },
)
def ask_question(
    request: QuestionRequest,
    service: ChatService = Depends(get_chat_service),
) -> AnswerResponse:
    """Ask a question about the vault.

    Errors propagate to the application's exception handlers, which
    render them as structured JSON.
    """
    response = service.ask(request.question, active_path=request.active_path)
    return AnswerResponse(
        answer=response.text,
        question=request.question,
        sources=response.sources,
        tool_calls=[
            ToolCallInfo(name=call.name, arguments=call.arguments, failed=call.failed)
            for call in response.tool_calls
        ],
    )


@router.post("/context", response_model=ContextResponse)
def build_context(
    request: ContextRequest,
    service: ChatService = Depends(get_chat_service),
) -> ContextResponse:
    """Assemble the vault context for a query without calling the LLM."""
    context, sources = service.build_context(request.query, active_path=request.active_path)
    return ContextResponse(context=context, sources=sources, found=context != NO_CONTEXT_FOUND)
