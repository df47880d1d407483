"""HTTP handler for ``POST /api/chat``."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from chatty.config import Settings, get_settings
from chatty.dependencies import get_chat_service
from chatty.exceptions import ChatError, ErrorKind
from chatty.models import ChatResponse, ErrorResponse, PromptIn
from chatty.services.chat_service import ChatService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Prompt missing or not a string."},
    500: {"model": ErrorResponse, "description": "Server misconfigured or failed."},
}


@router.post("/chat", response_model=ChatResponse, responses=_ERROR_RESPONSES)
async def chat_endpoint(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    chat_service: Annotated[ChatService, Depends(get_chat_service)],
) -> ChatResponse:
    """Relay one prompt to the completion service: text in, text out."""

    if not settings.api_key_configured:
        raise ChatError(ErrorKind.CONFIGURATION)

    # Parsed by hand so malformed input gets our 400 body rather than a 422.
    try:
        payload = PromptIn.model_validate_json(await request.body())
    except ValueError:
        raise ChatError(ErrorKind.VALIDATION) from None

    try:
        text = await chat_service.complete(payload.prompt)
    except ChatError:
        raise
    except Exception as exc:
        logger.exception("Chat request failed unexpectedly")
        raise ChatError.unexpected(str(exc)) from exc

    logger.info(
        "Chat reply delivered",
        extra={"prompt_chars": len(payload.prompt), "reply_chars": len(text)},
    )
    return ChatResponse(response=text)


async def chat_error_handler(request: Request, exc: ChatError) -> JSONResponse:
    """Render a ``ChatError`` as its JSON envelope and status code."""

    logger.error(
        "Chat request rejected",
        extra={
            "kind": exc.kind.value,
            "status_code": exc.http_status(),
            "details": exc.details,
            "path": request.url.path,
        },
    )
    return JSONResponse(
        status_code=exc.http_status(),
        content=exc.to_response().model_dump(exclude_none=True),
    )
