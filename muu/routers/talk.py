"""
Talk endpoint — one user message in, one persona reply out.

Validation happens here, before the proxy is involved: a rejected message
never reaches the provider. Provider failures are returned with their real
HTTP status; this endpoint never substitutes fallback text for an error.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from muu.config import settings
from muu.schemas.talk import MISSING_MESSAGE, TalkError, TalkReply, TalkRequest
from muu.services.completion import CompletionProxy, CompletionSuccess, ProviderConfig

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["talk"])


def get_completion_proxy() -> CompletionProxy:
    """FastAPI dependency: a proxy configured from process settings."""
    return CompletionProxy(ProviderConfig.from_settings(settings))


def _error_response(status_code: int, error: str, detail: Any = None) -> JSONResponse:
    body = TalkError(error=error, detail=detail).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


def _validation_message(exc: ValidationError) -> str:
    """Surface our own message-check text; anything else is a malformed body."""
    for err in exc.errors():
        if err.get("loc") == ("message",) and err.get("type") == "value_error":
            return str(err["ctx"]["error"])
    return MISSING_MESSAGE


@router.post(
    "/talk",
    response_model=TalkReply,
    responses={
        400: {"model": TalkError},
        500: {"model": TalkError},
        502: {"model": TalkError},
        504: {"model": TalkError},
    },
)
async def talk(
    request: Request,
    proxy: CompletionProxy = Depends(get_completion_proxy),
) -> JSONResponse:
    """
    Body: {"message": "..."}.

    200 {"reply": "..."} on success; 400 for a blank, malformed or over-long
    message; otherwise the provider failure's status with {"error", "detail"?}.
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = {}
    if not isinstance(payload, dict):
        payload = {}

    try:
        body = TalkRequest.model_validate(payload)
    except ValidationError as exc:
        message = _validation_message(exc)
        logger.info("Rejected talk request: %s", message)
        return _error_response(status.HTTP_400_BAD_REQUEST, message)

    result = await proxy.complete(body.message)

    if isinstance(result, CompletionSuccess):
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=TalkReply(reply=result.reply).model_dump(),
        )
    return _error_response(result.http_status, result.error, result.detail)
