"""Pydantic schemas for the talk endpoint."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, field_validator

MAX_MESSAGE_CHARS = 3000

MISSING_MESSAGE = "missing or malformed message"
MESSAGE_TOO_LONG = f"message too long (limit {MAX_MESSAGE_CHARS})"


class TalkRequest(BaseModel):
    """Body for POST /api/talk. Unknown keys (the client's turn counter) are ignored."""

    message: str

    @field_validator("message")
    @classmethod
    def _trimmed_and_bounded(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError(MISSING_MESSAGE)
        if len(value) > MAX_MESSAGE_CHARS:
            raise ValueError(MESSAGE_TOO_LONG)
        return value


class TalkReply(BaseModel):
    reply: str


class TalkError(BaseModel):
    """Error body shared by validation failures and provider failures."""

    error: str
    detail: Optional[Any] = None
