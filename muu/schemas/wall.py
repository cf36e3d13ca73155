"""
Pydantic schemas for the stories and recent-self walls.
Input strings are trimmed before length checks, so whitespace-only
fields are rejected.
"""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_AUTHOR = "訪客"


class StoryCreate(BaseModel):
    """Body for POST /stories."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=5000)


class StoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    content: str
    user_id: Optional[uuid.UUID]
    views: int
    created_at: datetime


class RecentSelfCreate(BaseModel):
    """Body for POST /recent-self."""

    model_config = ConfigDict(str_strip_whitespace=True)

    text: str = Field(..., min_length=1, max_length=5000)


class RecentSelfRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    user_id: uuid.UUID
    views: int
    created_at: datetime


class CommentCreate(BaseModel):
    """Body for POST /{wall}/{id}/comments. A blank author falls back to the guest nickname."""

    model_config = ConfigDict(str_strip_whitespace=True)

    text: str = Field(..., min_length=1, max_length=1000)
    author: Optional[str] = Field(None, max_length=50, validate_default=True)

    @field_validator("author")
    @classmethod
    def _default_author(cls, value: Optional[str]) -> str:
        return value or DEFAULT_AUTHOR


class CommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    post_id: int
    text: str
    author: str
    created_at: datetime


class ViewCount(BaseModel):
    """Returned by POST /{wall}/{id}/views."""

    id: int
    views: int
