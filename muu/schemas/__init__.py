"""Pydantic schemas package."""

from muu.schemas.talk import TalkError, TalkReply, TalkRequest
from muu.schemas.wall import (
    CommentCreate,
    CommentRead,
    RecentSelfCreate,
    RecentSelfRead,
    StoryCreate,
    StoryRead,
    ViewCount,
)

__all__ = [
    "TalkRequest", "TalkReply", "TalkError",
    "StoryCreate", "StoryRead",
    "RecentSelfCreate", "RecentSelfRead",
    "CommentCreate", "CommentRead", "ViewCount",
]
