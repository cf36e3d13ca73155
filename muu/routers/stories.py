"""
Stories wall — public titled stories with comments and view counts.

Endpoints:
  GET  /stories                    — wall, most viewed first
  POST /stories                    — post a story (X-User-ID optional)
  GET  /stories/{id}               — single story
  POST /stories/{id}/views         — record that the story was opened
  GET  /stories/{id}/comments      — comments, newest first
  POST /stories/{id}/comments      — add a comment
"""

from __future__ import annotations

import logging
import uuid
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from muu.database import get_db
from muu.routers.identity import optional_user_id
from muu.schemas.wall import CommentCreate, CommentRead, StoryCreate, StoryRead, ViewCount
from muu.services import walls
from muu.services.walls import STORIES, PostNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/stories", tags=["stories"])


@router.get("", response_model=list[StoryRead])
async def list_stories(
    limit: int = Query(default=50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
) -> list[StoryRead]:
    posts = await walls.list_posts(db, STORIES, limit=limit)
    return [StoryRead.model_validate(p) for p in posts]


@router.post("", response_model=StoryRead, status_code=status.HTTP_201_CREATED)
async def create_story(
    body: StoryCreate,
    user_id: Optional[uuid.UUID] = Depends(optional_user_id),
    db: AsyncSession = Depends(get_db),
) -> StoryRead:
    try:
        story = await walls.create_post(
            db, STORIES, title=body.title, content=body.content, user_id=user_id
        )
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create story",
        ) from exc
    return StoryRead.model_validate(story)


@router.get("/{story_id}", response_model=StoryRead)
async def get_story(story_id: int, db: AsyncSession = Depends(get_db)) -> StoryRead:
    try:
        story = await walls.get_post(db, STORIES, story_id)
    except PostNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return StoryRead.model_validate(story)


@router.post("/{story_id}/views", response_model=ViewCount)
async def view_story(story_id: int, db: AsyncSession = Depends(get_db)) -> ViewCount:
    try:
        views = await walls.record_view(db, STORIES, story_id)
    except PostNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return ViewCount(id=story_id, views=views)


@router.get("/{story_id}/comments", response_model=list[CommentRead])
async def list_story_comments(
    story_id: int,
    limit: int = Query(default=100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
) -> list[CommentRead]:
    try:
        comments = await walls.list_comments(db, STORIES, story_id, limit=limit)
    except PostNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return [CommentRead.model_validate(c) for c in comments]


@router.post(
    "/{story_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
async def comment_on_story(
    story_id: int,
    body: CommentCreate,
    db: AsyncSession = Depends(get_db),
) -> CommentRead:
    try:
        comment = await walls.add_comment(
            db, STORIES, story_id, text=body.text, author=body.author
        )
    except PostNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add comment",
        ) from exc
    return CommentRead.model_validate(comment)
