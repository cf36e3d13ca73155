"""
Recent-self wall — short "how I've been lately" notes.

Same mechanics as the stories wall, with two differences: every entry
belongs to the anonymous user who posted it, so POST /recent-self requires
X-User-ID; and the wall only lists entries from the last 72 hours. Older
entries stay reachable by id.
"""

from __future__ import annotations

import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from muu.database import get_db
from muu.routers.identity import require_user_id
from muu.schemas.wall import (
    CommentCreate,
    CommentRead,
    RecentSelfCreate,
    RecentSelfRead,
    ViewCount,
)
from muu.services import walls
from muu.services.walls import RECENT_SELF, PostNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/recent-self", tags=["recent-self"])


@router.get("", response_model=list[RecentSelfRead])
async def list_entries(
    limit: int = Query(default=50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
) -> list[RecentSelfRead]:
    entries = await walls.list_posts(db, RECENT_SELF, limit=limit)
    return [RecentSelfRead.model_validate(e) for e in entries]


@router.post("", response_model=RecentSelfRead, status_code=status.HTTP_201_CREATED)
async def create_entry(
    body: RecentSelfCreate,
    user_id: uuid.UUID = Depends(require_user_id),
    db: AsyncSession = Depends(get_db),
) -> RecentSelfRead:
    try:
        entry = await walls.create_post(db, RECENT_SELF, text=body.text, user_id=user_id)
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create entry",
        ) from exc
    return RecentSelfRead.model_validate(entry)


@router.get("/{entry_id}", response_model=RecentSelfRead)
async def get_entry(entry_id: int, db: AsyncSession = Depends(get_db)) -> RecentSelfRead:
    try:
        entry = await walls.get_post(db, RECENT_SELF, entry_id)
    except PostNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return RecentSelfRead.model_validate(entry)


@router.post("/{entry_id}/views", response_model=ViewCount)
async def view_entry(entry_id: int, db: AsyncSession = Depends(get_db)) -> ViewCount:
    try:
        views = await walls.record_view(db, RECENT_SELF, entry_id)
    except PostNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return ViewCount(id=entry_id, views=views)


@router.get("/{entry_id}/comments", response_model=list[CommentRead])
async def list_entry_comments(
    entry_id: int,
    limit: int = Query(default=100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
) -> list[CommentRead]:
    try:
        comments = await walls.list_comments(db, RECENT_SELF, entry_id, limit=limit)
    except PostNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return [CommentRead.model_validate(c) for c in comments]


@router.post(
    "/{entry_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
async def comment_on_entry(
    entry_id: int,
    body: CommentCreate,
    db: AsyncSession = Depends(get_db),
) -> CommentRead:
    try:
        comment = await walls.add_comment(
            db, RECENT_SELF, entry_id, text=body.text, author=body.author
        )
    except PostNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except SQLAlchemyError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add comment",
        ) from exc
    return CommentRead.model_validate(comment)
