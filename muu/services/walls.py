"""
Wall service — persistence for the stories and recent-self walls.

Both walls share one shape: posts ranked by view count then recency, a view
counter bumped each time a post is opened, and a flat comment thread per post
(newest first). Routers pick a Wall; nothing below knows which one it serves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from muu.models import RecentSelfComment, RecentSelfEntry, Story, StoryComment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Wall:
    label: str
    post_model: Any
    comment_model: Any
    # Posts older than this drop off the wall listing but stay reachable by id.
    window: Optional[timedelta] = None


STORIES = Wall(label="Story", post_model=Story, comment_model=StoryComment)
RECENT_SELF = Wall(
    label="Recent-self entry",
    post_model=RecentSelfEntry,
    comment_model=RecentSelfComment,
    window=timedelta(hours=72),
)


class PostNotFoundError(LookupError):
    """Raised when a post id does not exist on the requested wall."""

    def __init__(self, wall: Wall, post_id: int) -> None:
        super().__init__(f"{wall.label} {post_id} not found")
        self.wall = wall
        self.post_id = post_id


async def _commit(db: AsyncSession, what: str) -> None:
    try:
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        logger.error("Failed to %s: %s", what, exc)
        raise


# ── Posts ────────────────────────────────────────────────────────────────────


async def list_posts(db: AsyncSession, wall: Wall, limit: int = 50) -> list[Any]:
    """Most-viewed first; ties go to the newest post. Honors the wall's window."""
    model = wall.post_model
    query = select(model)
    if wall.window is not None:
        cutoff = datetime.now(timezone.utc) - wall.window
        query = query.where(model.created_at >= cutoff)
    result = await db.execute(
        query
        .order_by(model.views.desc(), model.created_at.desc(), model.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def create_post(db: AsyncSession, wall: Wall, **fields: Any) -> Any:
    """Insert a post with zero views and return it with server defaults loaded."""
    post = wall.post_model(**fields, views=0)
    db.add(post)
    await _commit(db, f"create {wall.label.lower()}")
    await db.refresh(post)
    logger.info("Created %s %s", wall.label.lower(), post.id)
    return post


async def get_post(db: AsyncSession, wall: Wall, post_id: int) -> Any:
    post = await db.get(wall.post_model, post_id)
    if post is None:
        raise PostNotFoundError(wall, post_id)
    return post


async def record_view(db: AsyncSession, wall: Wall, post_id: int) -> int:
    """
    Increment the view counter and read the new total back in the same
    UPDATE ... RETURNING, so the count returned is this view's count.
    """
    model = wall.post_model
    result = await db.execute(
        update(model)
        .where(model.id == post_id)
        .values(views=model.views + 1)
        .returning(model.views)
        .execution_options(synchronize_session=False)
    )
    views = result.scalar_one_or_none()
    if views is None:
        await db.rollback()
        raise PostNotFoundError(wall, post_id)
    await _commit(db, f"record view on {wall.label.lower()} {post_id}")
    return int(views)


# ── Comments ─────────────────────────────────────────────────────────────────


async def list_comments(
    db: AsyncSession, wall: Wall, post_id: int, limit: int = 100
) -> list[Any]:
    await get_post(db, wall, post_id)
    model = wall.comment_model
    result = await db.execute(
        select(model)
        .where(model.post_id == post_id)
        .order_by(model.created_at.desc(), model.id.desc())
        .limit(limit)
    )
    return list(result.scalars().all())


async def add_comment(
    db: AsyncSession, wall: Wall, post_id: int, text: str, author: str
) -> Any:
    await get_post(db, wall, post_id)
    comment = wall.comment_model(post_id=post_id, text=text, author=author)
    db.add(comment)
    await _commit(db, f"comment on {wall.label.lower()} {post_id}")
    await db.refresh(comment)
    return comment
