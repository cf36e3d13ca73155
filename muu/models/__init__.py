"""SQLAlchemy ORM models package."""

from muu.database import Base
from muu.models.recent_self import RecentSelfComment, RecentSelfEntry
from muu.models.story import Story, StoryComment

__all__ = ["Base", "Story", "StoryComment", "RecentSelfEntry", "RecentSelfComment"]
