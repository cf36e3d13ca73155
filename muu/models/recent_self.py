"""Recent-self wall ORM models — short status entries and their comments."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, TIMESTAMP, Uuid, func
from sqlalchemy.orm import relationship

from muu.database import Base


class RecentSelfEntry(Base):
    """
    A short "how I've been lately" note. Unlike stories, an entry always
    belongs to an anonymous user.
    """

    __tablename__ = "recent_self_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    text = Column(Text, nullable=False)
    user_id = Column(Uuid(as_uuid=True), nullable=False, index=True)

    views = Column(Integer, nullable=False, server_default="0")

    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )

    # Relationships
    comments = relationship(
        "RecentSelfComment", back_populates="entry", cascade="all, delete-orphan"
    )


class RecentSelfComment(Base):
    """A nickname-signed comment under a recent-self entry."""

    __tablename__ = "recent_self_comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(
        Integer,
        ForeignKey("recent_self_entries.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text = Column(Text, nullable=False)
    author = Column(String(50), nullable=False)

    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )

    entry = relationship("RecentSelfEntry", back_populates="comments")
