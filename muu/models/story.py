"""Story wall ORM models — public stories and their comments."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text, TIMESTAMP, Uuid, func
from sqlalchemy.orm import relationship

from muu.database import Base


class Story(Base):
    """A titled story posted to the public wall; author uid is optional."""

    __tablename__ = "stories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    content = Column(Text, nullable=False)
    user_id = Column(Uuid(as_uuid=True), nullable=True, index=True)

    views = Column(Integer, nullable=False, server_default="0")

    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )

    # Relationships
    comments = relationship(
        "StoryComment", back_populates="story", cascade="all, delete-orphan"
    )


class StoryComment(Base):
    """A nickname-signed comment under a story."""

    __tablename__ = "story_comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(
        Integer,
        ForeignKey("stories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    text = Column(Text, nullable=False)
    author = Column(String(50), nullable=False)

    created_at = Column(
        TIMESTAMP(timezone=True), nullable=False, server_default=func.now()
    )

    story = relationship("Story", back_populates="comments")
