# src/inkwell/models/post.py
"""SQLAlchemy models for blog posts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkwell.db.session import Base
from inkwell.db.time import utcnow
from inkwell.models.user import User

POST_STATUS_DRAFT = "draft"
POST_STATUS_PUBLISHED = "published"
POST_STATUSES = (POST_STATUS_DRAFT, POST_STATUS_PUBLISHED)


class Post(Base):
    """Markdown article owned by exactly one author.

    Drafts are visible only to their author; published posts are listed
    publicly and count their views.
    """

    __tablename__ = "post"
    __table_args__ = (
        CheckConstraint("status IN ('draft', 'published')", name="ck_post_status"),
        Index("ix_post_author_created", "author_id", "created_at"),
        Index("ix_post_status_created", "status", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False, default="")
    image: Mapped[str] = mapped_column(Text, nullable=False, default="")
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    # Ordered list of tag strings.
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=POST_STATUS_DRAFT,
    )
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    author: Mapped[User] = relationship("User", lazy="joined")

    @property
    def is_published(self) -> bool:
        """Return True when the post is publicly visible."""
        return self.status == POST_STATUS_PUBLISHED
