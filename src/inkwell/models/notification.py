# src/inkwell/models/notification.py
"""Recipient-scoped notification records."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkwell.db.session import Base
from inkwell.db.time import utcnow
from inkwell.models.post import Post
from inkwell.models.user import User

NOTIFICATION_NEW_POST = "new_post"
NOTIFICATION_COMMENT = "comment"
NOTIFICATION_LIKE = "like"
NOTIFICATION_FOLLOW = "follow"
NOTIFICATION_TYPES = (
    NOTIFICATION_NEW_POST,
    NOTIFICATION_COMMENT,
    NOTIFICATION_LIKE,
    NOTIFICATION_FOLLOW,
)


class Notification(Base):
    """Event delivered to a single recipient, unread until acknowledged."""

    __tablename__ = "notification"
    __table_args__ = (
        CheckConstraint(
            "type IN ('new_post', 'comment', 'like', 'follow')",
            name="ck_notification_type",
        ),
        Index("ix_notification_recipient_read_created", "recipient_id", "read", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipient_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
        index=True,
    )
    type: Mapped[str] = mapped_column(String(16), nullable=False, default=NOTIFICATION_NEW_POST)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    related_post_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="SET NULL"),
        nullable=True,
    )
    related_author_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=True,
    )
    read: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )

    related_post: Mapped[Post | None] = relationship("Post")
    related_author: Mapped[User | None] = relationship(
        "User",
        foreign_keys=[related_author_id],
    )
