# src/inkwell/models/subscription.py
"""Models capturing follow relationships between accounts."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkwell.db.session import Base
from inkwell.db.time import utcnow
from inkwell.models.user import User


class Subscription(Base):
    """Directed follow from a subscriber to an author."""

    __tablename__ = "subscription"
    __table_args__ = (
        # The unique pair is the real guard against concurrent duplicate subscribes.
        UniqueConstraint("subscriber_id", "author_id", name="uq_subscription_pair"),
        CheckConstraint("subscriber_id <> author_id", name="ck_subscription_not_self"),
        Index("ix_subscription_author_id", "author_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    subscriber_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    subscribed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    subscriber: Mapped[User] = relationship("User", foreign_keys=[subscriber_id])
    author: Mapped[User] = relationship("User", foreign_keys=[author_id])
