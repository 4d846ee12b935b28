# src/inkwell/models/__init__.py
"""SQLAlchemy models for the Inkwell application."""

from .notification import NOTIFICATION_TYPES, Notification
from .post import POST_STATUSES, Post
from .subscription import Subscription
from .user import User

__all__ = [
    "Notification", "NOTIFICATION_TYPES",
    "Post", "POST_STATUSES",
    "Subscription",
    "User",
]
