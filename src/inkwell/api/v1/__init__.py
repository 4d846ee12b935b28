# src/inkwell/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    ai_router,
    auth_router,
    notifications_router,
    posts_router,
    subscriptions_router,
    upload_router,
)

__all__ = [
    "ai_router",
    "auth_router",
    "notifications_router",
    "posts_router",
    "subscriptions_router",
    "upload_router",
]
