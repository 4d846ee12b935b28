# src/inkwell/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .ai import router as ai_router
from .auth import router as auth_router
from .notifications import router as notifications_router
from .posts import router as posts_router
from .subscriptions import router as subscriptions_router
from .upload import router as upload_router

__all__ = [
    "ai_router",
    "auth_router",
    "notifications_router",
    "posts_router",
    "subscriptions_router",
    "upload_router",
]
