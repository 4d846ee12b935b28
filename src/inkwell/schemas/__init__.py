# src/inkwell/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .ai import AIRequest, AIResponse
from .common import AuthorRef, MessageResponse, PostRef, UserSummary
from .notification import NotificationListResponse, NotificationResponse
from .post import PostCreate, PostResponse, PostUpdate, PublicPostResponse
from .subscription import SubscriptionResponse, SubscriptionStatusResponse
from .upload import UploadResponse
from .user import AuthResponse, LoginRequest, RegisterRequest

__all__ = [
    "AIRequest", "AIResponse",
    "AuthorRef", "MessageResponse", "PostRef", "UserSummary",
    "NotificationListResponse", "NotificationResponse",
    "PostCreate", "PostResponse", "PostUpdate", "PublicPostResponse",
    "SubscriptionResponse", "SubscriptionStatusResponse",
    "UploadResponse",
    "AuthResponse", "LoginRequest", "RegisterRequest",
]
