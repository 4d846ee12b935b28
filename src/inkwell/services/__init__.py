# src/inkwell/services/__init__.py
"""Business logic services for the Inkwell application."""

from .ai import AIProviderError, CompletionClient
from .google_oauth import GoogleOAuthClient, OAuthError
from .notifications import notify_subscribers_of_post
from .storage import UploadStorage

__all__ = [
    "AIProviderError",
    "CompletionClient",
    "GoogleOAuthClient",
    "OAuthError",
    "UploadStorage",
    "notify_subscribers_of_post",
]
