"""Notification-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .common import AuthorRef, PostRef

NotificationType = Literal["new_post", "comment", "like", "follow"]


class NotificationResponse(BaseModel):
    """Notification with its related author and post expanded."""

    id: int
    recipient_id: int
    type: NotificationType
    title: str
    message: str
    read: bool
    created_at: datetime
    related_author: AuthorRef | None = None
    related_post: PostRef | None = None

    model_config = ConfigDict(from_attributes=True)


class Pagination(BaseModel):
    """Page metadata for offset-paginated listings."""

    page: int
    limit: int
    total: int
    pages: int


class NotificationListResponse(BaseModel):
    """One page of notifications, newest first."""

    notifications: list[NotificationResponse]
    pagination: Pagination


class MarkAllReadResponse(BaseModel):
    """Result of the bulk mark-as-read action."""

    message: str
    modified_count: int = Field(..., alias="modifiedCount")

    model_config = ConfigDict(populate_by_name=True)


class ClearReadResponse(BaseModel):
    """Result of the bulk delete of read notifications."""

    message: str
    deleted_count: int = Field(..., alias="deletedCount")

    model_config = ConfigDict(populate_by_name=True)
