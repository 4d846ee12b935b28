"""Subscription-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .common import UserSummary


class SubscriptionResponse(BaseModel):
    """Bare subscription record."""

    id: int
    subscriber_id: int
    author_id: int
    subscribed_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SubscribeResponse(BaseModel):
    """Acknowledgement returned after subscribing."""

    message: str
    subscription: SubscriptionResponse


class SubscriptionStatusResponse(BaseModel):
    """Whether the caller follows a given author."""

    is_subscribed: bool = Field(..., alias="isSubscribed")
    subscription: SubscriptionResponse | None = None

    model_config = ConfigDict(populate_by_name=True)


class AuthorSubscriptionResponse(SubscriptionResponse):
    """Subscription listed from the subscriber's side."""

    author: UserSummary


class SubscriberResponse(SubscriptionResponse):
    """Subscription listed from the author's side."""

    subscriber: UserSummary


class CountResponse(BaseModel):
    """Simple counter payload."""

    count: int
