"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class MessageResponse(BaseModel):
    """Plain acknowledgement body."""

    message: str = Field(..., description="Human-readable outcome")


class AuthorRef(BaseModel):
    """Expanded author reference exposing the public handle only."""

    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class UserSummary(BaseModel):
    """Expanded user reference used by subscription listings."""

    id: int
    username: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class PostRef(BaseModel):
    """Minimal post projection attached to notifications."""

    id: int
    title: str

    model_config = ConfigDict(from_attributes=True)
