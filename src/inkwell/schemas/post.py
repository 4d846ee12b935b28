# src/inkwell/schemas/post.py
"""Post-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import AuthorRef

PostStatus = Literal["draft", "published"]


def _clean_tags(tags: list[str] | None) -> list[str] | None:
    if tags is None:
        return None
    return [tag.strip() for tag in tags if tag and tag.strip()]


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    title: str = Field(..., min_length=1, max_length=300, description="Post title")
    content: str = Field("", description="Markdown body")
    tags: list[str] = Field(default_factory=list, description="Ordered tag list")
    status: PostStatus = Field("draft", description="Visibility state")
    image: str = Field("", description="Featured image URL")

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Title is required")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, v: object) -> object:
        return [] if v is None else v

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: list[str]) -> list[str]:
        return _clean_tags(v) or []

    @field_validator("content", "image", mode="before")
    @classmethod
    def default_text(cls, v: object) -> object:
        return "" if v is None else v


class PostUpdate(BaseModel):
    """Schema for partial post updates.

    Empty strings and null leave the stored text fields alone. A tag list,
    even an empty one, replaces the stored tags.
    """

    title: str | None = Field(None, max_length=300)
    content: str | None = None
    tags: list[str] | None = None
    status: PostStatus | None = None
    image: str | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        return v.strip() if v is not None else v

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, v: list[str] | None) -> list[str] | None:
        return _clean_tags(v)

    @field_validator("status", mode="before")
    @classmethod
    def empty_status(cls, v: object) -> object:
        return None if v == "" else v


class _PostBase(BaseModel):
    id: int
    title: str
    content: str
    image: str
    tags: list[str]
    status: PostStatus
    views: int
    likes: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PostResponse(_PostBase):
    """Owner-facing post; the author is referenced by identifier only."""

    author_id: int


class PublicPostResponse(_PostBase):
    """Reader-facing post with the author expanded to its username."""

    author: AuthorRef
