# src/inkwell/api/v1/endpoints/posts.py
"""Post-related endpoints for the Inkwell API."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import desc
from sqlalchemy.orm import Session

from inkwell.api.v1.dependencies import CurrentUserDep, SessionDep
from inkwell.core.settings import settings
from inkwell.db.time import utcnow
from inkwell.models import Notification, Post
from inkwell.models.post import POST_STATUS_PUBLISHED
from inkwell.schemas.common import MessageResponse
from inkwell.schemas.post import PostCreate, PostResponse, PostUpdate, PublicPostResponse
from inkwell.services.notifications import notify_subscribers_of_post

router = APIRouter(prefix="/posts", tags=["posts"])

# Text fields merged by update_post; falsy submissions keep the stored value.
MERGEABLE_FIELDS = ("title", "content", "status", "image")


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Post not found",
    )


def _get_owned_post(db: Session, post_id: int, owner_id: int) -> Post:
    """Return the caller's post, reporting foreign posts as missing."""
    post = db.query(Post).filter(Post.id == post_id, Post.author_id == owner_id).first()
    if post is None:
        raise _not_found()
    return post


# Public routes are declared before "/{post_id}" so "public" is never parsed as an id.
@router.get("/public", response_model=list[PublicPostResponse])
async def list_public_posts(db: SessionDep) -> list[Post]:
    """List published posts, newest first, with author usernames."""
    return (
        db.query(Post)
        .filter(Post.status == POST_STATUS_PUBLISHED)
        .order_by(desc(Post.created_at), desc(Post.id))
        .all()
    )


@router.get("/public/{post_id}", response_model=PublicPostResponse)
async def get_public_post(post_id: int, db: SessionDep) -> Post:
    """Get a published post and count the view.

    Every successful fetch increments ``views``; repeated reads are not
    deduplicated.
    """
    updated = (
        db.query(Post)
        .filter(Post.id == post_id, Post.status == POST_STATUS_PUBLISHED)
        .update({Post.views: Post.views + 1}, synchronize_session=False)
    )
    if not updated:
        db.rollback()
        raise _not_found()
    db.commit()

    post = db.query(Post).filter(Post.id == post_id).first()
    if post is None:
        raise _not_found()
    db.refresh(post)
    return post


@router.get("", response_model=list[PostResponse])
async def list_my_posts(current_user: CurrentUserDep, db: SessionDep) -> list[Post]:
    """List the caller's posts, drafts included, newest first."""
    return (
        db.query(Post)
        .filter(Post.author_id == current_user.id)
        .order_by(desc(Post.created_at), desc(Post.id))
        .all()
    )


@router.get("/{post_id}", response_model=PostResponse)
async def get_my_post(post_id: int, current_user: CurrentUserDep, db: SessionDep) -> Post:
    """Get one of the caller's posts."""
    return _get_owned_post(db, post_id, current_user.id)


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Post:
    """Create a draft or published post owned by the caller."""
    now = utcnow()
    post = Post(
        title=post_data.title,
        content=post_data.content,
        tags=post_data.tags,
        status=post_data.status,
        image=post_data.image,
        author_id=current_user.id,
        created_at=now,
        updated_at=now,
    )
    db.add(post)
    db.flush()

    if post.is_published and settings.notify_on_publish:
        notify_subscribers_of_post(db, post)

    db.commit()
    db.refresh(post)
    return post


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    post_data: PostUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Post:
    """Merge the provided non-empty fields over the caller's post."""
    post = _get_owned_post(db, post_id, current_user.id)
    was_published = post.is_published

    for field in MERGEABLE_FIELDS:
        value = getattr(post_data, field)
        if value:
            setattr(post, field, value)
    # An explicit list replaces the tags, so [] clears them.
    if post_data.tags is not None:
        post.tags = post_data.tags
    post.updated_at = utcnow()

    if post.is_published and not was_published and settings.notify_on_publish:
        notify_subscribers_of_post(db, post)

    db.commit()
    db.refresh(post)
    return post


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Delete one of the caller's posts.

    Notifications that pointed at the post are kept with the link cleared.
    """
    post = _get_owned_post(db, post_id, current_user.id)
    db.query(Notification).filter(Notification.related_post_id == post.id).update(
        {Notification.related_post_id: None},
        synchronize_session=False,
    )
    db.delete(post)
    db.commit()
    return MessageResponse(message="Post removed")
