# src/inkwell/api/v1/endpoints/notifications.py
"""Notification inbox endpoints."""

from __future__ import annotations

import math

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy import desc, func
from sqlalchemy.orm import Session, joinedload

from inkwell.api.v1.dependencies import CurrentUserDep, SessionDep
from inkwell.models import Notification
from inkwell.schemas.common import MessageResponse
from inkwell.schemas.notification import (
    ClearReadResponse,
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
    Pagination,
)
from inkwell.schemas.subscription import CountResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _get_owned_notification(db: Session, notification_id: int, recipient_id: int) -> Notification:
    notification = db.query(Notification).filter(
        Notification.id == notification_id,
        Notification.recipient_id == recipient_id,
    ).first()
    if notification is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notification not found",
        )
    return notification


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    current_user: CurrentUserDep,
    db: SessionDep,
    page: int = Query(1, ge=1, description="1-based page number"),
    limit: int = Query(20, ge=1, le=100, description="Page size"),
) -> NotificationListResponse:
    """Return one page of the caller's notifications, newest first."""
    base = db.query(Notification).filter(Notification.recipient_id == current_user.id)
    total = base.with_entities(func.count(Notification.id)).scalar() or 0
    notifications = (
        base.options(
            joinedload(Notification.related_author),
            joinedload(Notification.related_post),
        )
        .order_by(desc(Notification.created_at), desc(Notification.id))
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return NotificationListResponse(
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=int(total),
            pages=math.ceil(total / limit),
        ),
    )


@router.get("/unread-count", response_model=CountResponse)
async def unread_count(current_user: CurrentUserDep, db: SessionDep) -> CountResponse:
    """Count the caller's unread notifications."""
    count = (
        db.query(func.count(Notification.id))
        .filter(Notification.recipient_id == current_user.id, Notification.read.is_(False))
        .scalar()
    )
    return CountResponse(count=int(count or 0))


@router.patch("/mark-all-read", response_model=MarkAllReadResponse)
async def mark_all_read(current_user: CurrentUserDep, db: SessionDep) -> MarkAllReadResponse:
    """Mark every unread notification of the caller as read."""
    modified = (
        db.query(Notification)
        .filter(Notification.recipient_id == current_user.id, Notification.read.is_(False))
        .update({Notification.read: True}, synchronize_session=False)
    )
    db.commit()
    return MarkAllReadResponse(
        message="All notifications marked as read",
        modified_count=modified,
    )


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Notification:
    """Mark a single notification as read."""
    notification = _get_owned_notification(db, notification_id, current_user.id)
    notification.read = True
    db.commit()
    db.refresh(notification)
    return notification


# Declared before "/{notification_id}" so the literal path wins.
@router.delete("/clear-read", response_model=ClearReadResponse)
async def clear_read(current_user: CurrentUserDep, db: SessionDep) -> ClearReadResponse:
    """Delete all of the caller's read notifications."""
    deleted = (
        db.query(Notification)
        .filter(Notification.recipient_id == current_user.id, Notification.read.is_(True))
        .delete(synchronize_session=False)
    )
    db.commit()
    return ClearReadResponse(message="Read notifications cleared", deleted_count=deleted)


@router.delete("/{notification_id}", response_model=MessageResponse)
async def delete_notification(
    notification_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Delete one of the caller's notifications."""
    notification = _get_owned_notification(db, notification_id, current_user.id)
    db.delete(notification)
    db.commit()
    return MessageResponse(message="Notification deleted")
