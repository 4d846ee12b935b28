# src/inkwell/api/v1/endpoints/subscriptions.py
"""Subscription endpoints: follow and unfollow authors."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status
from sqlalchemy import desc, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import joinedload

from inkwell.api.v1.dependencies import CurrentUserDep, SessionDep
from inkwell.models import Subscription, User
from inkwell.schemas.common import MessageResponse
from inkwell.schemas.subscription import (
    AuthorSubscriptionResponse,
    CountResponse,
    SubscribeResponse,
    SubscriberResponse,
    SubscriptionResponse,
    SubscriptionStatusResponse,
)

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


def _already_subscribed() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail="Already subscribed to this author",
    )


@router.post(
    "/subscribe/{author_id}",
    response_model=SubscribeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def subscribe(
    author_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> SubscribeResponse:
    """Follow an author."""
    if author_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="You cannot subscribe to yourself",
        )

    author = db.query(User).filter(User.id == author_id).first()
    if author is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Author not found",
        )

    existing = db.query(Subscription).filter(
        Subscription.subscriber_id == current_user.id,
        Subscription.author_id == author_id,
    ).first()
    if existing is not None:
        raise _already_subscribed()

    subscription = Subscription(subscriber_id=current_user.id, author_id=author_id)
    db.add(subscription)
    try:
        db.commit()
    except IntegrityError as err:
        # Lost a race with a concurrent subscribe for the same pair.
        db.rollback()
        raise _already_subscribed() from err
    db.refresh(subscription)

    return SubscribeResponse(
        message="Successfully subscribed",
        subscription=SubscriptionResponse.model_validate(subscription),
    )


@router.post("/unsubscribe/{author_id}", response_model=MessageResponse)
async def unsubscribe(
    author_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> MessageResponse:
    """Stop following an author."""
    subscription = db.query(Subscription).filter(
        Subscription.subscriber_id == current_user.id,
        Subscription.author_id == author_id,
    ).first()
    if subscription is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Subscription not found",
        )

    db.delete(subscription)
    db.commit()
    return MessageResponse(message="Successfully unsubscribed")


@router.get("/status/{author_id}", response_model=SubscriptionStatusResponse)
async def subscription_status(
    author_id: int,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> SubscriptionStatusResponse:
    """Report whether the caller follows the author."""
    subscription = db.query(Subscription).filter(
        Subscription.subscriber_id == current_user.id,
        Subscription.author_id == author_id,
    ).first()
    return SubscriptionStatusResponse(
        is_subscribed=subscription is not None,
        subscription=(
            SubscriptionResponse.model_validate(subscription) if subscription else None
        ),
    )


@router.get("/my-subscriptions", response_model=list[AuthorSubscriptionResponse])
async def my_subscriptions(current_user: CurrentUserDep, db: SessionDep) -> list[Subscription]:
    """List the authors the caller follows, most recent first."""
    return (
        db.query(Subscription)
        .options(joinedload(Subscription.author))
        .filter(Subscription.subscriber_id == current_user.id)
        .order_by(desc(Subscription.subscribed_at), desc(Subscription.id))
        .all()
    )


@router.get("/subscribers", response_model=list[SubscriberResponse])
async def my_subscribers(current_user: CurrentUserDep, db: SessionDep) -> list[Subscription]:
    """List the accounts following the caller, most recent first."""
    return (
        db.query(Subscription)
        .options(joinedload(Subscription.subscriber))
        .filter(Subscription.author_id == current_user.id)
        .order_by(desc(Subscription.subscribed_at), desc(Subscription.id))
        .all()
    )


@router.get("/count/{author_id}", response_model=CountResponse)
async def subscriber_count(author_id: int, db: SessionDep) -> CountResponse:
    """Return the number of subscribers an author has. No authentication."""
    count = (
        db.query(func.count(Subscription.id))
        .filter(Subscription.author_id == author_id)
        .scalar()
    )
    return CountResponse(count=int(count or 0))
