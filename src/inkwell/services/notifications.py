"""Notification producers."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from inkwell.models import Notification, Post, Subscription
from inkwell.models.notification import NOTIFICATION_NEW_POST

logger = logging.getLogger(__name__)


def notify_subscribers_of_post(db: Session, post: Post) -> int:
    """Queue a ``new_post`` notification for every subscriber of the post's author.

    The caller owns the transaction; rows are added to `db` but not committed.

    Returns:
        Number of notifications created.
    """
    subscriber_ids = [
        row.subscriber_id
        for row in db.query(Subscription.subscriber_id).filter(
            Subscription.author_id == post.author_id
        )
    ]
    author_name = post.author.username if post.author is not None else "an author"
    for subscriber_id in subscriber_ids:
        db.add(
            Notification(
                recipient_id=subscriber_id,
                type=NOTIFICATION_NEW_POST,
                title=f"New post from {author_name}",
                message=post.title,
                related_post_id=post.id,
                related_author_id=post.author_id,
            )
        )
    if subscriber_ids:
        logger.info(
            "Queued %d new_post notifications for post %s",
            len(subscriber_ids),
            post.id,
        )
    return len(subscriber_ids)
