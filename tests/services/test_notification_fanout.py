# tests/services/test_notification_fanout.py
"""Tests for the new-post notification producer."""

from inkwell.models import Notification, Subscription
from inkwell.services.notifications import notify_subscribers_of_post


def _subscribe(db_session, subscriber, author):
    db_session.add(Subscription(subscriber_id=subscriber.id, author_id=author.id))
    db_session.commit()


def test_one_notification_per_subscriber(db_session, make_user, make_post, test_user):
    readers = [make_user() for _ in range(3)]
    for reader in readers:
        _subscribe(db_session, reader, test_user)
    post = make_post(test_user, title="Launch", status="published")

    created = notify_subscribers_of_post(db_session, post)
    db_session.commit()

    assert created == 3
    notifications = db_session.query(Notification).all()
    assert sorted(n.recipient_id for n in notifications) == sorted(r.id for r in readers)
    for notification in notifications:
        assert notification.type == "new_post"
        assert notification.title == "New post from alice"
        assert notification.message == "Launch"
        assert notification.related_post_id == post.id
        assert notification.related_author_id == test_user.id
        assert notification.read is False


def test_no_subscribers_no_notifications(db_session, make_post, test_user, other_user):
    _subscribe(db_session, test_user, other_user)
    post = make_post(test_user, title="Lonely", status="published")

    assert notify_subscribers_of_post(db_session, post) == 0
    db_session.commit()
    assert db_session.query(Notification).count() == 0


def test_caller_owns_the_transaction(db_session, make_post, test_user, other_user):
    _subscribe(db_session, other_user, test_user)
    post = make_post(test_user, title="Pending", status="published")

    notify_subscribers_of_post(db_session, post)
    db_session.rollback()

    assert db_session.query(Notification).count() == 0
