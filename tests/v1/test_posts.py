# tests/v1/test_posts.py
"""Tests for the post endpoints."""

from datetime import datetime

from fastapi import status

from inkwell.models import Notification, Post

POSTS_URL = "/api/v1/posts"
PUBLIC_URL = "/api/v1/posts/public"


class TestCreatePost:
    """Creating posts."""

    def test_create_post_with_defaults(self, client, auth_token, test_user):
        response = client.post(POSTS_URL, json={"title": "  Hello  "}, headers=auth_token)

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["title"] == "Hello"
        assert body["content"] == ""
        assert body["image"] == ""
        assert body["tags"] == []
        assert body["status"] == "draft"
        assert body["views"] == 0
        assert body["likes"] == 0
        assert body["author_id"] == test_user.id

    def test_create_post_keeps_tag_order(self, client, auth_token):
        response = client.post(
            POSTS_URL,
            json={"title": "Tags", "tags": ["zeta", " alpha ", "", "mid"]},
            headers=auth_token,
        )
        assert response.json()["tags"] == ["zeta", "alpha", "mid"]

    def test_title_is_required(self, client, auth_token, db_session):
        missing = client.post(POSTS_URL, json={"content": "body"}, headers=auth_token)
        blank = client.post(POSTS_URL, json={"title": "   "}, headers=auth_token)

        assert missing.status_code == status.HTTP_400_BAD_REQUEST
        assert blank.status_code == status.HTTP_400_BAD_REQUEST
        assert blank.json()["message"] == "Title is required"
        assert db_session.query(Post).count() == 0

    def test_unknown_status_is_rejected(self, client, auth_token):
        response = client.post(
            POSTS_URL,
            json={"title": "Odd", "status": "archived"},
            headers=auth_token,
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_create_requires_authentication(self, client):
        response = client.post(POSTS_URL, json={"title": "Anon"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestOwnerViews:
    """Listing and reading the caller's own posts."""

    def test_list_contains_only_own_posts_newest_first(
        self, client, auth_token, test_user, other_user, make_post
    ):
        first = make_post(test_user, title="First")
        second = make_post(test_user, title="Second", status="published")
        make_post(other_user, title="Not mine")

        response = client.get(POSTS_URL, headers=auth_token)

        assert response.status_code == status.HTTP_200_OK
        assert [p["id"] for p in response.json()] == [second.id, first.id]

    def test_get_own_draft(self, client, auth_token, test_post):
        response = client.get(f"{POSTS_URL}/{test_post.id}", headers=auth_token)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["title"] == "Draft"

    def test_foreign_post_is_not_found(self, client, other_auth_token, test_post):
        response = client.get(f"{POSTS_URL}/{test_post.id}", headers=other_auth_token)
        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"message": "Post not found"}


class TestUpdatePost:
    """Merge semantics of PUT."""

    def test_update_merges_non_empty_fields(self, client, auth_token, test_post):
        response = client.put(
            f"{POSTS_URL}/{test_post.id}",
            json={"title": "Renamed", "content": "", "image": None},
            headers=auth_token,
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["title"] == "Renamed"
        assert body["content"] == "Some words"
        assert body["tags"] == ["intro"]
        assert body["status"] == "draft"

    def test_empty_tag_list_clears_tags(self, client, auth_token, test_post, db_session):
        response = client.put(f"{POSTS_URL}/{test_post.id}", json={"tags": []}, headers=auth_token)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["tags"] == []
        assert response.json()["content"] == "Some words"
        db_session.refresh(test_post)
        assert test_post.tags == []

    def test_tag_list_replaces_tags(self, client, auth_token, test_post):
        response = client.put(
            f"{POSTS_URL}/{test_post.id}",
            json={"tags": ["python", "web"]},
            headers=auth_token,
        )
        assert response.json()["tags"] == ["python", "web"]

    def test_update_refreshes_updated_at(self, client, auth_token, test_post):
        before = client.get(f"{POSTS_URL}/{test_post.id}", headers=auth_token).json()
        after = client.put(
            f"{POSTS_URL}/{test_post.id}",
            json={"content": "New words"},
            headers=auth_token,
        ).json()

        assert datetime.fromisoformat(after["updated_at"]) > datetime.fromisoformat(
            before["updated_at"]
        )
        assert after["created_at"] == before["created_at"]

    def test_empty_update_changes_nothing_but_timestamp(self, client, auth_token, test_post):
        response = client.put(f"{POSTS_URL}/{test_post.id}", json={}, headers=auth_token)
        body = response.json()
        assert body["title"] == "Draft"
        assert body["content"] == "Some words"

    def test_foreign_update_is_not_found(self, client, other_auth_token, test_post, db_session):
        response = client.put(
            f"{POSTS_URL}/{test_post.id}",
            json={"title": "Hijacked"},
            headers=other_auth_token,
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        db_session.refresh(test_post)
        assert test_post.title == "Draft"


class TestDeletePost:
    """Deleting posts."""

    def test_delete_own_post(self, client, auth_token, test_post, db_session):
        post_id = test_post.id
        response = client.delete(f"{POSTS_URL}/{post_id}", headers=auth_token)

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Post removed"}
        assert db_session.get(Post, post_id) is None

    def test_foreign_delete_is_not_found(self, client, other_auth_token, test_post, db_session):
        response = client.delete(f"{POSTS_URL}/{test_post.id}", headers=other_auth_token)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert db_session.query(Post).filter(Post.id == test_post.id).count() == 1

    def test_delete_keeps_notifications_without_link(
        self, client, auth_token, test_user, other_user, make_post, make_notification, db_session
    ):
        post = make_post(test_user, title="Gone soon", status="published")
        notification = make_notification(
            other_user,
            related_post_id=post.id,
            related_author_id=test_user.id,
        )

        client.delete(f"{POSTS_URL}/{post.id}", headers=auth_token)

        db_session.expire_all()
        kept = db_session.get(Notification, notification.id)
        assert kept is not None
        assert kept.related_post_id is None


class TestPublicPosts:
    """Reader-facing listings."""

    def test_public_list_hides_drafts(self, client, test_user, other_user, make_post):
        make_post(test_user, title="Hidden")
        older = make_post(test_user, title="Older", status="published")
        newer = make_post(other_user, title="Newer", status="published")

        response = client.get(PUBLIC_URL)

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert [p["id"] for p in body] == [newer.id, older.id]
        assert body[0]["author"] == {"id": other_user.id, "username": "bob"}
        assert "email" not in body[0]["author"]

    def test_public_draft_is_not_found(self, client, test_post):
        response = client.get(f"{PUBLIC_URL}/{test_post.id}")
        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_public_missing_post_is_not_found(self, client):
        assert client.get(f"{PUBLIC_URL}/424242").status_code == status.HTTP_404_NOT_FOUND

    def test_public_read_counts_every_view(self, client, test_user, make_post, db_session):
        post = make_post(test_user, title="Popular", status="published")

        views = [client.get(f"{PUBLIC_URL}/{post.id}").json()["views"] for _ in range(3)]

        assert views == [1, 2, 3]
        db_session.refresh(post)
        assert post.views == 3

    def test_view_does_not_touch_updated_at(self, client, test_user, make_post, db_session):
        post = make_post(test_user, title="Steady", status="published")
        before = post.updated_at

        client.get(f"{PUBLIC_URL}/{post.id}")

        db_session.refresh(post)
        assert post.updated_at == before


def test_draft_to_published_lifecycle(client, db_session):
    """A new account drafts, publishes, and the post becomes publicly readable."""
    registered = client.post(
        "/api/v1/auth/register",
        json={"username": "alice", "email": "a@x.com", "password": "secret1"},
    )
    headers = {"Authorization": f"Bearer {registered.json()['token']}"}

    created = client.post(POSTS_URL, json={"title": "Hello"}, headers=headers).json()
    assert created["status"] == "draft"
    mine = client.get(POSTS_URL, headers=headers).json()
    assert [(p["id"], p["status"]) for p in mine] == [(created["id"], "draft")]
    assert client.get(PUBLIC_URL).json() == []

    client.put(f"{POSTS_URL}/{created['id']}", json={"status": "published"}, headers=headers)

    listed = client.get(PUBLIC_URL).json()
    assert [p["id"] for p in listed] == [created["id"]]
    assert listed[0]["author"]["username"] == "alice"
    assert listed[0]["views"] == 0

    first = client.get(f"{PUBLIC_URL}/{created['id']}").json()
    second = client.get(f"{PUBLIC_URL}/{created['id']}").json()
    assert (first["views"], second["views"]) == (1, 2)
