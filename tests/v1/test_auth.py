# tests/v1/test_auth.py
"""Tests for password registration and login."""

import pytest
from fastapi import status

from inkwell.core.security import decode_access_token
from inkwell.models import User

REGISTER_URL = "/api/v1/auth/register"
LOGIN_URL = "/api/v1/auth/login"


def _register(client, username="alice", email="a@x.com", password="secret1"):
    return client.post(
        REGISTER_URL,
        json={"username": username, "email": email, "password": password},
    )


class TestRegister:
    """Account creation."""

    def test_register_returns_token_and_summary(self, client, db_session):
        response = _register(client)

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["user"]["username"] == "alice"
        assert body["user"]["email"] == "a@x.com"
        assert "password" not in body["user"]
        assert "password_hash" not in body["user"]

        payload = decode_access_token(body["token"])
        assert payload["sub"] == str(body["user"]["id"])

        stored = db_session.query(User).filter(User.email == "a@x.com").one()
        assert stored.password_hash != "secret1"

    def test_register_normalizes_email(self, client):
        response = _register(client, email="  Alice@Example.COM ")
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["user"]["email"] == "alice@example.com"

    def test_duplicate_email_conflicts(self, client, db_session):
        assert _register(client).status_code == status.HTTP_201_CREATED

        response = _register(client, username="someone-else")
        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json() == {"message": "User already exists"}
        assert db_session.query(User).count() == 1

    def test_duplicate_username_conflicts(self, client):
        assert _register(client).status_code == status.HTTP_201_CREATED

        response = _register(client, email="other@x.com")
        assert response.status_code == status.HTTP_409_CONFLICT

    def test_short_username_is_rejected(self, client):
        response = _register(client, username="al")
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert "message" in response.json()

    def test_short_password_is_rejected(self, client):
        response = _register(client, password="12345")
        assert response.status_code == status.HTTP_400_BAD_REQUEST

    @pytest.mark.parametrize("email", ["not-an-email", "m@..x", "a@b", "two@@x.com"])
    def test_invalid_email_is_rejected(self, client, db_session, email):
        response = _register(client, username="mallory", email=email)

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["loc"] == ["body", "email"]
        assert db_session.query(User).count() == 0


class TestLogin:
    """Password login."""

    def test_register_then_login_succeeds(self, client):
        registered = _register(client).json()

        response = client.post(LOGIN_URL, json={"email": "a@x.com", "password": "secret1"})
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["user"] == registered["user"]
        assert decode_access_token(body["token"])["sub"] == str(registered["user"]["id"])

    def test_login_email_is_case_insensitive(self, client):
        _register(client)
        response = client.post(LOGIN_URL, json={"email": "A@X.COM", "password": "secret1"})
        assert response.status_code == status.HTTP_200_OK

    def test_wrong_password_and_unknown_email_fail_identically(self, client):
        _register(client)

        wrong_password = client.post(LOGIN_URL, json={"email": "a@x.com", "password": "nope123"})
        unknown_email = client.post(LOGIN_URL, json={"email": "z@x.com", "password": "secret1"})

        assert wrong_password.status_code == status.HTTP_401_UNAUTHORIZED
        assert unknown_email.status_code == status.HTTP_401_UNAUTHORIZED
        assert wrong_password.json() == unknown_email.json() == {"message": "Invalid credentials"}

    def test_google_only_account_cannot_use_password(self, client, db_session):
        db_session.add(User(username="gina", email="g@x.com", google_id="g-123"))
        db_session.commit()

        response = client.post(LOGIN_URL, json={"email": "g@x.com", "password": "anything"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_issued_token_authenticates(self, client):
        token = _register(client).json()["token"]
        response = client.get("/api/v1/posts", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == []
