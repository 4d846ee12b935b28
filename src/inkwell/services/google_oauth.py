"""Google OAuth 2.0 authorization-code login.

The flow is stateless on the server: the ``state`` parameter is a short-lived
JWT signed with the application secret, so the callback can verify it without
a session store.
"""

from __future__ import annotations

import logging
import re
import secrets
from dataclasses import dataclass
from datetime import timedelta
from urllib.parse import urlencode

import httpx
from jose import JWTError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inkwell.core.security import create_access_token, decode_access_token
from inkwell.core.settings import settings
from inkwell.models import User

logger = logging.getLogger(__name__)

AUTHORIZATION_URL = "https://accounts.google.com/o/oauth2/v2/auth"
TOKEN_URL = "https://oauth2.googleapis.com/token"
USERINFO_URL = "https://openidconnect.googleapis.com/v1/userinfo"
SCOPES = ("openid", "email", "profile")
STATE_PURPOSE = "google_oauth_state"
MIN_USERNAME_LENGTH = 3
MAX_USERNAME_LENGTH = 64
HTTP_OK = 200


class OAuthError(RuntimeError):
    """Raised when any step of the federated login fails."""


@dataclass(frozen=True)
class GoogleProfile:
    """Subset of the OpenID Connect userinfo document we rely on."""

    google_id: str
    email: str
    display_name: str


def create_state() -> str:
    """Return a signed, expiring state token for the consent redirect."""
    return create_access_token(
        secrets.token_hex(8),
        extra_claims={"purpose": STATE_PURPOSE},
        expires_delta=timedelta(seconds=settings.oauth_state_ttl_seconds),
    )


def verify_state(state: str | None) -> None:
    """Validate a state token produced by :func:`create_state`."""
    if not state:
        raise OAuthError("Missing OAuth state")
    try:
        payload = decode_access_token(state)
    except JWTError as err:
        raise OAuthError("Invalid OAuth state") from err
    if payload.get("purpose") != STATE_PURPOSE:
        raise OAuthError("Invalid OAuth state")


class GoogleOAuthClient:
    """HTTP client for Google's authorization-code endpoints."""

    def __init__(
        self,
        *,
        client_id: str | None,
        client_secret: str | None,
        redirect_uri: str,
        timeout_seconds: float,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def authorization_url(self, state: str) -> str:
        """Return the consent-screen URL the browser should be sent to."""
        params = {
            "client_id": self.client_id,
            "redirect_uri": self.redirect_uri,
            "response_type": "code",
            "scope": " ".join(SCOPES),
            "state": state,
        }
        return f"{AUTHORIZATION_URL}?{urlencode(params)}"

    async def fetch_profile(self, code: str) -> GoogleProfile:
        """Exchange `code` for an access token and load the user's profile."""
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "code": code,
            "redirect_uri": self.redirect_uri,
            "grant_type": "authorization_code",
        }
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                transport=self._transport,
            ) as client:
                token_response = await client.post(
                    TOKEN_URL,
                    data=data,
                    headers={"Accept": "application/json"},
                )
                if token_response.status_code != HTTP_OK:
                    raise OAuthError(f"Token exchange failed: {token_response.status_code}")
                access_token = token_response.json().get("access_token")
                if not access_token:
                    raise OAuthError("Token exchange returned no access token")

                profile_response = await client.get(
                    USERINFO_URL,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                if profile_response.status_code != HTTP_OK:
                    raise OAuthError(f"Profile request failed: {profile_response.status_code}")
                info = profile_response.json()
        except httpx.HTTPError as exc:
            raise OAuthError(f"Request failed: {exc}") from exc
        except ValueError as exc:
            raise OAuthError("Malformed response from Google") from exc

        email = info.get("email")
        google_id = info.get("sub")
        if not email or not google_id:
            raise OAuthError("Google profile is missing an email address")
        return GoogleProfile(
            google_id=str(google_id),
            email=str(email).strip().lower(),
            display_name=str(info.get("name") or ""),
        )


def _username_base(profile: GoogleProfile) -> str:
    base = re.sub(r"\s+", " ", profile.display_name).strip()
    if len(base) < MIN_USERNAME_LENGTH:
        base = profile.email.split("@", 1)[0]
    if len(base) < MIN_USERNAME_LENGTH:
        base = f"user-{base}"
    return base[: MAX_USERNAME_LENGTH - 8]


def _available_username(db: Session, base: str) -> str:
    candidate = base
    suffix = 1
    while db.query(User.id).filter(User.username == candidate).first() is not None:
        suffix += 1
        candidate = f"{base}{suffix}"
    return candidate


def find_or_create_user(db: Session, profile: GoogleProfile) -> User:
    """Return the account for `profile`, creating or linking it as needed.

    Accounts are matched by email. An existing password account gains the
    Google identifier on first federated login.

    Raises:
        OAuthError: If the account can be neither created nor found.
    """
    user = db.query(User).filter(User.email == profile.email).first()
    if user is not None:
        if not user.google_id:
            user.google_id = profile.google_id
            db.commit()
            db.refresh(user)
        return user

    user = User(
        username=_available_username(db, _username_base(profile)),
        email=profile.email,
        google_id=profile.google_id,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        # A concurrent callback created the account (or took the username) first.
        db.rollback()
        existing = db.query(User).filter(User.email == profile.email).first()
        if existing is None:
            raise OAuthError("Could not create account") from err
        return existing
    db.refresh(user)
    logger.info("Created account %s from Google login", user.id)
    return user


_google_client: GoogleOAuthClient | None = None


def get_google_client() -> GoogleOAuthClient:
    """Return the process-wide Google OAuth client built from settings."""
    global _google_client
    if _google_client is None:
        _google_client = GoogleOAuthClient(
            client_id=settings.google_client_id,
            client_secret=settings.google_client_secret,
            redirect_uri=settings.google_redirect_uri,
            timeout_seconds=settings.oauth_http_timeout_seconds,
        )
    return _google_client
