# src/inkwell/api/v1/endpoints/auth.py
"""Authentication endpoints for the Inkwell API."""

from __future__ import annotations

import json
import logging
from typing import Annotated
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import RedirectResponse
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError

from inkwell.api.v1.dependencies import SessionDep
from inkwell.core.security import create_access_token, hash_password, verify_password
from inkwell.core.settings import settings
from inkwell.models import User
from inkwell.schemas.common import UserSummary
from inkwell.schemas.user import AuthResponse, LoginRequest, RegisterRequest
from inkwell.services.google_oauth import (
    GoogleOAuthClient,
    OAuthError,
    create_state,
    find_or_create_user,
    get_google_client,
    verify_state,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])

GoogleClientDep = Annotated[GoogleOAuthClient, Depends(get_google_client)]

INVALID_CREDENTIALS = "Invalid credentials"


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        token=create_access_token(user.id),
        user=UserSummary.model_validate(user),
    )


def _frontend_redirect(path: str, params: dict[str, str]) -> RedirectResponse:
    url = f"{settings.frontend_url.rstrip('/')}{path}?{urlencode(params)}"
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


@router.post(
    "/register",
    summary="Create an account with a password",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
)
async def register_user(payload: RegisterRequest, db: SessionDep) -> AuthResponse:
    """Register a new account and return a bearer token for it."""
    existing = db.query(User).filter(
        or_(User.email == payload.email, User.username == payload.username)
    ).first()
    if existing is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User already exists",
        )

    user = User(
        username=payload.username,
        email=payload.email,
        password_hash=hash_password(payload.password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="User already exists",
        ) from err
    db.refresh(user)
    logger.info("Registered account %s", user.id)
    return _auth_response(user)


@router.post(
    "/login",
    summary="Authenticate with email and password",
    response_model=AuthResponse,
)
async def login_user(payload: LoginRequest, db: SessionDep) -> AuthResponse:
    """Exchange credentials for a bearer token.

    Unknown emails and wrong passwords fail identically.
    """
    user = db.query(User).filter(User.email == payload.email).first()
    if user is None or not verify_password(payload.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
        )
    return _auth_response(user)


@router.get("/google", summary="Start Google sign-in")
async def google_login(google: GoogleClientDep) -> RedirectResponse:
    """Redirect the browser to Google's consent screen."""
    if not google.enabled:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Google sign-in is not configured",
        )
    return RedirectResponse(
        google.authorization_url(create_state()),
        status_code=status.HTTP_307_TEMPORARY_REDIRECT,
    )


@router.get("/google/callback", summary="Finish Google sign-in")
async def google_callback(
    db: SessionDep,
    google: GoogleClientDep,
    code: str | None = Query(None),
    state: str | None = Query(None),
    error: str | None = Query(None),
) -> RedirectResponse:
    """Complete the authorization-code flow and hand the token to the frontend."""
    try:
        if error:
            raise OAuthError(f"Google returned error: {error}")
        verify_state(state)
        if not code:
            raise OAuthError("Missing authorization code")
        profile = await google.fetch_profile(code)
        user = find_or_create_user(db, profile)
    except OAuthError as exc:
        logger.warning("Google sign-in failed: %s", exc)
        return _frontend_redirect("/login", {"error": "oauth_failed"})

    token = create_access_token(user.id)
    user_payload = json.dumps(
        UserSummary.model_validate(user).model_dump(),
        separators=(",", ":"),
    )
    return _frontend_redirect("/auth/callback", {"token": token, "user": user_payload})
