"""Signup, login, logout and current-user lookup via Supabase Auth."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from src.dependencies import CurrentSession
from src.models.auth import Credentials, SessionRead, SignUpRead, UserRead
from src.services.auth import (
    AuthServiceError,
    AuthSession,
    AuthUser,
    SupabaseAuthClient,
    get_auth_client,
)

router = APIRouter(prefix="/auth", tags=["auth"])
logger = logging.getLogger("phasewise.auth")

AuthClient = Annotated[SupabaseAuthClient, Depends(get_auth_client)]


def _user_read(user: AuthUser) -> UserRead:
    return UserRead(user_id=user.id, email=user.email)


def _session_read(session: AuthSession) -> SessionRead:
    return SessionRead(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
        token_type=session.token_type,
        user=_user_read(session.user),
    )


def _as_http_error(exc: AuthServiceError) -> HTTPException:
    # Surface client errors as-is; anything else is an upstream failure
    status = exc.status_code if 400 <= exc.status_code < 500 else 502
    return HTTPException(status_code=status, detail=exc.message)


@router.post("/signup", response_model=SignUpRead, status_code=201)
async def signup(body: Credentials, client: AuthClient) -> SignUpRead:
    try:
        result = await client.sign_up(body.email, body.password)
    except AuthServiceError as exc:
        raise _as_http_error(exc) from exc

    logger.info("User %s signed up", result.user.id)
    return SignUpRead(
        user=_user_read(result.user),
        session=_session_read(result.session) if result.session else None,
        confirmation_required=result.session is None,
    )


@router.post("/login", response_model=SessionRead)
async def login(body: Credentials, client: AuthClient) -> SessionRead:
    try:
        session = await client.sign_in_with_password(body.email, body.password)
    except AuthServiceError as exc:
        raise _as_http_error(exc) from exc
    return _session_read(session)


@router.post("/logout", status_code=204)
async def logout(session: CurrentSession, client: AuthClient) -> None:
    try:
        await client.sign_out(session.access_token)
    except AuthServiceError as exc:
        raise _as_http_error(exc) from exc
    logger.info("User %s signed out (session %s)", session.user_id, session.session_id)


@router.get("/me", response_model=UserRead)
async def me(session: CurrentSession, client: AuthClient) -> UserRead:
    """Confirm the token with Supabase and return the user behind it."""
    try:
        user = await client.get_user(session.access_token)
    except AuthServiceError as exc:
        raise _as_http_error(exc) from exc
    return _user_read(user)
