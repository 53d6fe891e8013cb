"""Shared FastAPI dependencies injected into route handlers."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, HTTPException, Request

from src.config import Settings


@dataclass(frozen=True)
class SessionContext:
    """Authenticated caller, extracted from a verified Supabase access token.

    Passed explicitly into every data-access call so nothing below the
    router reads ambient auth state.
    """

    user_id: uuid.UUID  # Supabase auth user id (``sub`` claim)
    access_token: str
    email: str | None = None
    session_id: str | None = None


async def get_current_session(request: Request) -> SessionContext:
    """Return the session set by the auth middleware on ``request.state``."""
    session: SessionContext | None = getattr(request.state, "session", None)
    if session is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return session


def get_app_settings(request: Request) -> Settings:
    """Settings the app was created with (see ``create_app``)."""
    return request.app.state.settings


# Annotated shortcuts for route signatures
CurrentSession = Annotated[SessionContext, Depends(get_current_session)]
AppSettings = Annotated[Settings, Depends(get_app_settings)]
