"""Pydantic models for signup, login and the current user."""

from __future__ import annotations

import uuid

from pydantic import ConfigDict, Field

from src.models.base import PhasewiseBase


class Credentials(PhasewiseBase):
    # Passwords are sent to Supabase exactly as typed
    model_config = ConfigDict(str_strip_whitespace=False)

    email: str = Field(min_length=3, max_length=320, pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=1)


class UserRead(PhasewiseBase):
    user_id: uuid.UUID
    email: str | None = None


class SessionRead(PhasewiseBase):
    access_token: str
    refresh_token: str | None = None
    expires_in: int | None = None
    token_type: str = "bearer"
    user: UserRead


class SignUpRead(PhasewiseBase):
    user: UserRead
    session: SessionRead | None = None
    confirmation_required: bool
