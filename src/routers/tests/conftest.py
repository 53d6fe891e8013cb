"""Shared fixtures for API tests: settings, tokens, a mocked store and auth client."""

from __future__ import annotations

import time
import uuid
from datetime import date
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import jwt as pyjwt
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.config import Settings
from src.main import create_app
from src.services import cycle_store
from src.services.auth import SupabaseAuthClient, get_auth_client

TEST_USER_ID = uuid.UUID("12345678-1234-5678-1234-567812345678")
TEST_TODAY = date(2024, 2, 15)
JWT_SECRET = "test-jwt-secret-with-at-least-32-bytes!"


def make_token(
    user_id: uuid.UUID = TEST_USER_ID,
    *,
    secret: str = JWT_SECRET,
    expires_in: int = 3600,
    audience: str = "authenticated",
) -> str:
    now = int(time.time())
    return pyjwt.encode(
        {
            "sub": str(user_id),
            "aud": audience,
            "email": "ada@example.com",
            "session_id": "sess-1",
            "iat": now,
            "exp": now + expires_in,
        },
        secret,
        algorithm="HS256",
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://demo.supabase.co",
        supabase_anon_key="anon-key",
        supabase_jwt_secret=JWT_SECRET,
        supabase_db_url="postgresql://localhost/test",
        auth_rate_limit_per_minute=3,
    )


@pytest.fixture
def auth_client() -> MagicMock:
    client = MagicMock(spec=SupabaseAuthClient)
    client.sign_up = AsyncMock()
    client.sign_in_with_password = AsyncMock()
    client.sign_out = AsyncMock()
    client.get_user = AsyncMock()
    return client


@pytest.fixture
def app(settings: Settings, auth_client: MagicMock) -> FastAPI:
    app = create_app(settings)
    app.dependency_overrides[get_auth_client] = lambda: auth_client
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> dict[str, AsyncMock]:
    """Replace every cycle_store query with an AsyncMock (no rows by default)."""
    mocks: dict[str, Any] = {
        "get_settings": AsyncMock(return_value=None),
        "upsert_settings": AsyncMock(),
        "get_log": AsyncMock(return_value=None),
        "list_logs": AsyncMock(return_value=[]),
        "upsert_log": AsyncMock(),
    }
    for name, mock in mocks.items():
        monkeypatch.setattr(cycle_store, name, mock)
    return mocks
