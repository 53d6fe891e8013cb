"""Supabase Auth (GoTrue) REST client.

Endpoints used:
    POST /auth/v1/signup                     create an email/password user
    POST /auth/v1/token?grant_type=password  exchange credentials for a session
    POST /auth/v1/logout                     revoke the session's refresh tokens
    GET  /auth/v1/user                       user behind an access token
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Any

import httpx

from src.config import Settings, get_settings
from src.dependencies import AppSettings

logger = logging.getLogger("phasewise.auth.gotrue")


class AuthServiceError(Exception):
    """Raised when GoTrue rejects a request or cannot be reached."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


@dataclass(frozen=True)
class AuthUser:
    id: uuid.UUID
    email: str | None = None


@dataclass(frozen=True)
class AuthSession:
    access_token: str
    refresh_token: str | None
    expires_in: int | None
    token_type: str
    user: AuthUser


@dataclass(frozen=True)
class SignUpResult:
    """Outcome of a signup.

    ``session`` is None when the project requires email confirmation before
    the first login.
    """

    user: AuthUser
    session: AuthSession | None = None


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if not isinstance(body, dict):
        return str(body)
    for key in ("msg", "error_description", "message", "error"):
        if body.get(key):
            return str(body[key])
    return response.reason_phrase


def _parse_user(data: dict[str, Any]) -> AuthUser:
    return AuthUser(id=uuid.UUID(data["id"]), email=data.get("email"))


def _parse_session(data: dict[str, Any]) -> AuthSession:
    return AuthSession(
        access_token=data["access_token"],
        refresh_token=data.get("refresh_token"),
        expires_in=data.get("expires_in"),
        token_type=data.get("token_type", "bearer"),
        user=_parse_user(data["user"]),
    )


class SupabaseAuthClient:
    """Thin async wrapper over the GoTrue REST API."""

    def __init__(
        self,
        settings: Settings | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            settings:    App settings (Supabase URL + anon key).
            http_client: Optional pre-configured httpx client (for testing).
        """
        s = settings or get_settings()
        self._base_url = s.supabase_url.rstrip("/") + "/auth/v1"
        self._anon_key = s.supabase_anon_key
        self._http_client = http_client

    def _build_headers(self, access_token: str | None = None) -> dict[str, str]:
        headers = {"apikey": self._anon_key, "Content-Type": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, str] | None = None,
        access_token: str | None = None,
    ) -> dict[str, Any]:
        """Send a request to GoTrue and return the decoded body.

        Raises:
            AuthServiceError: On transport failures and non-2xx responses.
        """
        url = f"{self._base_url}{path}"
        headers = self._build_headers(access_token)

        try:
            if self._http_client:
                response = await self._http_client.request(
                    method, url, json=json, params=params, headers=headers
                )
            else:
                async with httpx.AsyncClient(timeout=10.0) as client:
                    response = await client.request(
                        method, url, json=json, params=params, headers=headers
                    )
        except httpx.HTTPError as exc:
            logger.error("GoTrue %s %s failed: %s", method, path, exc)
            raise AuthServiceError(503, "Authentication service unavailable") from exc

        if response.is_error:
            message = _error_message(response)
            logger.warning("GoTrue %s %s -> %d: %s", method, path, response.status_code, message)
            raise AuthServiceError(response.status_code, message)

        if response.status_code == 204 or not response.content:
            return {}
        return response.json()

    async def sign_up(self, email: str, password: str) -> SignUpResult:
        data = await self._request(
            "POST", "/signup", json={"email": email, "password": password}
        )
        if "access_token" in data:
            session = _parse_session(data)
            return SignUpResult(user=session.user, session=session)
        # Confirmation pending: GoTrue returns the bare user object
        return SignUpResult(user=_parse_user(data))

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        data = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        return _parse_session(data)

    async def sign_out(self, access_token: str) -> None:
        await self._request("POST", "/logout", access_token=access_token)

    async def get_user(self, access_token: str) -> AuthUser:
        data = await self._request("GET", "/user", access_token=access_token)
        return _parse_user(data)


def get_auth_client(settings: AppSettings) -> SupabaseAuthClient:
    """FastAPI dependency; override in tests."""
    return SupabaseAuthClient(settings)
