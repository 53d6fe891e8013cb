"""In-memory sliding-window rate limiter for the credential endpoints.

Only login and signup are limited; authenticated routes are already scoped
to a verified user.  State is per process, which is enough for a single
instance deployment.

Clients are keyed by the socket peer address.  ``X-Forwarded-For`` is only
read when ``trust_forwarded_for`` is set, and then only its right-most hop,
the one appended by our own proxy.
"""

from __future__ import annotations

import time
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from src.config import Settings, get_settings

LIMITED_PATHS: frozenset[str] = frozenset(
    {"/api/v1/auth/login", "/api/v1/auth/signup"}
)


class AuthRateLimitMiddleware(BaseHTTPMiddleware):
    """Per-client, per-path sliding window limiter for credential endpoints."""

    def __init__(
        self,
        app: Any,
        settings: Settings | None = None,
        window_seconds: int = 60,
    ) -> None:
        super().__init__(app)
        s = settings or get_settings()
        self._max_requests = s.auth_rate_limit_per_minute
        self._trust_forwarded_for = s.trust_forwarded_for
        self._window_seconds = window_seconds
        # (client, path) -> request timestamps inside the window
        self._requests: dict[tuple[str, str], list[float]] = {}

    def _client_key(self, request: Request) -> str:
        if self._trust_forwarded_for:
            forwarded = request.headers.get("X-Forwarded-For")
            if forwarded:
                return forwarded.split(",")[-1].strip()
        return request.client.host if request.client else "unknown"

    def _sweep(self, now: float) -> None:
        """Drop every key whose newest hit has left the window."""
        cutoff = now - self._window_seconds
        stale = [key for key, hits in self._requests.items() if not hits or hits[-1] <= cutoff]
        for key in stale:
            del self._requests[key]

    def _check(self, key: tuple[str, str], now: float) -> int | None:
        """Record a hit for ``key``; return Retry-After seconds if over the limit."""
        self._sweep(now)
        cutoff = now - self._window_seconds
        hits = [t for t in self._requests.get(key, []) if t > cutoff]

        if len(hits) >= self._max_requests:
            self._requests[key] = hits
            return max(int(self._window_seconds - (now - hits[0])), 1)

        hits.append(now)
        self._requests[key] = hits
        return None

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if request.method != "POST" or path not in LIMITED_PATHS:
            return await call_next(request)

        retry_after = self._check((self._client_key(request), path), time.monotonic())
        if retry_after is not None:
            return Response(
                content='{"detail":"Too many attempts, try again later"}',
                status_code=429,
                media_type="application/json",
                headers={"Retry-After": str(retry_after)},
            )

        return await call_next(request)
