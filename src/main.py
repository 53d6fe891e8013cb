"""Phasewise API: FastAPI application entry point.

Run locally:
    uvicorn src.main:create_app --factory --reload --port 8000
"""

from __future__ import annotations

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.config import Settings, get_settings
from src.middleware.rate_limit import AuthRateLimitMiddleware
from src.middleware.supabase_auth import SupabaseAuthMiddleware
from src.routers import analytics, auth, cycle_settings, daily_logs, health, phase
from src.services.supabase import close_pool, init_pool

# ---------- Logging ----------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)-8s %(name)s — %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("phasewise")


# ---------- Lifespan ----------

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup / shutdown hooks."""
    settings: Settings = app.state.settings
    logging.getLogger().setLevel(settings.log_level.upper())
    logger.info(
        "Starting Phasewise API v%s [%s]",
        settings.app_version,
        settings.environment,
    )
    await init_pool(settings)
    yield
    await close_pool()
    logger.info("Phasewise API shut down")


# ---------- App factory ----------

def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Phasewise API",
        description=(
            "Daily mood, energy and flow logging with cycle-phase "
            "estimation and phase-aware trends."
        ),
        version=settings.app_version,
        debug=settings.debug,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # ---------- Middleware (last added is outermost) ----------

    # Brute-force protection on login / signup
    app.add_middleware(AuthRateLimitMiddleware, settings=settings)

    # Supabase JWT authentication
    app.add_middleware(SupabaseAuthMiddleware, settings=settings)

    # CORS is outermost so it can answer preflight before auth
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Retry-After"],
    )

    # ---------- Health check (outside v1 prefix, always at /health) ----------
    app.include_router(health.router)

    # ---------- API v1 routes ----------
    v1_prefix = "/api/v1"

    app.include_router(auth.router, prefix=v1_prefix)
    app.include_router(cycle_settings.router, prefix=v1_prefix)
    app.include_router(daily_logs.router, prefix=v1_prefix)
    app.include_router(phase.router, prefix=v1_prefix)
    app.include_router(analytics.router, prefix=v1_prefix)

    return app
