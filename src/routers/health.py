"""Health check endpoint. Public, no auth required."""

from __future__ import annotations

import logging

import asyncpg
from fastapi import APIRouter

from src.dependencies import AppSettings
from src.models.base import utc_now
from src.services.supabase import fetchval

router = APIRouter(tags=["system"])
logger = logging.getLogger("phasewise.health")


@router.get("/health")
async def health_check(settings: AppSettings) -> dict:
    """Liveness probe with a ``SELECT 1`` against the database.

    Always 200; ``status`` is ``degraded`` when the database is unreachable.
    """
    try:
        db_ok = await fetchval("SELECT 1") == 1
    except (RuntimeError, OSError, asyncpg.PostgresError) as exc:
        logger.warning("Health check DB probe failed: %s", exc)
        db_ok = False

    return {
        "status": "healthy" if db_ok else "degraded",
        "app": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
        "database": "connected" if db_ok else "unreachable",
        "timestamp": utc_now().isoformat(),
    }
