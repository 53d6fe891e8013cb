"""Read and save the caller's cycle settings."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException

from src.dependencies import CurrentSession
from src.models.cycle import CycleSettingsRead, CycleSettingsUpdate
from src.services import cycle_store

router = APIRouter(prefix="/cycle-settings", tags=["cycle settings"])
logger = logging.getLogger("phasewise.settings")


@router.get("", response_model=CycleSettingsRead)
async def get_cycle_settings(session: CurrentSession) -> Any:
    row = await cycle_store.get_settings(session.user_id)
    if not row:
        raise HTTPException(status_code=404, detail="Cycle settings not found")
    return row


@router.put("", response_model=CycleSettingsRead)
async def save_cycle_settings(session: CurrentSession, body: CycleSettingsUpdate) -> Any:
    """Create or replace the caller's settings (one row per user)."""
    row = await cycle_store.upsert_settings(
        session.user_id, body.avg_cycle_length, body.last_period_start
    )
    logger.info("Cycle settings saved for user %s", session.user_id)
    return row
