"""Daily mood / energy / flow logs, one per user per date."""

from __future__ import annotations

from datetime import date
from typing import Any

from fastapi import APIRouter, HTTPException, Query

from src.cycle.phase import resolve_phase
from src.dependencies import CurrentSession
from src.models.base import utc_today
from src.models.cycle import DailyLogRead, DailyLogUpsert
from src.services import cycle_store

router = APIRouter(prefix="/daily-logs", tags=["daily logs"])


@router.get("", response_model=list[DailyLogRead])
async def list_logs(
    session: CurrentSession,
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
) -> Any:
    return await cycle_store.list_logs(session.user_id, start_date, end_date)


@router.get("/{log_date}", response_model=DailyLogRead)
async def get_log(log_date: date, session: CurrentSession) -> Any:
    row = await cycle_store.get_log(session.user_id, log_date)
    if not row:
        raise HTTPException(status_code=404, detail="Daily log not found")
    return row


@router.put("/{log_date}", response_model=DailyLogRead)
async def save_log(log_date: date, session: CurrentSession, body: DailyLogUpsert) -> Any:
    """Create or overwrite the log for ``log_date``.

    The cycle day and phase label are resolved from the settings in effect
    now and the submitted flow, then stored alongside the entry.
    """
    if log_date > utc_today():
        raise HTTPException(status_code=400, detail="Future logging is disabled")

    settings = await cycle_store.get_settings(session.user_id) or {}
    result = resolve_phase(
        log_date,
        last_period_start=settings.get("last_period_start"),
        avg_cycle_length=settings.get("avg_cycle_length"),
        logged_flow=body.flow,
    )

    return await cycle_store.upsert_log(
        session.user_id,
        log_date,
        mood=body.mood,
        energy=body.energy,
        flow=body.flow.value,
        notes=body.notes,
        cycle_day=result.cycle_day,
        cycle_phase=result.label,
    )
