"""Cycle day and phase for a single date."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Query

from src.cycle.phase import resolve_phase
from src.dependencies import CurrentSession
from src.models.base import utc_today
from src.models.cycle import PhaseRead
from src.services import cycle_store

router = APIRouter(prefix="/phase", tags=["phase"])


@router.get("", response_model=PhaseRead)
async def get_phase(
    session: CurrentSession,
    target_date: date | None = Query(default=None, alias="date"),
) -> PhaseRead:
    """Resolve the phase for ``date`` (default: today, UTC).

    Uses the current settings and whatever flow is logged for that date.
    """
    target = target_date or utc_today()
    settings = await cycle_store.get_settings(session.user_id) or {}
    log = await cycle_store.get_log(session.user_id, target) or {}

    result = resolve_phase(
        target,
        last_period_start=settings.get("last_period_start"),
        avg_cycle_length=settings.get("avg_cycle_length"),
        logged_flow=log.get("flow"),
    )
    return PhaseRead.from_result(target, result)
