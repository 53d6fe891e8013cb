"""Mood and energy trends against cycle day and phase."""

from __future__ import annotations

from dataclasses import asdict
from datetime import date

from fastapi import APIRouter, Query

from src.cycle.analytics import build_series, phase_summary
from src.dependencies import CurrentSession
from src.models.base import utc_now
from src.models.cycle import AnalyticsRead
from src.services import cycle_store

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("", response_model=AnalyticsRead)
async def get_analytics(
    session: CurrentSession,
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
) -> AnalyticsRead:
    logs = await cycle_store.list_logs(session.user_id, start_date, end_date)

    return AnalyticsRead(
        mood=[asdict(p) for p in build_series(logs, "mood")],
        energy=[asdict(p) for p in build_series(logs, "energy")],
        phases=[asdict(s) for s in phase_summary(logs)],
        generated_at=utc_now(),
    )
