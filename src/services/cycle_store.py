"""Queries against ``user_cycle_settings`` and ``daily_logs``.

Every function takes the caller's ``user_id`` explicitly; it is used both
in the WHERE clause and as the RLS identity on the connection.
"""

from __future__ import annotations

import uuid
from datetime import date
from typing import Any

from src.services.supabase import fetch, fetchrow


async def get_settings(user_id: uuid.UUID) -> dict[str, Any] | None:
    row = await fetchrow(
        "SELECT * FROM user_cycle_settings WHERE user_id = $1",
        user_id,
        user_id=user_id,
    )
    return dict(row) if row else None


async def upsert_settings(
    user_id: uuid.UUID, avg_cycle_length: int, last_period_start: date
) -> dict[str, Any]:
    row = await fetchrow(
        """
        INSERT INTO user_cycle_settings (user_id, avg_cycle_length, last_period_start)
        VALUES ($1, $2, $3)
        ON CONFLICT (user_id) DO UPDATE SET
            avg_cycle_length = EXCLUDED.avg_cycle_length,
            last_period_start = EXCLUDED.last_period_start,
            updated_at = NOW()
        RETURNING *
        """,
        user_id, avg_cycle_length, last_period_start,
        user_id=user_id,
    )
    return dict(row)


async def get_log(user_id: uuid.UUID, log_date: date) -> dict[str, Any] | None:
    row = await fetchrow(
        "SELECT * FROM daily_logs WHERE user_id = $1 AND date = $2",
        user_id, log_date,
        user_id=user_id,
    )
    return dict(row) if row else None


async def list_logs(
    user_id: uuid.UUID,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[dict[str, Any]]:
    """All logs for the user in ``[start_date, end_date]``, oldest first."""
    conditions = ["user_id = $1"]
    params: list[Any] = [user_id]
    idx = 2

    if start_date:
        conditions.append(f"date >= ${idx}")
        params.append(start_date)
        idx += 1
    if end_date:
        conditions.append(f"date <= ${idx}")
        params.append(end_date)
        idx += 1

    where = " AND ".join(conditions)
    rows = await fetch(
        f"SELECT * FROM daily_logs WHERE {where} ORDER BY date ASC",
        *params,
        user_id=user_id,
    )
    return [dict(r) for r in rows]


async def upsert_log(
    user_id: uuid.UUID,
    log_date: date,
    *,
    mood: int | None,
    energy: int | None,
    flow: str,
    notes: str | None,
    cycle_day: int | None,
    cycle_phase: str,
) -> dict[str, Any]:
    row = await fetchrow(
        """
        INSERT INTO daily_logs (
            user_id, date, mood, energy, flow, notes, cycle_day, cycle_phase
        ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
        ON CONFLICT (user_id, date) DO UPDATE SET
            mood = EXCLUDED.mood,
            energy = EXCLUDED.energy,
            flow = EXCLUDED.flow,
            notes = EXCLUDED.notes,
            cycle_day = EXCLUDED.cycle_day,
            cycle_phase = EXCLUDED.cycle_phase,
            updated_at = NOW()
        RETURNING *
        """,
        user_id, log_date, mood, energy, flow, notes, cycle_day, cycle_phase,
        user_id=user_id,
    )
    return dict(row)
