"""Pydantic models for cycle settings, daily logs, phase and analytics."""

from __future__ import annotations

import uuid
from datetime import date, datetime

from pydantic import Field, field_validator

from src.cycle.phase import CyclePhase, FlowLevel, PhaseResult, PhaseSource, normalize_flow
from src.models.base import PhasewiseBase, TimestampMixin


# ---------- Cycle Settings ----------

class CycleSettingsBase(PhasewiseBase):
    avg_cycle_length: int = Field(default=28, gt=0)
    last_period_start: date


class CycleSettingsUpdate(CycleSettingsBase):
    pass


class CycleSettingsRead(CycleSettingsBase, TimestampMixin):
    user_id: uuid.UUID


# ---------- Daily Logs ----------

class DailyLogUpsert(PhasewiseBase):
    mood: int | None = Field(default=None, ge=1, le=5)
    energy: int | None = Field(default=None, ge=1, le=5)
    flow: FlowLevel = FlowLevel.none
    notes: str | None = None

    @field_validator("flow", mode="before")
    @classmethod
    def fold_flow_case(cls, v: object) -> object:
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("notes")
    @classmethod
    def blank_notes_to_none(cls, v: str | None) -> str | None:
        return v or None


class DailyLogRead(PhasewiseBase, TimestampMixin):
    user_id: uuid.UUID
    date: date
    mood: int | None = None
    energy: int | None = None
    flow: FlowLevel = FlowLevel.none
    notes: str | None = None
    cycle_day: int | None = None
    cycle_phase: str | None = None

    @field_validator("flow", mode="before")
    @classmethod
    def normalize_stored_flow(cls, v: object) -> FlowLevel:
        return normalize_flow(v if isinstance(v, str) else None)


# ---------- Phase ----------

class PhaseRead(PhasewiseBase):
    date: date
    cycle_day: int | None
    phase: CyclePhase
    phase_source: PhaseSource
    label: str

    @classmethod
    def from_result(cls, target_date: date, result: PhaseResult) -> "PhaseRead":
        return cls(
            date=target_date,
            cycle_day=result.cycle_day,
            phase=result.phase,
            phase_source=result.phase_source,
            label=result.label,
        )


# ---------- Analytics ----------

class ChartPointRead(PhasewiseBase):
    x: int
    y: int
    date: date


class PhaseSummaryRead(PhasewiseBase):
    phase: CyclePhase
    days_logged: int
    avg_mood: float | None = None
    avg_energy: float | None = None


class AnalyticsRead(PhasewiseBase):
    mood: list[ChartPointRead]
    energy: list[ChartPointRead]
    phases: list[PhaseSummaryRead]
    generated_at: datetime
