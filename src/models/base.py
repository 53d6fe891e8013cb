"""Shared Pydantic base models and utilities."""

from __future__ import annotations

from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def utc_today() -> date:
    """Today's calendar date in UTC; the cutoff for logging."""
    return utc_now().date()


class PhasewiseBase(BaseModel):
    """Base model with shared config for all Phasewise schemas."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class TimestampMixin(BaseModel):
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
