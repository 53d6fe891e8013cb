"""Cycle phase resolution.

Infers a cycle day and a coarse phase label for a single calendar date from
the user's cycle settings (last period start + average cycle length) and
whatever flow was logged for that date.

Resolution order, first match wins:

1. Any logged flow other than ``none`` is ground truth: the day is
   Menstrual, source ``logged``.  No cycle day is computed.
2. Without a last period start or a positive average cycle length nothing
   can be estimated: Unknown, source ``unknown``.
3. Dates before the last period start cannot be placed: Unknown.
4. Otherwise the cycle day is ``(days since start mod length) + 1`` and the
   phase comes from fixed day thresholds, source ``estimated``.

Early cycle days with no logged flow are labelled Follicular, never
Menstrual: bleeding days are expected to be caught by rule 1.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum


class FlowLevel(str, Enum):
    none = "none"
    spotting = "spotting"
    light = "light"
    medium = "medium"
    heavy = "heavy"


class CyclePhase(str, Enum):
    menstrual = "Menstrual"
    follicular = "Follicular"
    ovulatory = "Ovulatory"
    luteal = "Luteal"
    unknown = "Unknown"


class PhaseSource(str, Enum):
    logged = "logged"
    estimated = "estimated"
    unknown = "unknown"


# Upper bounds (inclusive) of the estimated phases, by cycle day
FOLLICULAR_LAST_DAY = 12
OVULATORY_LAST_DAY = 16


@dataclass(frozen=True)
class PhaseResult:
    """Resolved phase for one date.

    Attributes:
        cycle_day:    1-indexed day within the estimated cycle, or None when
                      the phase was logged or could not be determined.
        phase:        Phase label.
        phase_source: Whether the phase was logged, estimated or unknown.
    """

    cycle_day: int | None
    phase: CyclePhase
    phase_source: PhaseSource

    @property
    def label(self) -> str:
        """Display label, e.g. ``"Luteal (estimated)"`` or ``"Unknown"``."""
        if self.phase_source is PhaseSource.unknown:
            return self.phase.value
        return f"{self.phase.value} ({self.phase_source.value})"


UNKNOWN_RESULT = PhaseResult(
    cycle_day=None, phase=CyclePhase.unknown, phase_source=PhaseSource.unknown
)


def normalize_flow(flow: str | FlowLevel | None) -> FlowLevel:
    """Map a raw flow value onto a FlowLevel.  Unrecognized values are ``none``."""
    if isinstance(flow, FlowLevel):
        return flow
    value = (flow or "none").strip().lower()
    try:
        return FlowLevel(value)
    except ValueError:
        return FlowLevel.none


def _as_date(value: date | str) -> date:
    if isinstance(value, date):
        return value
    return date.fromisoformat(value)


def days_between(target: date | str, start: date | str) -> int:
    """Whole calendar days from ``start`` to ``target`` (negative if before)."""
    return (_as_date(target) - _as_date(start)).days


def phase_for_cycle_day(cycle_day: int) -> CyclePhase:
    if cycle_day <= FOLLICULAR_LAST_DAY:
        return CyclePhase.follicular
    if cycle_day <= OVULATORY_LAST_DAY:
        return CyclePhase.ovulatory
    return CyclePhase.luteal


def resolve_phase(
    target_date: date | str,
    last_period_start: date | str | None = None,
    avg_cycle_length: int | None = None,
    logged_flow: str | FlowLevel | None = None,
) -> PhaseResult:
    """Resolve the cycle day and phase for ``target_date``.

    Args:
        target_date:       Date to resolve (``date`` or ``YYYY-MM-DD``).
        last_period_start: Most recent known period start, if any.
        avg_cycle_length:  Average cycle length in days, if configured.
        logged_flow:       Flow the user logged for ``target_date``.

    Returns:
        PhaseResult.  Incomplete input degrades to the Unknown result.
    """
    if normalize_flow(logged_flow) is not FlowLevel.none:
        return PhaseResult(
            cycle_day=None, phase=CyclePhase.menstrual, phase_source=PhaseSource.logged
        )

    if not last_period_start or not avg_cycle_length or avg_cycle_length <= 0:
        return UNKNOWN_RESULT

    diff = days_between(target_date, last_period_start)
    if diff < 0:
        return UNKNOWN_RESULT

    cycle_day = diff % avg_cycle_length + 1
    return PhaseResult(
        cycle_day=cycle_day,
        phase=phase_for_cycle_day(cycle_day),
        phase_source=PhaseSource.estimated,
    )
