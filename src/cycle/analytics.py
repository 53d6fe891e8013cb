"""Mood and energy analytics over stored daily logs.

Works on the ``cycle_day`` / ``cycle_phase`` snapshots persisted with each
log, so a chart reflects what the user saw when they saved the entry.
"""

from __future__ import annotations

import logging
import statistics
from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Sequence

from src.cycle.phase import CyclePhase

logger = logging.getLogger("phasewise.cycle.analytics")

METRICS = ("mood", "energy")


@dataclass(frozen=True)
class ChartPoint:
    """One chart point: ``x`` is the cycle day, ``y`` the metric value."""

    x: int
    y: int
    date: date


@dataclass(frozen=True)
class PhaseSummary:
    """Aggregates for all logs whose snapshot fell in one phase."""

    phase: CyclePhase
    days_logged: int
    avg_mood: float | None
    avg_energy: float | None


def parse_phase_label(label: str | None) -> CyclePhase:
    """Recover the phase from a stored label such as ``"Luteal (estimated)"``."""
    if not label:
        return CyclePhase.unknown
    head = label.split("(", 1)[0].strip()
    try:
        return CyclePhase(head.capitalize())
    except ValueError:
        return CyclePhase.unknown


def build_series(logs: Sequence[Mapping[str, Any]], metric: str) -> list[ChartPoint]:
    """Build chart points for ``metric`` ordered by log date.

    Missing cycle days and missing metric values plot as 0.
    """
    if metric not in METRICS:
        raise ValueError(f"Unsupported metric: {metric!r}")

    ordered = sorted(logs, key=lambda log: log["date"])
    return [
        ChartPoint(
            x=log.get("cycle_day") or 0,
            y=log.get(metric) or 0,
            date=log["date"],
        )
        for log in ordered
    ]


def _mean(values: list[int]) -> float | None:
    if not values:
        return None
    return round(float(statistics.mean(values)), 2)


def phase_summary(logs: Sequence[Mapping[str, Any]]) -> list[PhaseSummary]:
    """Per-phase day counts and mean mood/energy, in cycle order."""
    grouped: dict[CyclePhase, list[Mapping[str, Any]]] = {}
    for log in logs:
        grouped.setdefault(parse_phase_label(log.get("cycle_phase")), []).append(log)

    summaries = []
    for phase in CyclePhase:
        bucket = grouped.get(phase)
        if not bucket:
            continue
        summaries.append(
            PhaseSummary(
                phase=phase,
                days_logged=len(bucket),
                avg_mood=_mean([e["mood"] for e in bucket if e.get("mood") is not None]),
                avg_energy=_mean([e["energy"] for e in bucket if e.get("energy") is not None]),
            )
        )

    logger.debug("Summarized %d logs into %d phases", len(logs), len(summaries))
    return summaries
