"""Cycle phase logic for Phasewise.

Pure functions only: nothing here touches the database or the session.

Modules:
    phase     : Resolve cycle day + phase for a date from settings and logged flow
    analytics : Chart series and per-phase summaries over stored daily logs
"""

from src.cycle.analytics import ChartPoint, PhaseSummary, build_series, phase_summary
from src.cycle.phase import (
    CyclePhase,
    FlowLevel,
    PhaseResult,
    PhaseSource,
    normalize_flow,
    resolve_phase,
)

__all__ = [
    "ChartPoint",
    "PhaseSummary",
    "build_series",
    "phase_summary",
    "CyclePhase",
    "FlowLevel",
    "PhaseResult",
    "PhaseSource",
    "normalize_flow",
    "resolve_phase",
]
