"""Timeframe arithmetic: "3 months" -> weeks, days and phase week ranges."""

import math

from devfolio_api.roadmap_types import PhaseSpec

DEFAULT_WEEKS = 12
DEFAULT_DAYS = 90

# (substring, weeks, days); first match wins
_TIMEFRAMES = (
    ("1 month", 4, 30),
    ("3 months", 12, 90),
    ("6 months", 24, 180),
)

# Canonical phases and the fraction of the total weeks at which each one ends
CANONICAL_PHASES = (
    ("Planning & Setup Phase", 0.15),
    ("Core Development Phase", 0.5),
    ("Feature Implementation Phase", 0.8),
    ("Testing & Refinement Phase", 1.0),
)


def weeks_for_timeframe(timeframe: str | None) -> int:
    """Map a human timeframe to a number of weeks (default 12)."""
    if timeframe:
        for needle, weeks, _ in _TIMEFRAMES:
            if needle in timeframe:
                return weeks
    return DEFAULT_WEEKS


def days_for_timeframe(timeframe: str | None) -> int:
    """Map a human timeframe to an approximate number of days (default 90)."""
    if timeframe:
        for needle, _, days in _TIMEFRAMES:
            if needle in timeframe:
                return days
    return DEFAULT_DAYS


def phase_week_ranges(total_weeks: int) -> list[PhaseSpec]:
    """Split ``total_weeks`` into the four canonical phases.

    Each phase starts the week after the previous one ends and is at least
    one week wide, so the ranges never overlap or collapse.
    """
    phases = []
    start = 1
    last = len(CANONICAL_PHASES) - 1
    for index, (name, fraction) in enumerate(CANONICAL_PHASES):
        if index == last:
            end = max(start, total_weeks)
        else:
            end = max(start, math.floor(total_weeks * fraction))
        phases.append(PhaseSpec(name=name, week_range=(start, end)))
        start = end + 1
    return phases
