"""Shared data types for the roadmap pipeline."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal

import structlog

Category = Literal["milestone", "task"]

# Policy constants, tunable through RoadmapConfig / Settings
MAX_ROADMAP_ITEMS = 24
MIN_EXTRACTED_ITEMS = 8


def utc_now() -> datetime:
    """Default clock: current time in UTC."""
    return datetime.now(timezone.utc)


@dataclass
class RoadmapItem:
    """A milestone or task on a project roadmap."""

    name: str
    description: str
    category: Category
    due_date: datetime
    completed: bool = False


@dataclass(frozen=True)
class PhaseSpec:
    """A canonical phase and the weeks it covers (inclusive)."""

    name: str
    week_range: tuple[int, int]

    @property
    def start_week(self) -> int:
        return self.week_range[0]

    @property
    def end_week(self) -> int:
        return self.week_range[1]


@dataclass(frozen=True)
class PhaseSpan:
    """A phase located in a block of text.

    ``start``/``end`` are character offsets; ``end`` is the next phase's
    start or the end of the text.
    """

    name: str
    week_range: tuple[int, int]
    start: int
    end: int

    def slice(self, text: str) -> str:
        return text[self.start : self.end]


@dataclass(frozen=True)
class TaskCandidate:
    """A (name, description) pair pulled out of a phase's text."""

    name: str
    description: str = ""


@dataclass
class RoadmapConfig:
    """Explicit dependencies for the parser and the default generator."""

    logger: Any = field(default_factory=lambda: structlog.get_logger("devfolio_api.roadmap"))
    clock: Callable[[], datetime] = utc_now
    max_items: int = MAX_ROADMAP_ITEMS
    min_items: int = MIN_EXTRACTED_ITEMS

    def now(self) -> datetime:
        return self.clock()
