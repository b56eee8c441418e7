"""Pull tasks out of a single phase's text.

Each heuristic is a pure ``str -> list[TaskCandidate]`` function. They are
tried in priority order and the first one that matches anything wins, even
if all of its matches are later filtered out.
"""

import math
import re
from collections.abc import Callable
from datetime import datetime, timedelta

from devfolio_api.roadmap_types import RoadmapItem, TaskCandidate

MAX_TASKS_PER_PHASE = 5
MAX_TASK_NAME_CHARS = 50
MAX_TASK_DESCRIPTION_CHARS = 200

# Optional bullet or "N." prefix; the leading \s* lets a match that starts on
# the previous line's newline still consume the bullet
_BULLET = r"\s*[-*•]?\s*(?:\d+\.\s+)?"

_LABEL_PATTERN = re.compile(_BULLET + r"([^:\n.]+)[:.]\s*([^\n]*)")
_PAREN_PATTERN = re.compile(_BULLET + r"([^(]+)\s*\(([^)]+)\)")
_SENTENCE_PATTERN = re.compile(_BULLET + r"([^\n.]+)(?:\.\s+([^\n]*))?")

_HEADER_WORDS = ("phase", "milestone")


def _candidates(pattern: re.Pattern[str], text: str) -> list[TaskCandidate]:
    return [
        TaskCandidate(name=(match.group(1) or "").strip(), description=(match.group(2) or "").strip())
        for match in pattern.finditer(text)
    ]


def label_tasks(text: str) -> list[TaskCandidate]:
    """``Set up CI: configure the build pipeline``"""
    return _candidates(_LABEL_PATTERN, text)


def parenthetical_tasks(text: str) -> list[TaskCandidate]:
    """``Set up CI (configure the build pipeline)``"""
    return _candidates(_PAREN_PATTERN, text)


def sentence_tasks(text: str) -> list[TaskCandidate]:
    """``Set up CI. Configure the build pipeline``"""
    return _candidates(_SENTENCE_PATTERN, text)


TASK_HEURISTICS: tuple[Callable[[str], list[TaskCandidate]], ...] = (
    label_tasks,
    parenthetical_tasks,
    sentence_tasks,
)


def _is_task_name(name: str) -> bool:
    lowered = name.lower()
    return len(name) > 2 and not any(word in lowered for word in _HEADER_WORDS)


def _truncate(value: str, limit: int) -> str:
    return value[:limit] + "..." if len(value) > limit else value


def find_candidates(text: str) -> list[TaskCandidate] | None:
    """Run the heuristics in order; filter and cap the first non-empty result.

    Returns ``None`` when no heuristic matched at all, and a possibly empty
    list when one matched but every candidate was filtered out.
    """
    for heuristic in TASK_HEURISTICS:
        candidates = heuristic(text)
        if candidates:
            survivors = [candidate for candidate in candidates if _is_task_name(candidate.name)]
            return survivors[:MAX_TASKS_PER_PHASE]
    return None


def extract_tasks(text: str, week_range: tuple[int, int], now: datetime) -> list[RoadmapItem] | None:
    """Extract up to five tasks from ``text`` with due dates inside ``week_range``.

    ``None`` means nothing in ``text`` looked like a task.
    """
    candidates = find_candidates(text)
    if candidates is None:
        return None
    start_week, end_week = week_range
    count = len(candidates)

    tasks = []
    for position, candidate in enumerate(candidates):
        task_week = math.floor(start_week + (position / count) * (end_week - start_week))
        tasks.append(
            RoadmapItem(
                name=_truncate(candidate.name, MAX_TASK_NAME_CHARS),
                description=_truncate(candidate.description, MAX_TASK_DESCRIPTION_CHARS),
                category="task",
                due_date=now + timedelta(days=task_week * 7),
            )
        )
    return tasks
