"""Deterministic roadmaps used whenever free-text extraction is unusable.

Two shapes are produced:

- ``default_phase_tasks``: four tasks for a single phase, used when a phase
  was located in the model's answer but nothing in its text looked like a task.
- ``default_roadmap``: a complete 16-item roadmap (four milestones, three
  tasks each), used when the answer is empty, too sparse, or the upstream
  call failed altogether.
"""

import math
from datetime import datetime, timedelta

from devfolio_api.roadmap_types import PhaseSpec, RoadmapConfig, RoadmapItem
from devfolio_api.timeline import DEFAULT_DAYS, days_for_timeframe

# Position of each default task inside its phase, as a fraction of the phase
_TASK_FRACTIONS = (0.2, 0.4, 0.6, 0.8)

# Keyed by a substring of the phase name; checked in order
_PHASE_TASKS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "Planning",
        (
            ("Define project requirements", "Document detailed functional and non-functional requirements"),
            ("Create project architecture", "Design system architecture and component interactions"),
            ("Set up development environment", "Install and configure necessary tools and frameworks"),
            ("Create initial project structure", "Set up repository and basic project scaffolding"),
        ),
    ),
    (
        "Core Development",
        (
            ("Implement core functionality", "Develop the main features of the application"),
            ("Create database schema", "Design and implement database models and relationships"),
            ("Develop API endpoints", "Create backend services and API endpoints"),
            ("Implement authentication", "Add user authentication and authorization"),
        ),
    ),
    (
        "Feature",
        (
            ("Implement user interface", "Create responsive UI components and layouts"),
            ("Add advanced features", "Implement additional functionality beyond core requirements"),
            ("Integrate third-party services", "Connect with external APIs and services"),
            ("Implement data visualization", "Add charts, graphs, or other data visualization components"),
        ),
    ),
    (
        "Testing",
        (
            ("Write unit tests", "Create comprehensive test suite for components"),
            ("Perform integration testing", "Test interactions between different parts of the application"),
            ("Conduct user acceptance testing", "Validate application meets user requirements"),
            ("Fix bugs and optimize performance", "Address issues and improve application performance"),
        ),
    ),
)

_GENERIC_TASKS = (
    ("Task 1", "First task for this phase"),
    ("Task 2", "Second task for this phase"),
    ("Task 3", "Third task for this phase"),
    ("Task 4", "Fourth task for this phase"),
)

# (name, description template, category, day offset in a 90-day plan)
_DEFAULT_PLAN = (
    ("Planning Phase", "Initial {title} planning and preparation", "milestone", 0),
    ("Define project requirements", "Gather and document all {title} requirements", "task", 3),
    ("Research technical solutions", "Evaluate technologies and frameworks for implementation", "task", 7),
    ("Design system architecture", "Create technical specifications and system architecture", "task", 12),
    ("Development Phase", "Core development activities", "milestone", 17),
    ("Set up development environment", "Configure development tools and environments", "task", 19),
    ("Implement core features", "Develop the main functionality of the application", "task", 33),
    ("Create user interface", "Design and implement the user interface", "task", 40),
    ("Testing Phase", "Quality assurance and testing activities", "milestone", 45),
    ("Write unit tests", "Create automated tests for individual components", "task", 50),
    ("Perform integration testing", "Test interactions between components", "task", 54),
    ("Fix identified bugs", "Address and resolve issues found during testing", "task", 60),
    ("Deployment Phase", "Launch and post-launch activities", "milestone", 65),
    ("Prepare deployment environment", "Set up servers and deployment infrastructure", "task", 68),
    ("Deploy application", "Release the application to production", "task", 70),
    ("Monitor performance", "Track application performance and user feedback", "task", 74),
)


def default_phase_tasks(phase_name: str, week_range: tuple[int, int]) -> list[tuple[str, str, int]]:
    """Return four ``(name, description, day_offset)`` tasks for a phase.

    Day offsets are spread at 20/40/60/80% of the phase's day span.
    """
    start_day = week_range[0] * 7
    span_days = week_range[1] * 7 - start_day
    days = [math.floor(start_day + span_days * fraction) for fraction in _TASK_FRACTIONS]

    tasks = _GENERIC_TASKS
    for needle, table in _PHASE_TASKS:
        if needle in phase_name:
            tasks = table
            break

    return [(name, description, day) for (name, description), day in zip(tasks, days)]


def phase_default_items(phase: PhaseSpec, now: datetime) -> list[RoadmapItem]:
    """Default tasks for ``phase`` as roadmap items."""
    return [
        RoadmapItem(
            name=name,
            description=description,
            category="task",
            due_date=now + timedelta(days=day),
        )
        for name, description, day in default_phase_tasks(phase.name, phase.week_range)
    ]


def default_roadmap(
    timeframe: str | None,
    project_title: str | None = None,
    *,
    now: datetime,
) -> list[RoadmapItem]:
    """Build the fixed 16-item roadmap, stretched to fit ``timeframe``."""
    title = project_title or "Project"
    days = days_for_timeframe(timeframe)

    return [
        RoadmapItem(
            name=name,
            description=description.format(title=title),
            category=category,
            due_date=now + timedelta(days=offset * days // DEFAULT_DAYS),
        )
        for name, description, category, offset in _DEFAULT_PLAN
    ]


class DefaultRoadmapGenerator:
    """Clock-aware wrapper around :func:`default_roadmap`."""

    def __init__(self, config: RoadmapConfig | None = None):
        self._config = config or RoadmapConfig()

    def generate(self, timeframe: str | None, project_title: str | None = None) -> list[RoadmapItem]:
        items = default_roadmap(timeframe, project_title, now=self._config.now())
        self._config.logger.info(
            "Default roadmap generated",
            timeframe=timeframe,
            items=len(items),
        )
        return items
