"""Turn a model's free-text roadmap answer into a bounded list of roadmap items.

The parser never raises. Whatever the input, it returns between 1 and
``max_items`` items; when extraction fails or is too sparse to trust, the
deterministic default roadmap is returned instead.

Pipeline::

    text -> locate_phases -> per phase: milestone + extract_tasks
                                         (or the phase's default tasks
                                          when nothing matched)
         -> ceiling (hard stop) -> sparsity gate -> items

The sparsity gate is all-or-nothing: a roadmap with fewer than
``min_items`` items is discarded entirely, not topped up.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timedelta

from devfolio_api.phase_locator import locate_phases
from devfolio_api.roadmap_defaults import default_roadmap, phase_default_items
from devfolio_api.roadmap_types import PhaseSpan, PhaseSpec, RoadmapConfig, RoadmapItem
from devfolio_api.task_extractor import extract_tasks
from devfolio_api.timeline import weeks_for_timeframe

OVERVIEW_PLACEHOLDER = "Project roadmap with phases and tasks to track progress."


@dataclass
class RoadmapParseResult:
    """Items plus whether (and why) the default roadmap was used."""

    items: list[RoadmapItem]
    used_default: bool = False
    reason: str | None = None


def _milestone(phase: PhaseSpan, now: datetime) -> RoadmapItem:
    start_week, end_week = phase.week_range
    mid_day = math.floor(((start_week + end_week) / 2) * 7)
    return RoadmapItem(
        name=phase.name,
        description=f"Milestone for {phase.name} (Weeks {start_week}-{end_week})",
        category="milestone",
        due_date=now + timedelta(days=mid_day),
    )


class RoadmapTextParser:
    """Best-effort roadmap extraction with deterministic fallback."""

    def __init__(self, config: RoadmapConfig | None = None):
        self._config = config or RoadmapConfig()

    def parse(
        self,
        text: str | None,
        timeframe: str | None,
        project_title: str | None = None,
    ) -> list[RoadmapItem]:
        """Parse ``text`` into roadmap items. Never raises."""
        return self.parse_detailed(text, timeframe, project_title).items

    def parse_detailed(
        self,
        text: str | None,
        timeframe: str | None,
        project_title: str | None = None,
    ) -> RoadmapParseResult:
        """Like :meth:`parse`, but reports whether the default roadmap was used."""
        log = self._config.logger
        now = self._config.now()

        if not isinstance(text, str) or not text.strip():
            log.warning("Empty or invalid roadmap text received, using default roadmap structure")
            return self._fallback(timeframe, project_title, now, "empty_text")

        try:
            items = self._extract(text, timeframe, now)
        except Exception as e:
            log.error("Error parsing roadmap text", error=str(e))
            return self._fallback(timeframe, project_title, now, "parse_error")

        if not items:
            log.info("No roadmap items extracted from AI response, using default structure")
            return self._fallback(timeframe, project_title, now, "no_items")

        if len(items) < self._config.min_items:
            log.info(
                "Too few roadmap items extracted, using default structure",
                extracted=len(items),
                threshold=self._config.min_items,
            )
            return self._fallback(timeframe, project_title, now, "too_sparse")

        log.info("Roadmap parsed", items=len(items))
        return RoadmapParseResult(items=items)

    def _extract(self, text: str, timeframe: str | None, now: datetime) -> list[RoadmapItem]:
        limit = self._config.max_items
        phases = locate_phases(text, weeks_for_timeframe(timeframe), self._config.logger)

        items: list[RoadmapItem] = []
        for phase in phases:
            # Filtered-out matches leave the milestone alone; only a phase with
            # no task-shaped text at all is padded with defaults
            tasks = extract_tasks(phase.slice(text), phase.week_range, now)
            if tasks is None:
                tasks = phase_default_items(PhaseSpec(phase.name, phase.week_range), now)

            for item in [_milestone(phase, now), *tasks]:
                items.append(item)
                if len(items) >= limit:
                    self._config.logger.info("Roadmap item ceiling reached", limit=limit)
                    return items
        return items

    def _fallback(
        self,
        timeframe: str | None,
        project_title: str | None,
        now: datetime,
        reason: str,
    ) -> RoadmapParseResult:
        items = default_roadmap(timeframe, project_title, now=now)
        return RoadmapParseResult(items=items[: self._config.max_items], used_default=True, reason=reason)


def extract_overview(text: str | None) -> str:
    """First paragraph of the answer, or a placeholder when there is none."""
    if not text or "\n\n" not in text:
        return OVERVIEW_PLACEHOLDER
    first_paragraph = text.split("\n\n", 1)[0]
    return first_paragraph if first_paragraph.strip() else OVERVIEW_PLACEHOLDER
