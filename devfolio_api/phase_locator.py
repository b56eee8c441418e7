"""Locate phase headers in a model's roadmap answer."""

import re
from typing import Any

import structlog

from devfolio_api.roadmap_types import PhaseSpan
from devfolio_api.timeline import phase_week_ranges

logger = structlog.get_logger()

# Same order as timeline.CANONICAL_PHASES
CANONICAL_HEADER_PATTERNS = [
    re.compile(r"Planning\s*(?:&|and)\s*Setup\s*Phase", re.IGNORECASE),
    re.compile(r"Core\s*Development\s*Phase", re.IGNORECASE),
    re.compile(r"Feature\s*Implementation\s*Phase", re.IGNORECASE),
    re.compile(r"Testing\s*(?:&|and)\s*Refinement\s*Phase", re.IGNORECASE),
]

# "Phase 2: Backend work (Week 3-5)", "Stage: Polish", or just any non-blank
# line; a leading bullet or "N." is not part of the name
GENERIC_HEADER_PATTERN = re.compile(
    r"^[ \t]*(?:[-*•][ \t]*|\d+\.[ \t]+)?(?:Phase|Milestone|Stage)?[ \t]*\d*[ \t]*:?[ \t]*"
    r"([^\s:(][^:\n(]*)(?:\(Week \d+(?:-\d+)?\))?",
    re.IGNORECASE | re.MULTILINE,
)

# A header needs at least one letter; punctuation noise is not a phase
_HAS_LETTER = re.compile(r"[^\W\d_]")

MAX_PHASES = 4
MIN_PHASES = 2
PLACEHOLDER_STRIDE = 500


def _with_ends(phases: list[tuple[int, str, tuple[int, int]]], text_length: int) -> list[PhaseSpan]:
    spans = []
    for i, (offset, name, week_range) in enumerate(phases):
        end = phases[i + 1][0] if i < len(phases) - 1 else text_length
        spans.append(PhaseSpan(name=name, week_range=week_range, start=offset, end=end))
    return spans


def locate_phases(text: str, total_weeks: int, log: Any = None) -> list[PhaseSpan]:
    """Return 2-4 phase spans for ``text``, ordered by position.

    Strategies, in order: the canonical headers requested by the prompt,
    a generic "Phase N: ..." pattern, and finally placeholder spans at fixed
    offsets. The placeholders carry no relation to the text; tasks pulled
    from them are whatever the slices happen to contain.
    """
    log = log or logger
    specs = phase_week_ranges(total_weeks)

    found = []
    for pattern, spec in zip(CANONICAL_HEADER_PATTERNS, specs):
        match = pattern.search(text)
        if match:
            found.append((match.start(), spec.name, spec.week_range))
    found.sort(key=lambda phase: phase[0])

    if len(found) >= MIN_PHASES:
        log.debug("Canonical phase headers found", phases=len(found))
        return _with_ends(found, len(text))

    generic = []
    for match in GENERIC_HEADER_PATTERN.finditer(text):
        name = (match.group(1) or "").strip()
        if not _HAS_LETTER.search(name):
            continue
        spec = specs[len(generic)]
        generic.append((match.start(), name, spec.week_range))
        if len(generic) >= MAX_PHASES:
            break

    if len(generic) >= MIN_PHASES:
        log.debug("Generic phase headers found", phases=len(generic))
        return _with_ends(generic, len(text))

    log.warning("Could not find phase headers in the response, using default phases")
    placeholders = [
        (index * PLACEHOLDER_STRIDE, spec.name, spec.week_range) for index, spec in enumerate(specs)
    ]
    return _with_ends(placeholders, len(text))
