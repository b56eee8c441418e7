"""Final shaping of roadmap items before they leave the API."""

from collections.abc import Iterable, Mapping
from datetime import date, datetime, timezone
from typing import Any

import structlog

from devfolio_api.roadmap_types import RoadmapItem

logger = structlog.get_logger()

MAX_NAME_CHARS = 100
MAX_DESCRIPTION_CHARS = 500
CATEGORIES = ("milestone", "task")
UNTITLED = "Untitled task"


def format_timestamp(value: datetime) -> str:
    """``2026-10-19T08:30:00.000Z``; naive datetimes are taken as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> datetime:
    """Coerce a datetime, date, ISO string or epoch milliseconds to a datetime.

    Raises:
        ValueError: If the value cannot be interpreted as a point in time.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, bool):
        raise ValueError(f"Not a timestamp: {value!r}")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f"Timestamp out of range: {value!r}") from e
    if isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    raise ValueError(f"Not a timestamp: {value!r}")


def _field(item: Any, *names: str) -> Any:
    for name in names:
        if isinstance(item, Mapping):
            if name in item:
                return item[name]
        elif hasattr(item, name):
            return getattr(item, name)
    return None


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def normalize_item(item: RoadmapItem | Mapping[str, Any], *, now: datetime, log: Any = None) -> dict[str, Any]:
    """Normalize a single item into its wire form."""
    log = log or logger
    raw_due = _field(item, "due_date", "dueDate")
    try:
        due_date = format_timestamp(parse_timestamp(raw_due))
    except (ValueError, TypeError, OverflowError):
        log.warning("Failed to parse date, using current date instead", due_date=repr(raw_due))
        due_date = format_timestamp(now)

    category = _field(item, "category")
    return {
        "name": _text(_field(item, "name"))[:MAX_NAME_CHARS] or UNTITLED,
        "description": _text(_field(item, "description"))[:MAX_DESCRIPTION_CHARS],
        "category": category if category in CATEGORIES else "task",
        "dueDate": due_date,
        "completed": bool(_field(item, "completed")),
    }


def normalize_items(
    items: Iterable[RoadmapItem | Mapping[str, Any]],
    *,
    now: datetime,
    log: Any = None,
) -> list[dict[str, Any]]:
    """Normalize every item; running this on its own output changes nothing."""
    return [normalize_item(item, now=now, log=log) for item in items]
