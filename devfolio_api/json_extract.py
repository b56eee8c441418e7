"""Recover a JSON payload from a model answer that may wrap it in prose or fences."""

import json
import re
from typing import Any

import structlog

logger = structlog.get_logger()

_FENCED_JSON = re.compile(r"```json\s*\n([\s\S]*?)\n\s*```", re.IGNORECASE)
_FENCED_ANY = re.compile(r"```[a-zA-Z]*\s*\n([\s\S]*?)\n\s*```")
_OBJECT_SPAN = re.compile(r"\{[\s\S]*\}")
_ARRAY_SPAN = re.compile(r"\[[\s\S]*\]")

_TRAILING_COMMA = re.compile(r",(\s*[\]}])")
_UNQUOTED_KEY = re.compile(r"([{,])\s*([A-Za-z0-9_]+)\s*:")


class JSONExtractionError(ValueError):
    """Raised when no JSON payload of the expected type can be recovered."""

    pass


def _candidates(text: str, expect: type) -> list[str]:
    span = _OBJECT_SPAN if expect is dict else _ARRAY_SPAN
    found = []
    for pattern in (_FENCED_JSON, _FENCED_ANY, span):
        match = pattern.search(text)
        if match:
            found.append((match.group(1) if match.groups() else match.group(0)).strip())
    found.append(text.strip())
    # Keep order, drop duplicates
    return list(dict.fromkeys(found))


def repair_json(text: str, *, swap_quotes: bool = True) -> str:
    """Fix the usual model mistakes: trailing commas, bare keys, single quotes.

    The quote swap also hits apostrophes inside values, so it is optional.
    """
    fixed = _TRAILING_COMMA.sub(r"\1", text)
    fixed = _UNQUOTED_KEY.sub(r'\1"\2":', fixed)
    return fixed.replace("'", '"') if swap_quotes else fixed


# Least invasive first
_ATTEMPTS = (
    ("none", lambda candidate: candidate),
    ("structure", lambda candidate: repair_json(candidate, swap_quotes=False)),
    ("quotes", repair_json),
)


def extract_json_payload(text: str, expect: type = dict) -> Any:
    """Return the first JSON value of type ``expect`` found in ``text``.

    Tries a ```json fence, any fence, the outermost brace/bracket span and the
    whole text, each as-is, then with structural repairs, then with single
    quotes swapped as well.

    Raises:
        JSONExtractionError: If nothing parses to the expected type.
    """
    if not text or not text.strip():
        raise JSONExtractionError("Empty response text")

    candidates = _candidates(text, expect)
    for repair, fix in _ATTEMPTS:
        for candidate in candidates:
            try:
                value = json.loads(fix(candidate))
            except json.JSONDecodeError:
                continue
            if isinstance(value, expect):
                if repair != "none":
                    logger.info("JSON payload recovered after repair", repair=repair, chars=len(candidate))
                return value

    logger.warning("No JSON payload found in response", preview=text[:100])
    raise JSONExtractionError(f"No JSON {expect.__name__} found in response")
