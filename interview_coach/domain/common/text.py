"""Text and score helpers shared by the scoring and question services."""

import math
import re
from collections.abc import Iterable

_NON_ALNUM = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def tokenize(text: str | None) -> list[str]:
    """Lowercase and split text into alphanumeric word tokens."""
    cleaned = _NON_ALNUM.sub(" ", (text or "").lower())
    return [word for word in _WHITESPACE.split(cleaned) if word]


def collapse_whitespace(text: str | None) -> str:
    return _WHITESPACE.sub(" ", text or "").strip()


def normalize_prompt(prompt: str | None) -> str:
    """Key used to detect duplicate question prompts."""
    return " ".join(tokenize(prompt))


def round_half_up(value: float) -> int:
    """Round halves upwards; built-in round() would round 72.5 down to 72."""
    return math.floor(value + 0.5)


def clamp_score(value: float, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, round_half_up(value)))


def unique_strings(items: Iterable[object], limit: int) -> list[str]:
    """Trim, drop empties and duplicates while keeping order, then cap the list."""
    seen: dict[str, None] = {}
    for item in items:
        text = str(item or "").strip()
        if text and text not in seen:
            seen[text] = None
    return list(seen)[:limit]
