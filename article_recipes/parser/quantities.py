"""Convert free-form time, yield and nutrition strings into numbers."""

import re

from article_recipes.models import NOT_AVAILABLE

DEFAULT_SERVINGS = 4

_HOURS_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:hour|hr)s?", re.IGNORECASE)
_MINUTES_RE = re.compile(r"(\d+)\s*(?:minute|min)s?", re.IGNORECASE)
_RANGE_RE = re.compile(r"(\d+)\s*-\s*(\d+)")
_NUMBER_RE = re.compile(r"(\d+)")
_DECIMAL_RE = re.compile(r"(\d+(?:\.\d+)?)")


def parse_time_minutes(value: str | int | None) -> int:
    """Total minutes in a duration like "1 hour 15 minutes".

    Hours and minutes both count when they appear together. A bare number is
    taken as minutes; anything unparseable (including "N/A") is 0.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    text = value.strip()
    if not text or text == NOT_AVAILABLE:
        return 0
    if text.isdigit():
        return int(text)

    minutes = 0
    hours_match = _HOURS_RE.search(text)
    if hours_match:
        minutes += round(float(hours_match.group(1)) * 60)
    minutes_match = _MINUTES_RE.search(text)
    if minutes_match:
        minutes += int(minutes_match.group(1))
    return minutes


def parse_servings(value: str | int | None) -> int:
    """Number of servings in a yield like "4-6 servings".

    Ranges resolve to the average of their endpoints, rounded half up.
    """
    if value is None or isinstance(value, bool):
        return DEFAULT_SERVINGS
    if isinstance(value, int):
        return value if value > 0 else DEFAULT_SERVINGS
    text = value.strip()
    if not text or text == NOT_AVAILABLE:
        return DEFAULT_SERVINGS

    range_match = _RANGE_RE.search(text)
    if range_match:
        low, high = int(range_match.group(1)), int(range_match.group(2))
        servings = (low + high + 1) // 2
    else:
        number_match = _NUMBER_RE.search(text)
        if not number_match:
            return DEFAULT_SERVINGS
        servings = int(number_match.group(1))
    return servings if servings > 0 else DEFAULT_SERVINGS


def nutrition_value(value: str | None) -> float:
    """First number in a nutrition string ("300 kcal" -> 300.0), or 0 when absent."""
    if not value or value == NOT_AVAILABLE:
        return 0.0
    match = _DECIMAL_RE.search(value)
    return float(match.group(1)) if match else 0.0
