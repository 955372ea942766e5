"""Utility functions."""

import math
import re
from typing import Any

import orjson


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return int(math.floor(value + 0.5))


def format_inr(amount: float) -> str:
    """Format an amount with Indian digit grouping, e.g. 1200000 -> '12,00,000'."""
    rounded = round_half_up(abs(amount))
    sign = "-" if amount < 0 and rounded else ""
    digits = str(rounded)
    if len(digits) <= 3:
        return sign + digits

    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return sign + ",".join(groups + [tail])


def parse_json_object(text: str) -> dict[str, Any]:
    """Parse a model response that should contain a single JSON object.

    Markdown code fences around the payload are tolerated. Raises ValueError
    when the text is empty, not valid JSON, or not an object.
    """
    if not text or not text.strip():
        raise ValueError("Empty response")

    cleaned = text.strip()
    fenced = re.match(r"^```(?:json)?\s*(.*?)\s*```$", cleaned, re.DOTALL)
    if fenced:
        cleaned = fenced.group(1)

    try:
        parsed = orjson.loads(cleaned)
    except orjson.JSONDecodeError as e:
        raise ValueError(f"Response is not valid JSON: {e}") from e

    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def truncate_text(text: str, max_length: int, suffix: str = "...") -> str:
    """Truncate text to max length with suffix."""
    if len(text) <= max_length:
        return text
    return text[: max_length - len(suffix)] + suffix
