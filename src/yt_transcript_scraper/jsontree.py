"""
jsontree.py — Safe accessors for YouTube's loosely-typed JSON payloads.

The player response is undocumented and drifts over time, so extractors never
index into it directly.  Every read goes through get_field() plus one of the
as_*() coercions, each of which returns None instead of raising when the
shape is not what we expected.  Callers then apply their own default.

    title = as_string(get_field(details, "title")) or "Unknown Title"
"""

from __future__ import annotations

from typing import Any


def get_field(node: Any, *path: str | int) -> Any:
    """
    Walk a path of dict keys / list indices, returning None on any miss.

    Args:
        node: The root value (usually a dict from json.loads).
        path: Keys (for dicts) or integer indices (for lists).

    Returns:
        The value at the end of the path, or None if any step is missing or
        has the wrong container type.
    """
    current = node
    for step in path:
        if isinstance(step, int) and not isinstance(step, bool):
            if not isinstance(current, list) or not -len(current) <= step < len(current):
                return None
            current = current[step]
        else:
            if not isinstance(current, dict) or step not in current:
                return None
            current = current[step]
    return current


def as_string(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def as_bool(value: Any) -> bool | None:
    return value if isinstance(value, bool) else None


def as_int(value: Any) -> int | None:
    """Return value if it is a JSON integer.  Booleans are not integers here."""
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def as_uint(value: Any) -> int | None:
    number = as_int(value)
    if number is None or number < 0:
        return None
    return number


def as_number(value: Any) -> float | None:
    """Return value as a float if it is any JSON number."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def as_list(value: Any) -> list | None:
    return value if isinstance(value, list) else None


def as_dict(value: Any) -> dict | None:
    return value if isinstance(value, dict) else None


def get_text(node: Any) -> str | None:
    """
    Read a YouTube "formatted string" as a plain string.

    The value is either {"simpleText": ...} or {"runs": [{"text": ...}, ...]};
    runs are concatenated in order.
    """
    simple = as_string(get_field(node, "simpleText"))
    if simple is not None:
        return simple
    runs = as_list(get_field(node, "runs"))
    if not runs:
        return None
    parts = [as_string(get_field(run, "text")) for run in runs]
    if any(part is None for part in parts):
        return None
    return "".join(parts)
