"""Required-field rule shared by the task service and the task client."""

from __future__ import annotations

from typing import Any


def has_text(value: Any, *, trim: bool = False) -> bool:
    """Return True when ``value`` is a usable topic/description.

    Without ``trim`` only presence is checked: ``None`` and ``""`` fail, a
    whitespace-only string passes. With ``trim`` surrounding whitespace is
    ignored, so whitespace-only strings fail as well.
    """

    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip()) if trim else bool(value)
    return bool(value)


def has_required_fields(topic: Any, description: Any, *, trim: bool = False) -> bool:
    return has_text(topic, trim=trim) and has_text(description, trim=trim)
