"""Normalization helpers.

Centralizes defensive parsing for patches coming from outside the
library (sample data, hand-edited records, position feeds).
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or value == "--":
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result):
        return None
    return result


def normalize_heading(value: float) -> float:
    """Wrap a compass heading into ``[0, 360)``."""
    wrapped = value % 360.0
    # -1e-17 % 360 rounds up to exactly 360.0
    if wrapped >= 360.0:
        return 0.0
    return wrapped


def clamp_speed(value: float) -> float:
    return value if value > 0 else 0.0


def is_meaningful(value: Any) -> bool:
    """Return True if the value should be included in a patch."""
    if value is None:
        return False
    if value == "":
        return False
    if value == "--":
        return False
    if value == {}:
        return False
    return bool(value != [])


def prune_patch(data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose values carry no information.

    Missing keys in a patch mean "no update", so placeholders must never
    reach the merge step.
    """
    return {key: value for key, value in data.items() if is_meaningful(value)}
