"""Utility helpers for the Area Energy integration."""

from __future__ import annotations

import math
from typing import Any


def float_or_none(value: Any) -> float | None:
    """Return value as ``float`` if possible, else ``None``.

    Converts integers, floats, and numeric strings (such as entity states) to
    ``float`` while safely handling ``None`` and non-numeric inputs.
    """
    try:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            num = float(value)
        else:
            string_val = str(value).strip()
            if not string_val:
                return None
            num = float(string_val)
        return num if math.isfinite(num) else None
    except (TypeError, ValueError):
        return None


def finite_number(value: Any) -> float | None:
    """Return ``value`` as ``float`` only when it already is a finite number.

    Unlike :func:`float_or_none`, strings are rejected: statistics records
    carry numbers, and anything else is treated as malformed.
    """

    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    num = float(value)
    return num if math.isfinite(num) else None
