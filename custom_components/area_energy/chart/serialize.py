"""JSON-safe rendering of chart configurations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .builder import TimeTickFormatter
from .gradient import GradientColor


def _callback_ref(value: Any) -> dict[str, Any]:
    name = getattr(value, "callback_name", None) or getattr(
        value, "__name__", type(value).__name__
    )
    ref: dict[str, Any] = {"type": "callback", "name": name}
    if isinstance(value, TimeTickFormatter) and value.time_zone is not None:
        ref["time_zone"] = str(value.time_zone)
    return ref


def serialize_chart_config(value: Any) -> Any:
    """Return ``value`` with lazy colors and callbacks replaced by descriptors.

    Gradient colors become their :meth:`GradientColor.describe` mapping and any
    other callable becomes ``{"type": "callback", "name": ...}`` so the result
    can be sent over the websocket API.
    """

    if isinstance(value, GradientColor):
        return value.describe()
    if isinstance(value, Mapping):
        return {str(key): serialize_chart_config(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_chart_config(item) for item in value]
    if callable(value):
        return _callback_ref(value)
    return value
