"""Color assignment for chart datasets and legend entries."""

from __future__ import annotations

from collections.abc import Mapping
import re

from ..const import (
    DEFAULT_ENERGY_COLOR,
    DEFAULT_POWER_COLOR,
    ENERGY_PALETTE,
    KIND_POWER,
    POWER_PALETTE,
    THEME_COLOR_NAMES,
)

_CSS_VAR_RE = re.compile(r"^var\(\s*(--[\w-]+)\s*\)$")


def theme_color(color: str) -> str:
    """Translate a theme color name into a CSS variable reference."""

    if color in THEME_COLOR_NAMES:
        return f"var(--{color}-color)"
    return color


def get_entity_color(
    entity_id: str,
    index: int,
    kind: str,
    total: int,
    color_map: Mapping[str, str] | None = None,
) -> str:
    """Return the color for the ``index``-th of ``total`` entities of ``kind``.

    A configured color always wins. A lone entity gets the fixed default of its
    kind, otherwise the kind's palette is cycled.
    """

    if color_map:
        custom = color_map.get(entity_id)
        if custom:
            return theme_color(custom)

    if total == 1:
        return DEFAULT_POWER_COLOR if kind == KIND_POWER else DEFAULT_ENERGY_COLOR

    palette = POWER_PALETTE if kind == KIND_POWER else ENERGY_PALETTE
    return palette[index % len(palette)]


def resolve_color(color: str, theme: Mapping[str, str] | None = None) -> str:
    """Resolve a ``var(--x)`` reference using ``theme`` variable values.

    Unknown or empty variables, and every other color, are returned unchanged.
    """

    match = _CSS_VAR_RE.match(color.strip())
    if match is None or not theme:
        return color
    value = (theme.get(match.group(1)) or "").strip()
    return value or color


def with_alpha(color: str, alpha: float) -> str:
    """Return a palette color with its ``0.8`` alpha replaced by ``alpha``."""

    return color.replace("0.8", str(alpha), 1)
