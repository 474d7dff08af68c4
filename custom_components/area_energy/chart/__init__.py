"""Chart configuration building for area energy data."""

from __future__ import annotations

from .builder import ChartConfigBuilder, ChartOptions, TimeTickFormatter, format_tooltip_label
from .colors import get_entity_color, resolve_color, theme_color, with_alpha
from .gradient import ChartArea, GradientCache, GradientColor, LinearGradient
from .serialize import serialize_chart_config

__all__ = [
    "ChartArea",
    "ChartConfigBuilder",
    "ChartOptions",
    "GradientCache",
    "GradientColor",
    "LinearGradient",
    "TimeTickFormatter",
    "format_tooltip_label",
    "get_entity_color",
    "resolve_color",
    "serialize_chart_config",
    "theme_color",
    "with_alpha",
]
