"""Constants for the Area Energy integration."""

from __future__ import annotations

from typing import Final

# Domain
DOMAIN: Final = "area_energy"

# Config entry keys
CONF_AREA: Final = "area"
CONF_NAME: Final = "name"
CONF_ENTITIES: Final = "entities"
CONF_ENTITY_ID: Final = "entity_id"
CONF_COLOR: Final = "color"
CONF_CHART: Final = "chart"
CONF_FEATURES: Final = "features"
CONF_CHART_TYPE: Final = "chart_type"
CONF_LINE_TYPE: Final = "line_type"
CONF_LEGEND_STYLE: Final = "legend_style"
CONF_AXIS_STYLE: Final = "axis_style"
CONF_TOTAL_POWER_ENTITY: Final = "total_power_entity"

# Features
FEATURE_HIDE_NAME: Final = "hide_name"
FEATURE_EXCLUDE_DEFAULT_ENTITIES: Final = "exclude_default_entities"
FEATURES: Final = (FEATURE_HIDE_NAME, FEATURE_EXCLUDE_DEFAULT_ENTITIES)

# Chart settings
CHART_TYPE_LINE: Final = "line"
CHART_TYPE_STACKED_BAR: Final = "stacked_bar"
CHART_TYPE_STACKED_LINE: Final = "stacked_line"
CHART_TYPES: Final = (CHART_TYPE_LINE, CHART_TYPE_STACKED_BAR, CHART_TYPE_STACKED_LINE)
STACKED_CHART_TYPES: Final = frozenset({CHART_TYPE_STACKED_BAR, CHART_TYPE_STACKED_LINE})

LINE_TYPE_NORMAL: Final = "normal"
LINE_TYPE_GRADIENT: Final = "gradient"
LINE_TYPE_GRADIENT_NO_FILL: Final = "gradient_no_fill"
LINE_TYPE_NO_FILL: Final = "no_fill"
LINE_TYPES: Final = (
    LINE_TYPE_NORMAL,
    LINE_TYPE_GRADIENT,
    LINE_TYPE_GRADIENT_NO_FILL,
    LINE_TYPE_NO_FILL,
)

LEGEND_STYLES: Final = ("entities", "compact", "none")
AXIS_STYLES: Final = ("all", "x_only", "y_only", "none")

DEFAULT_CHART_TYPE: Final = CHART_TYPE_LINE
DEFAULT_LINE_TYPE: Final = LINE_TYPE_NORMAL
DEFAULT_LEGEND_STYLE: Final = "entities"
DEFAULT_AXIS_STYLE: Final = "all"

# Entity kinds
KIND_POWER: Final = "power"
KIND_ENERGY: Final = "energy"

DOMAIN_LIGHT: Final = "light"
DOMAIN_SWITCH: Final = "switch"

# Statistics
STATISTICS_PERIODS: Final = ("5minute", "hour", "day", "week", "month")
DEFAULT_LOOKBACK_HOURS: Final = 24
PERIOD_DETAILED: Final = "5minute"
PERIOD_HOURLY: Final = "hour"

# Epoch milliseconds for 2000-01-01T00:00:00Z; smaller ``start`` values are seconds.
MS_TIMESTAMP_THRESHOLD: Final = 946_684_800_000

# Colors
DEFAULT_POWER_COLOR: Final = "rgba(59, 130, 246, 0.8)"
DEFAULT_ENERGY_COLOR: Final = "rgba(16, 185, 129, 0.8)"
UNTRACKED_POWER_COLOR: Final = "rgba(128, 128, 128, 0.7)"
TRANSPARENT: Final = "transparent"

POWER_PALETTE: Final = (
    "rgba(59, 130, 246, 0.8)",  # blue
    "rgba(239, 68, 68, 0.8)",  # red
    "rgba(245, 158, 11, 0.8)",  # orange
    "rgba(139, 92, 246, 0.8)",  # purple
    "rgba(236, 72, 153, 0.8)",  # pink
    "rgba(34, 197, 94, 0.8)",  # green
    "rgba(6, 182, 212, 0.8)",  # cyan
    "rgba(168, 85, 247, 0.8)",  # violet
)

ENERGY_PALETTE: Final = (
    "rgba(16, 185, 129, 0.8)",  # green
    "rgba(239, 68, 68, 0.8)",  # red
    "rgba(59, 130, 246, 0.8)",  # blue
    "rgba(245, 158, 11, 0.8)",  # orange
    "rgba(139, 92, 246, 0.8)",  # purple
    "rgba(236, 72, 153, 0.8)",  # pink
    "rgba(6, 182, 212, 0.8)",  # cyan
    "rgba(168, 85, 247, 0.8)",  # violet
)

# Home Assistant frontend theme color names, exposed as ``var(--<name>-color)``.
THEME_COLOR_NAMES: Final = frozenset(
    {
        "primary",
        "accent",
        "disabled",
        "red",
        "pink",
        "purple",
        "deep-purple",
        "indigo",
        "blue",
        "light-blue",
        "cyan",
        "teal",
        "green",
        "light-green",
        "lime",
        "yellow",
        "amber",
        "orange",
        "deep-orange",
        "brown",
        "light-grey",
        "grey",
        "dark-grey",
        "blue-grey",
        "black",
        "white",
    }
)

# Websocket commands
WS_TYPE_CHART: Final = f"{DOMAIN}/chart"
WS_TYPE_ENTRIES: Final = f"{DOMAIN}/entries"
