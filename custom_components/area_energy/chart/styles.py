"""Dataset styling tables keyed by chart type, line type and series kind."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from itertools import product
from typing import Literal

from ..const import (
    CHART_TYPE_LINE,
    CHART_TYPE_STACKED_BAR,
    CHART_TYPE_STACKED_LINE,
    CHART_TYPES,
    KIND_ENERGY,
    KIND_POWER,
    LINE_TYPE_GRADIENT,
    LINE_TYPE_GRADIENT_NO_FILL,
    LINE_TYPE_NO_FILL,
    LINE_TYPE_NORMAL,
    LINE_TYPES,
)

BackgroundMode = Literal["tint", "transparent", "gradient"]


@dataclass(frozen=True, slots=True)
class KindStyle:
    """Per-kind dataset properties."""

    unit: str
    axis_id: str
    stack: str
    tension: float
    stepped: bool | str
    background_alpha: float


@dataclass(frozen=True, slots=True)
class ShapeStyle:
    """Per-chart-type dataset shape."""

    config_type: str
    bar: bool
    border_width: int
    point_hover_radius: int
    stacked: bool


@dataclass(frozen=True, slots=True)
class LineStyle:
    """Per-line-type coloring rules."""

    gradient_border: bool
    background: BackgroundMode
    fill: bool


@dataclass(frozen=True, slots=True)
class DatasetStyle:
    """Resolved styling for a ``(chart_type, line_type)`` pair."""

    shape: ShapeStyle
    line: LineStyle


KIND_STYLES: Mapping[str, KindStyle] = {
    KIND_POWER: KindStyle(
        unit="W",
        axis_id="y",
        stack=KIND_POWER,
        tension=0.4,
        stepped=False,
        background_alpha=0.1,
    ),
    KIND_ENERGY: KindStyle(
        unit="kWh",
        axis_id="y1",
        stack=KIND_ENERGY,
        tension=0,
        stepped="before",
        background_alpha=0.2,
    ),
}

SHAPES: Mapping[str, ShapeStyle] = {
    CHART_TYPE_LINE: ShapeStyle(
        config_type="line", bar=False, border_width=2, point_hover_radius=4, stacked=False
    ),
    CHART_TYPE_STACKED_LINE: ShapeStyle(
        config_type="line", bar=False, border_width=2, point_hover_radius=0, stacked=True
    ),
    CHART_TYPE_STACKED_BAR: ShapeStyle(
        config_type="bar", bar=True, border_width=1, point_hover_radius=0, stacked=True
    ),
}

LINES: Mapping[str, LineStyle] = {
    LINE_TYPE_NORMAL: LineStyle(gradient_border=False, background="tint", fill=True),
    LINE_TYPE_GRADIENT: LineStyle(gradient_border=True, background="gradient", fill=True),
    LINE_TYPE_GRADIENT_NO_FILL: LineStyle(
        gradient_border=True, background="transparent", fill=False
    ),
    LINE_TYPE_NO_FILL: LineStyle(gradient_border=False, background="transparent", fill=False),
}

DATASET_STYLES: Mapping[tuple[str, str], DatasetStyle] = {
    (chart_type, line_type): DatasetStyle(shape=SHAPES[chart_type], line=LINES[line_type])
    for chart_type, line_type in product(CHART_TYPES, LINE_TYPES)
}


def dataset_style(chart_type: str, line_type: str) -> DatasetStyle:
    """Return the dataset style for the given chart and line type."""

    return DATASET_STYLES[(chart_type, line_type)]
