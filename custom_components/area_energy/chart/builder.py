"""Build Chart.js style configurations for power and energy series."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
import logging
from typing import Any, ClassVar

from ..const import (
    CHART_TYPES,
    DEFAULT_CHART_TYPE,
    DEFAULT_ENERGY_COLOR,
    DEFAULT_LINE_TYPE,
    DEFAULT_POWER_COLOR,
    KIND_ENERGY,
    KIND_POWER,
    LINE_TYPES,
    TRANSPARENT,
    UNTRACKED_POWER_COLOR,
)
from ..domain.models import ChartData, EntityData
from ..util import finite_number
from .colors import get_entity_color, resolve_color, with_alpha
from .gradient import GradientCache, GradientColor
from .styles import KIND_STYLES, DatasetStyle, dataset_style

_LOGGER = logging.getLogger(__name__)

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

GRID_COLOR = "rgba(0, 0, 0, 0.05)"
TICK_COLOR = "#666"


@dataclass(frozen=True, slots=True)
class ChartOptions:
    """Rendering options for :meth:`ChartConfigBuilder.build`."""

    responsive: bool = True
    maintain_aspect_ratio: bool = False
    show_legend: bool = False
    hide_x_axis: bool = False
    hide_y_axis: bool = False
    chart_type: str = DEFAULT_CHART_TYPE
    line_type: str = DEFAULT_LINE_TYPE
    entity_color_map: Mapping[str, str] = field(default_factory=dict)
    theme: Mapping[str, str] | None = None
    time_zone: tzinfo | None = None


@dataclass(frozen=True, slots=True)
class TimeTickFormatter:
    """Format x-axis ticks: ``Jan 1`` at local midnight, ``HH:MM`` otherwise."""

    callback_name: ClassVar[str] = "time_tick"

    time_zone: tzinfo | None = None

    def __call__(self, value: Any, index: int | None = None, ticks: Any = None) -> str:
        millis = finite_number(value)
        if millis is None:
            return str(value)
        if self.time_zone is not None:
            moment = datetime.fromtimestamp(millis / 1000, self.time_zone)
        else:
            moment = datetime.fromtimestamp(millis / 1000)
        if moment.hour == 0 and moment.minute == 0:
            return f"{_MONTHS[moment.month - 1]} {moment.day}"
        return f"{moment.hour:02d}:{moment.minute:02d}"


def format_tooltip_label(context: Mapping[str, Any]) -> str:
    """Return ``"<dataset label>: <value to one decimal>"`` for a tooltip row."""

    dataset = context.get("dataset") or {}
    label = dataset.get("label") or ""
    parsed = context.get("parsed") or {}
    value = finite_number(parsed.get("y"))
    return f"{label}: {value:.1f}" if value is not None else f"{label}: 0"


def _points(series: EntityData) -> list[dict[str, float]]:
    return [{"x": point.timestamp_ms, "y": point.value} for point in series.data]


class ChartConfigBuilder:
    """Create chart configurations while keeping gradients between builds."""

    def __init__(self, gradient_cache: GradientCache | None = None) -> None:
        self.gradient_cache = gradient_cache if gradient_cache is not None else GradientCache()

    def _style(self, options: ChartOptions) -> tuple[str, str, DatasetStyle]:
        chart_type = options.chart_type
        if chart_type not in CHART_TYPES:
            _LOGGER.debug("Unknown chart type %s; using %s", chart_type, DEFAULT_CHART_TYPE)
            chart_type = DEFAULT_CHART_TYPE
        line_type = options.line_type
        if line_type not in LINE_TYPES:
            _LOGGER.debug("Unknown line type %s; using %s", line_type, DEFAULT_LINE_TYPE)
            line_type = DEFAULT_LINE_TYPE
        return chart_type, line_type, dataset_style(chart_type, line_type)

    def _entity_color(
        self,
        series: EntityData,
        index: int,
        kind: str,
        total: int,
        options: ChartOptions,
    ) -> str:
        color = get_entity_color(
            series.entity_id, index, kind, total, options.entity_color_map
        )
        resolved = resolve_color(color, options.theme)
        if not resolved:
            return DEFAULT_POWER_COLOR if kind == KIND_POWER else DEFAULT_ENERGY_COLOR
        return resolved

    def _dataset(
        self,
        series: EntityData,
        index: int,
        total: int,
        kind: str,
        line_type: str,
        style: DatasetStyle,
        options: ChartOptions,
    ) -> dict[str, Any]:
        kind_style = KIND_STYLES[kind]
        color = self._entity_color(series, index, kind, total, options)
        dataset: dict[str, Any] = {
            "label": f"{series.friendly_name} ({kind_style.unit})",
            "data": _points(series),
            "borderWidth": style.shape.border_width,
            "yAxisID": kind_style.axis_id,
        }

        if style.shape.bar:
            dataset["backgroundColor"] = color
            dataset["borderColor"] = color
            dataset["stack"] = kind_style.stack
            return dataset

        tint = with_alpha(color, kind_style.background_alpha)
        if style.line.gradient_border:
            dataset["borderColor"] = GradientColor(
                self.gradient_cache, kind, line_type, color
            )
        else:
            dataset["borderColor"] = color

        if style.line.background == "gradient":
            dataset["backgroundColor"] = GradientColor(
                self.gradient_cache, kind, line_type, tint
            )
        elif style.line.background == "transparent":
            dataset["backgroundColor"] = TRANSPARENT
        else:
            dataset["backgroundColor"] = tint

        dataset["fill"] = style.line.fill
        dataset["tension"] = kind_style.tension
        dataset["stepped"] = kind_style.stepped
        dataset["pointRadius"] = 0
        dataset["pointHoverRadius"] = style.shape.point_hover_radius
        if style.shape.stacked:
            dataset["stack"] = kind_style.stack
        return dataset

    def _untracked_dataset(
        self, series: EntityData, style: DatasetStyle
    ) -> dict[str, Any]:
        power_style = KIND_STYLES[KIND_POWER]
        dataset: dict[str, Any] = {
            "label": series.friendly_name,
            "data": _points(series),
            "backgroundColor": UNTRACKED_POWER_COLOR,
            "borderColor": UNTRACKED_POWER_COLOR,
            "borderWidth": style.shape.border_width,
            "stack": power_style.stack,
            "yAxisID": power_style.axis_id,
        }
        if not style.shape.bar:
            if not style.line.fill:
                dataset["backgroundColor"] = TRANSPARENT
            dataset["fill"] = style.line.fill
            dataset["tension"] = power_style.tension
            dataset["stepped"] = power_style.stepped
            dataset["pointRadius"] = 0
            dataset["pointHoverRadius"] = style.shape.point_hover_radius
        return dataset

    def _datasets(
        self, data: ChartData, line_type: str, style: DatasetStyle, options: ChartOptions
    ) -> list[dict[str, Any]]:
        datasets: list[dict[str, Any]] = []

        total_power = len(data.power_data)
        for index, series in enumerate(data.power_data):
            if series.is_empty:
                continue
            datasets.append(
                self._dataset(
                    series, index, total_power, KIND_POWER, line_type, style, options
                )
            )

        untracked = data.untracked_power_data
        if style.shape.stacked and untracked is not None and not untracked.is_empty:
            datasets.append(self._untracked_dataset(untracked, style))

        total_energy = len(data.energy_data)
        for index, series in enumerate(data.energy_data):
            if series.is_empty:
                continue
            datasets.append(
                self._dataset(
                    series, index, total_energy, KIND_ENERGY, line_type, style, options
                )
            )
        return datasets

    @staticmethod
    def _scales(options: ChartOptions, stacked: bool) -> dict[str, Any]:
        show_x = not options.hide_x_axis
        show_y = not options.hide_y_axis
        return {
            "x": {
                "type": "time",
                "display": show_x,
                "stacked": stacked,
                "time": {
                    "unit": "hour",
                    "displayFormats": {"hour": "HH:mm", "day": "MMM d"},
                },
                "grid": {"color": GRID_COLOR, "display": show_x},
                "ticks": {
                    "color": TICK_COLOR,
                    "display": show_x,
                    "callback": TimeTickFormatter(options.time_zone),
                },
            },
            "y": {
                "type": "linear",
                "display": show_y,
                "position": "left",
                "stacked": stacked,
                "title": {
                    "display": show_y,
                    "text": "Power (W)",
                    "color": DEFAULT_POWER_COLOR,
                },
                "grid": {"color": GRID_COLOR, "display": show_y},
                "ticks": {"color": TICK_COLOR, "display": show_y},
            },
            "y1": {
                "type": "linear",
                "display": show_y,
                "position": "right",
                "stacked": stacked,
                "title": {
                    "display": show_y,
                    "text": "Energy (kWh)",
                    "color": DEFAULT_ENERGY_COLOR,
                },
                "grid": {"drawOnChartArea": False, "display": show_y},
                "ticks": {"color": TICK_COLOR, "display": show_y},
            },
        }

    def build(
        self, data: ChartData, options: ChartOptions | None = None
    ) -> dict[str, Any]:
        """Return the chart configuration for ``data``.

        Series without points produce no dataset. Gradient colors stay lazy
        and share this builder's :class:`GradientCache`.
        """

        options = options or ChartOptions()
        _, line_type, style = self._style(options)
        datasets = self._datasets(data, line_type, style, options)

        _LOGGER.debug(
            "Built %s chart with %d datasets (%s)",
            style.shape.config_type,
            len(datasets),
            line_type,
        )

        return {
            "type": style.shape.config_type,
            "data": {"datasets": datasets},
            "options": {
                "responsive": options.responsive,
                "maintainAspectRatio": options.maintain_aspect_ratio,
                "interaction": {"mode": "index", "intersect": False},
                "plugins": {
                    "legend": {"display": options.show_legend},
                    "tooltip": {
                        "backgroundColor": "rgba(0, 0, 0, 0.8)",
                        "titleColor": "#fff",
                        "bodyColor": "#fff",
                        "borderColor": "rgba(255, 255, 255, 0.1)",
                        "borderWidth": 1,
                        "padding": 12,
                        "displayColors": True,
                        "callbacks": {"label": format_tooltip_label},
                    },
                },
                "scales": self._scales(options, style.shape.stacked),
            },
        }
