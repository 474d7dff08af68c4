"""Resolve, fetch and chart one area in a single refresh."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import tzinfo
import logging
from typing import Any

from .chart.builder import ChartConfigBuilder, ChartOptions
from .chart.serialize import serialize_chart_config
from .const import (
    DEFAULT_LOOKBACK_HOURS,
    PERIOD_DETAILED,
    PERIOD_HOURLY,
    STACKED_CHART_TYPES,
)
from .domain.config import AreaEnergyConfig
from .domain.models import PowerEnergyData, RegistrySnapshot, ResolvedEntities
from .legend import LegendItem, build_legend
from .resolver import ActivePredicate, area_display_name, is_state_active, resolve
from .statistics import NowCallable, StatisticsFetcher, StatisticsQuery, utcnow

_LOGGER = logging.getLogger(__name__)

NO_HISTORY_ERROR = "No history data available for entities: {}"


@dataclass(frozen=True, slots=True)
class AreaEnergyResult:
    """Outcome of one refresh of an area chart."""

    title: str | None
    period: str
    resolved: ResolvedEntities
    data: PowerEnergyData | None = None
    chart: dict[str, Any] | None = None
    legend: list[LegendItem] | None = None
    error: str | None = None

    @property
    def active_lights(self) -> int:
        return self.resolved.active_lights

    @property
    def active_switches(self) -> int:
        return self.resolved.active_switches

    def as_dict(self) -> dict[str, Any]:
        """Return a JSON-safe representation for the websocket API."""

        return {
            "title": self.title,
            "period": self.period,
            "active_lights": self.active_lights,
            "active_switches": self.active_switches,
            "entities": self.resolved.entity_ids,
            "chart": serialize_chart_config(self.chart) if self.chart is not None else None,
            "legend": (
                [item.as_dict() for item in self.legend]
                if self.legend is not None
                else None
            ),
            "error": self.error,
        }


def statistics_period(chart_type: str) -> str:
    """Return the aggregation period used for ``chart_type``.

    Stacked charts use hourly buckets to keep the number of bars low.
    """

    return PERIOD_HOURLY if chart_type in STACKED_CHART_TYPES else PERIOD_DETAILED


def chart_options_from_config(
    config: AreaEnergyConfig,
    *,
    theme: Mapping[str, str] | None = None,
    time_zone: tzinfo | None = None,
) -> ChartOptions:
    """Map the chart settings of ``config`` onto builder options."""

    chart = config.chart
    axis_style = chart.axis_style
    return ChartOptions(
        show_legend=chart.legend_style == "compact",
        hide_x_axis=axis_style in ("y_only", "none"),
        hide_y_axis=axis_style in ("x_only", "none"),
        chart_type=chart.chart_type,
        line_type=chart.line_type,
        entity_color_map=config.entity_color_map,
        theme=theme,
        time_zone=time_zone,
    )


async def async_build_area_energy(
    snapshot: RegistrySnapshot,
    config: AreaEnergyConfig,
    query: StatisticsQuery,
    builder: ChartConfigBuilder | None = None,
    *,
    lookback_hours: float = DEFAULT_LOOKBACK_HOURS,
    is_active: ActivePredicate = is_state_active,
    theme: Mapping[str, str] | None = None,
    time_zone: tzinfo | None = None,
    now: NowCallable = utcnow,
) -> AreaEnergyResult:
    """Run a full refresh for ``config`` and return the assembled result."""

    builder = builder if builder is not None else ChartConfigBuilder()
    title = None if config.hide_name else area_display_name(snapshot, config)
    resolved = resolve(snapshot, config, is_active=is_active)
    period = statistics_period(config.chart.chart_type)

    fetcher = StatisticsFetcher(query, states=snapshot.states, now=now)
    data = await fetcher.fetch(
        resolved,
        lookback_hours,
        period,
        config.chart.total_power_entity,
    )

    if not data.has_history:
        entity_ids = config.entity_ids or resolved.entity_ids
        _LOGGER.debug("Area %s: no history for %s", config.area, entity_ids)
        return AreaEnergyResult(
            title=title,
            period=period,
            resolved=resolved,
            data=data,
            error=NO_HISTORY_ERROR.format(", ".join(entity_ids)),
        )

    chart = builder.build(
        data, chart_options_from_config(config, theme=theme, time_zone=time_zone)
    )
    return AreaEnergyResult(
        title=title,
        period=period,
        resolved=resolved,
        data=data,
        chart=chart,
        legend=build_legend(config, resolved, data.untracked_power_data),
    )
