"""Legend entries shown next to the chart."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from .chart.colors import get_entity_color
from .chart.styles import KIND_STYLES
from .const import KIND_ENERGY, KIND_POWER, STACKED_CHART_TYPES, UNTRACKED_POWER_COLOR
from .domain.config import AreaEnergyConfig
from .domain.models import EntityData, EntityState, ResolvedEntities
from .formatting import format_energy, format_power
from .util import float_or_none

LEGEND_STYLE_ENTITIES = "entities"


@dataclass(frozen=True, slots=True)
class LegendItem:
    """One row of the legend."""

    entity_id: str
    label: str
    color: str
    value: str | None

    def as_dict(self) -> dict[str, Any]:
        return {
            "entity_id": self.entity_id,
            "label": self.label,
            "color": self.color,
            "value": self.value,
        }


def _state_text(state: EntityState, kind: str) -> str:
    value = float_or_none(state.state)
    if value is None:
        return state.state
    return format_power(value) if kind == KIND_POWER else format_energy(value)


def _items(
    states: Sequence[EntityState], kind: str, color_map: dict[str, str]
) -> list[LegendItem]:
    unit = KIND_STYLES[kind].unit
    return [
        LegendItem(
            entity_id=state.entity_id,
            label=f"{state.friendly_name} ({unit})",
            color=get_entity_color(
                state.entity_id, index, kind, len(states), color_map
            ),
            value=_state_text(state, kind),
        )
        for index, state in enumerate(states)
    ]


def build_legend(
    config: AreaEnergyConfig,
    resolved: ResolvedEntities,
    untracked: EntityData | None = None,
) -> list[LegendItem] | None:
    """Return the legend rows, or ``None`` when the legend is hidden.

    Only the ``entities`` legend style renders a legend. Power rows come first,
    then energy rows, then the untracked series with its latest value. The
    untracked row only appears for stacked charts, which draw that series.
    """

    if config.chart.legend_style != LEGEND_STYLE_ENTITIES:
        return None

    color_map = config.entity_color_map
    items = _items(resolved.power_entities, KIND_POWER, color_map)
    items.extend(_items(resolved.energy_entities, KIND_ENERGY, color_map))

    if (
        config.chart.chart_type in STACKED_CHART_TYPES
        and untracked is not None
        and not untracked.is_empty
    ):
        items.append(
            LegendItem(
                entity_id=untracked.entity_id,
                label=untracked.friendly_name,
                color=UNTRACKED_POWER_COLOR,
                value=format_power(untracked.data[-1].value),
            )
        )
    return items
