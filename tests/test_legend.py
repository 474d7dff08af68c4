"""Tests for the legend model."""

from __future__ import annotations

from conftest import make_series, make_state

from custom_components.area_energy.const import (
    DEFAULT_ENERGY_COLOR,
    POWER_PALETTE,
    UNTRACKED_POWER_COLOR,
)
from custom_components.area_energy.domain.config import parse_config
from custom_components.area_energy.domain.models import ResolvedEntities
from custom_components.area_energy.legend import LegendItem, build_legend

RESOLVED = ResolvedEntities(
    power_entities=(
        make_state("sensor.tv_power", "1500", device_class="power", name="TV"),
        make_state("sensor.pc_power", "unavailable", device_class="power", name="PC"),
    ),
    energy_entities=(
        make_state("sensor.house_energy", "12.5", device_class="energy", name="House"),
    ),
)


def test_legend_lists_power_then_energy() -> None:
    config = parse_config(
        {"area": "den", "entities": [{"entity_id": "sensor.pc_power", "color": "teal"}]}
    )

    items = build_legend(config, RESOLVED)

    assert items == [
        LegendItem("sensor.tv_power", "TV (W)", POWER_PALETTE[0], "1.5 kW"),
        LegendItem("sensor.pc_power", "PC (W)", "var(--teal-color)", "unavailable"),
        LegendItem("sensor.house_energy", "House (kWh)", DEFAULT_ENERGY_COLOR, "12.5 kWh"),
    ]


def test_legend_appends_untracked_latest_value() -> None:
    untracked = make_series("sensor.main", [10, 75.5], name="Main (Untracked)")

    items = build_legend(
        parse_config({"area": "den", "chart": {"chart_type": "stacked_bar"}}),
        RESOLVED,
        untracked,
    )

    assert items is not None
    assert items[-1].as_dict() == {
        "entity_id": "sensor.main",
        "label": "Main (Untracked)",
        "color": UNTRACKED_POWER_COLOR,
        "value": "75.5 W",
    }


def test_line_chart_legend_omits_untracked_row() -> None:
    untracked = make_series("sensor.main", [10, 75.5], name="Main (Untracked)")

    items = build_legend(parse_config({"area": "den"}), RESOLVED, untracked)

    assert items is not None
    assert "sensor.main" not in [item.entity_id for item in items]


def test_legend_hidden_for_other_styles() -> None:
    for style in ("compact", "none"):
        config = parse_config({"area": "den", "chart": {"legend_style": style}})
        assert build_legend(config, RESOLVED) is None
