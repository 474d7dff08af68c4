"""Tests for configuration parsing and normalisation."""

from __future__ import annotations

import pytest
import voluptuous as vol

from custom_components.area_energy.const import (
    DEFAULT_AXIS_STYLE,
    DEFAULT_CHART_TYPE,
    DEFAULT_LEGEND_STYLE,
    DEFAULT_LINE_TYPE,
)
from custom_components.area_energy.domain.config import (
    EntityConfig,
    config_from_entry,
    normalize_entity,
    parse_config,
)


def test_parse_config_applies_defaults() -> None:
    config = parse_config({"area": "kitchen"})

    assert config.area == "kitchen"
    assert config.name is None
    assert config.entities == ()
    assert config.chart.chart_type == DEFAULT_CHART_TYPE
    assert config.chart.line_type == DEFAULT_LINE_TYPE
    assert config.chart.legend_style == DEFAULT_LEGEND_STYLE
    assert config.chart.axis_style == DEFAULT_AXIS_STYLE
    assert config.chart.total_power_entity is None
    assert config.features == frozenset()
    assert not config.hide_name
    assert not config.exclude_default_entities


def test_parse_config_normalises_mixed_entities() -> None:
    config = parse_config(
        {
            "area": "office",
            "entities": [
                "sensor.desk_power",
                {"entity_id": "sensor.lamp_power", "color": "red"},
                {"entity_id": "sensor.pc_energy", "color": ""},
            ],
            "features": ["hide_name", "exclude_default_entities"],
            "chart": {"chart_type": "stacked_bar", "total_power_entity": "sensor.main"},
        }
    )

    assert config.entities == (
        EntityConfig("sensor.desk_power"),
        EntityConfig("sensor.lamp_power", "red"),
        EntityConfig("sensor.pc_energy"),
    )
    assert config.entity_ids == [
        "sensor.desk_power",
        "sensor.lamp_power",
        "sensor.pc_energy",
    ]
    assert config.entity_color_map == {"sensor.lamp_power": "red"}
    assert config.hide_name
    assert config.exclude_default_entities
    assert config.chart.chart_type == "stacked_bar"
    assert config.chart.total_power_entity == "sensor.main"


def test_entity_color_map_prefers_last_duplicate() -> None:
    config = parse_config(
        {
            "area": "a",
            "entities": [
                {"entity_id": "sensor.x", "color": "red"},
                {"entity_id": "sensor.x", "color": "blue"},
            ],
        }
    )

    assert config.entity_color_map == {"sensor.x": "blue"}


def test_empty_total_power_entity_is_none() -> None:
    config = parse_config({"area": "a", "chart": {"total_power_entity": ""}})

    assert config.chart.total_power_entity is None


@pytest.mark.parametrize(
    "raw",
    [
        {"area": "a", "entities": ["not_an_entity"]},
        {"area": "a", "entities": [{"color": "red"}]},
        {"area": "a", "chart": {"chart_type": "pie"}},
        {"area": "a", "chart": {"line_type": "dotted"}},
        {"area": "a", "features": ["unknown"]},
    ],
)
def test_parse_config_rejects_invalid_input(raw) -> None:
    with pytest.raises(vol.Invalid):
        parse_config(raw)


def test_normalize_entity_accepts_string_and_mapping() -> None:
    assert normalize_entity("sensor.a") == EntityConfig("sensor.a")
    assert normalize_entity({"entity_id": "sensor.b", "color": "#fff"}) == EntityConfig(
        "sensor.b", "#fff"
    )


def test_config_from_entry_merges_options_over_data() -> None:
    config = config_from_entry(
        {"area": "garage", "name": "Garage"},
        {"entities": ["sensor.charger_power"], "chart": {"axis_style": "none"}},
    )

    assert config.area == "garage"
    assert config.name == "Garage"
    assert config.entity_ids == ["sensor.charger_power"]
    assert config.chart.axis_style == "none"
