"""Tests for the JSON-safe chart configuration."""

from __future__ import annotations

from datetime import UTC
import json

from conftest import make_series

from custom_components.area_energy.chart import (
    ChartConfigBuilder,
    ChartOptions,
    serialize_chart_config,
)
from custom_components.area_energy.domain.models import PowerEnergyData


def test_serialized_config_is_json_safe() -> None:
    data = PowerEnergyData(
        power_data=[make_series("sensor.p", [1, 2], name="P")],
        energy_data=[make_series("sensor.e", [3], name="E")],
    )
    config = ChartConfigBuilder().build(
        data, ChartOptions(line_type="gradient", time_zone=UTC)
    )

    serialized = serialize_chart_config(config)

    json.dumps(serialized)
    power = serialized["data"]["datasets"][0]
    assert power["borderColor"]["type"] == "gradient"
    assert power["borderColor"]["kind"] == "power"
    assert power["backgroundColor"]["fallback"] == "rgba(59, 130, 246, 0.1)"
    assert serialized["options"]["scales"]["x"]["ticks"]["callback"] == {
        "type": "callback",
        "name": "time_tick",
        "time_zone": "UTC",
    }
    assert serialized["options"]["plugins"]["tooltip"]["callbacks"]["label"] == {
        "type": "callback",
        "name": "format_tooltip_label",
    }


def test_serialize_leaves_plain_values_untouched() -> None:
    value = {"a": [1, "x", None, True], "b": ("t", 2.5)}

    assert serialize_chart_config(value) == {"a": [1, "x", None, True], "b": ["t", 2.5]}
