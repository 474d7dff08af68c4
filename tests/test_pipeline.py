"""Tests for the end-to-end area refresh."""

from __future__ import annotations

from datetime import datetime, timedelta
import json

from conftest import NOW, FakeStatisticsQuery, make_snapshot, make_state, rows_at
import pytest

from custom_components.area_energy.chart.builder import ChartConfigBuilder
from custom_components.area_energy.domain.config import parse_config
from custom_components.area_energy.domain.models import AreaEntry, EntityEntry
from custom_components.area_energy.pipeline import (
    async_build_area_energy,
    chart_options_from_config,
    statistics_period,
)


def _now() -> datetime:
    return NOW


def _snapshot():
    return make_snapshot(
        [
            EntityEntry("sensor.heater_power", area_id="bath"),
            EntityEntry("sensor.bath_energy", area_id="bath"),
            EntityEntry("sensor.main_power", area_id="hall"),
            EntityEntry("light.bath", area_id="bath"),
        ],
        [
            make_state("sensor.heater_power", "800", device_class="power", name="Heater"),
            make_state("sensor.bath_energy", "4", device_class="energy", name="Bath"),
            make_state("sensor.main_power", "900", device_class="power", name="Main"),
            make_state("light.bath", "on"),
        ],
        areas=[AreaEntry("bath", "Bathroom")],
    )


@pytest.mark.parametrize(
    "chart_type, period",
    [("line", "5minute"), ("stacked_bar", "hour"), ("stacked_line", "hour")],
)
def test_statistics_period(chart_type, period) -> None:
    assert statistics_period(chart_type) == period


@pytest.mark.parametrize(
    "axis_style, hide_x, hide_y",
    [
        ("all", False, False),
        ("x_only", False, True),
        ("y_only", True, False),
        ("none", True, True),
    ],
)
def test_chart_options_axis_mapping(axis_style, hide_x, hide_y) -> None:
    options = chart_options_from_config(
        parse_config({"area": "a", "chart": {"axis_style": axis_style}})
    )

    assert options.hide_x_axis is hide_x
    assert options.hide_y_axis is hide_y


def test_compact_legend_enables_chart_legend() -> None:
    compact = parse_config({"area": "a", "chart": {"legend_style": "compact"}})
    entities = parse_config({"area": "a"})

    assert chart_options_from_config(compact).show_legend is True
    assert chart_options_from_config(entities).show_legend is False


@pytest.mark.asyncio
async def test_build_area_energy_end_to_end() -> None:
    config = parse_config(
        {
            "area": "bath",
            "chart": {"chart_type": "stacked_bar", "total_power_entity": "sensor.main_power"},
        }
    )
    query = FakeStatisticsQuery(
        {
            "sensor.heater_power": rows_at([600, 700]),
            "sensor.bath_energy": rows_at([1.0, 1.4]),
            "sensor.main_power": rows_at([900, 650]),
        }
    )
    builder = ChartConfigBuilder()

    result = await async_build_area_energy(_snapshot(), config, query, builder, now=_now)

    assert result.error is None
    assert result.title == "Bathroom Energy Consumption"
    assert result.period == "hour"
    assert result.active_lights == 1
    assert result.active_switches == 0
    assert {call[3] for call in query.calls} == {"hour"}
    assert {call[1] for call in query.calls} == {NOW - timedelta(hours=24)}

    labels = [ds["label"] for ds in result.chart["data"]["datasets"]]
    assert labels == ["Heater (W)", "Main (Untracked)", "Bath (kWh)"]
    assert [item.label for item in result.legend] == [
        "Heater (W)",
        "Bath (kWh)",
        "Main (Untracked)",
    ]

    payload = result.as_dict()
    json.dumps(payload)
    assert payload["entities"] == ["sensor.heater_power", "sensor.bath_energy"]
    assert payload["chart"]["type"] == "bar"


@pytest.mark.asyncio
async def test_build_area_energy_without_history_reports_error() -> None:
    config = parse_config(
        {
            "area": "bath",
            "entities": ["sensor.heater_power", "sensor.bath_energy"],
            "features": ["hide_name"],
        }
    )

    result = await async_build_area_energy(
        _snapshot(), config, FakeStatisticsQuery(), now=_now
    )

    assert result.title is None
    assert result.chart is None
    assert result.legend is None
    assert result.error == (
        "No history data available for entities: sensor.heater_power, sensor.bath_energy"
    )
    assert result.as_dict()["chart"] is None


@pytest.mark.asyncio
async def test_build_area_energy_survives_fetch_failures() -> None:
    query = FakeStatisticsQuery(
        {"sensor.bath_energy": rows_at([2.0])},
        failures={"sensor.heater_power": RuntimeError("recorder busy")},
    )

    result = await async_build_area_energy(
        _snapshot(), parse_config({"area": "bath"}), query, now=_now
    )

    assert result.error is None
    assert [ds["label"] for ds in result.chart["data"]["datasets"]] == ["Bath (kWh)"]
