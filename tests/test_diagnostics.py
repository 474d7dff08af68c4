"""Tests for the diagnostics payload."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

pytest.importorskip("homeassistant")

from custom_components.area_energy import diagnostics
from custom_components.area_energy.chart.gradient import ChartArea, GradientCache
from custom_components.area_energy.const import DOMAIN
from custom_components.area_energy.domain.config import parse_config


async def _version(_hass) -> str:
    return "0.1.0"


def _entry() -> SimpleNamespace:
    return SimpleNamespace(
        entry_id="entry",
        title="Office",
        data={"area": "office"},
        options={"chart": {"chart_type": "line"}, "token": "secret"},
    )


def _hass(record=None) -> SimpleNamespace:
    data = {DOMAIN: {"entry": record}} if record is not None else {}
    return SimpleNamespace(
        data=data,
        version="2024.6.0",
        config=SimpleNamespace(time_zone="Europe/Oslo"),
    )


@pytest.mark.asyncio
async def test_diagnostics_without_coordinator(monkeypatch) -> None:
    monkeypatch.setattr(diagnostics, "async_get_integration_version", _version)

    payload = await diagnostics.async_get_config_entry_diagnostics(_hass(), _entry())

    assert payload["integration"] == {"domain": DOMAIN, "version": "0.1.0"}
    assert payload["home_assistant"]["version"] == "2024.6.0"
    assert payload["home_assistant"]["time_zone"] == "Europe/Oslo"
    assert payload["entry"]["data"] == {"area": "office"}
    assert payload["entry"]["options"]["token"] == "**REDACTED**"
    assert "area" not in payload


@pytest.mark.asyncio
async def test_diagnostics_reports_area_summary(monkeypatch) -> None:
    monkeypatch.setattr(diagnostics, "async_get_integration_version", _version)
    cache = GradientCache()
    cache.get("power", ChartArea(0, 0, 400, 200), "gradient")
    result = SimpleNamespace(
        resolved=SimpleNamespace(power_entities=["sensor.a", "sensor.b"], energy_entities=[]),
        active_lights=2,
        active_switches=0,
    )
    coordinator = SimpleNamespace(
        config=parse_config({"area": "office", "chart": {"line_type": "gradient"}}),
        builder=SimpleNamespace(gradient_cache=cache),
        data=result,
        last_refresh={"period": "5minute", "datasets": 2},
    )

    payload = await diagnostics.async_get_config_entry_diagnostics(
        _hass({"coordinator": coordinator}), _entry()
    )

    assert payload["area"] == {
        "area": "office",
        "chart_type": "line",
        "line_type": "gradient",
        "cached_gradients": ["power"],
        "power_entities": 2,
        "energy_entities": 0,
        "active_lights": 2,
        "active_switches": 0,
        "last_refresh": {"period": "5minute", "datasets": 2},
    }
