"""Diagnostics support for the Area Energy integration."""

from __future__ import annotations

from collections.abc import Mapping
import inspect
import logging
import platform
from typing import Any, Final

from homeassistant.components.diagnostics import async_redact_data
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import HomeAssistant
from homeassistant.loader import async_get_integration

from .const import DOMAIN

_LOGGER = logging.getLogger(__name__)

SENSITIVE_FIELDS: Final = {"access_token", "token"}


async def async_get_integration_version(hass: HomeAssistant) -> str:
    """Return the installed integration version string."""

    integration = await async_get_integration(hass, DOMAIN)
    return integration.version or "unknown"


async def async_get_config_entry_diagnostics(
    hass: HomeAssistant, entry: ConfigEntry
) -> Mapping[str, Any]:
    """Return a diagnostics payload for ``entry``."""

    domain_data = hass.data.get(DOMAIN)
    record: Mapping[str, Any] | None = None
    if isinstance(domain_data, Mapping):
        candidate = domain_data.get(entry.entry_id)
        if isinstance(candidate, Mapping):
            record = candidate

    version = await async_get_integration_version(hass)
    ha_version = getattr(hass, "version", None)
    ha_version_str = str(ha_version) if ha_version is not None else "unknown"

    hass_config = getattr(hass, "config", None)
    time_zone = getattr(hass_config, "time_zone", None)

    diagnostics: dict[str, Any] = {
        "integration": {"domain": DOMAIN, "version": version},
        "home_assistant": {
            "version": ha_version_str,
            "python_version": platform.python_version(),
        },
        "entry": {
            "title": entry.title,
            "data": dict(entry.data),
            "options": dict(entry.options),
        },
    }
    if time_zone not in (None, ""):
        diagnostics["home_assistant"]["time_zone"] = str(time_zone)

    coordinator = record.get("coordinator") if record is not None else None
    if coordinator is not None:
        result = coordinator.data
        area: dict[str, Any] = {
            "area": coordinator.config.area,
            "chart_type": coordinator.config.chart.chart_type,
            "line_type": coordinator.config.chart.line_type,
            "cached_gradients": sorted(coordinator.builder.gradient_cache.entries),
        }
        if result is not None:
            area.update(
                {
                    "power_entities": len(result.resolved.power_entities),
                    "energy_entities": len(result.resolved.energy_entities),
                    "active_lights": result.active_lights,
                    "active_switches": result.active_switches,
                }
            )
        if coordinator.last_refresh is not None:
            area["last_refresh"] = dict(coordinator.last_refresh)
        diagnostics["area"] = area

    _LOGGER.debug("Diagnostics collected for %s", entry.entry_id)

    try:
        redacted = async_redact_data(diagnostics, SENSITIVE_FIELDS)
        if inspect.isawaitable(redacted):
            redacted = await redacted
    except Exception:
        _LOGGER.exception("Failed to redact diagnostics payload for %s", entry.entry_id)
        raise
    return redacted
