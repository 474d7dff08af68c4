"""Home Assistant entry point for the Area Energy integration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import voluptuous as vol

from .const import DOMAIN
from .domain.config import config_from_entry

if TYPE_CHECKING:
    from homeassistant.config_entries import ConfigEntry
    from homeassistant.core import HomeAssistant

_LOGGER = logging.getLogger(__name__)


async def async_setup_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Set up an area chart for a config entry."""

    # Home Assistant bound modules load lazily so the chart core imports alone.
    from homeassistant.exceptions import ConfigEntryError

    from .coordinator import AreaEnergyCoordinator
    from .websocket import async_setup as async_setup_websocket

    try:
        config = config_from_entry(entry.data, entry.options)
    except vol.Invalid as err:
        raise ConfigEntryError(f"Invalid area energy configuration: {err}") from err

    coordinator = AreaEnergyCoordinator(hass, config, entry_id=entry.entry_id)

    hass.data.setdefault(DOMAIN, {})
    hass.data[DOMAIN][entry.entry_id] = {
        "coordinator": coordinator,
        "config_entry": entry,
    }

    async_setup_websocket(hass)
    entry.async_on_unload(entry.add_update_listener(async_update_entry_options))

    _LOGGER.debug(
        "Set up area energy chart for %s (%d configured entities)",
        config.area or "<no area>",
        len(config.entities),
    )
    return True


async def async_unload_entry(hass: HomeAssistant, entry: ConfigEntry) -> bool:
    """Unload a config entry for Area Energy."""

    domain_data: dict[str, Any] | None = hass.data.get(DOMAIN)
    if domain_data:
        domain_data.pop(entry.entry_id, None)
        if not domain_data:
            hass.data.pop(DOMAIN, None)
    return True


async def async_update_entry_options(hass: HomeAssistant, entry: ConfigEntry) -> None:
    """Reload the entry so option changes take effect."""

    await hass.config_entries.async_reload(entry.entry_id)
