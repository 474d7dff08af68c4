"""Websocket commands serving area energy charts to the frontend."""

from __future__ import annotations

from collections.abc import Mapping
import logging
from typing import Any

import voluptuous as vol

from homeassistant.components import websocket_api
from homeassistant.core import HomeAssistant, callback
from homeassistant.helpers.update_coordinator import UpdateFailed

from .const import DOMAIN, WS_TYPE_CHART, WS_TYPE_ENTRIES

_LOGGER = logging.getLogger(__name__)

DATA_WS_REGISTERED = f"{DOMAIN}_ws_registered"


@callback
def async_setup(hass: HomeAssistant) -> None:
    """Register the websocket commands once per Home Assistant instance."""

    if hass.data.get(DATA_WS_REGISTERED):
        return
    websocket_api.async_register_command(hass, websocket_chart)
    websocket_api.async_register_command(hass, websocket_entries)
    hass.data[DATA_WS_REGISTERED] = True
    _LOGGER.debug("Area energy websocket API registered")


def _entry_records(hass: HomeAssistant) -> Mapping[str, Any]:
    domain_data = hass.data.get(DOMAIN)
    return domain_data if isinstance(domain_data, Mapping) else {}


@websocket_api.websocket_command(
    {
        vol.Required("type"): WS_TYPE_CHART,
        vol.Required("entry_id"): str,
    }
)
@websocket_api.async_response
async def websocket_chart(
    hass: HomeAssistant,
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
) -> None:
    """Refresh one area and return its serialised chart."""

    record = _entry_records(hass).get(msg["entry_id"])
    if not isinstance(record, Mapping) or record.get("coordinator") is None:
        connection.send_error(
            msg["id"], "not_found", f"Unknown area energy entry: {msg['entry_id']}"
        )
        return

    coordinator = record["coordinator"]
    try:
        await coordinator.async_refresh()
    except UpdateFailed as err:
        connection.send_error(msg["id"], "update_failed", str(err))
        return

    if coordinator.data is None:
        connection.send_error(
            msg["id"], "update_failed", "Area energy chart has not been built yet"
        )
        return

    connection.send_result(msg["id"], coordinator.data.as_dict())


@websocket_api.websocket_command({vol.Required("type"): WS_TYPE_ENTRIES})
@callback
def websocket_entries(
    hass: HomeAssistant,
    connection: websocket_api.ActiveConnection,
    msg: dict[str, Any],
) -> None:
    """List the configured area energy entries."""

    entries = [
        {
            "entry_id": entry_id,
            "area": record["coordinator"].config.area,
            "title": getattr(record.get("config_entry"), "title", None),
        }
        for entry_id, record in _entry_records(hass).items()
        if isinstance(record, Mapping) and record.get("coordinator") is not None
    ]
    connection.send_result(msg["id"], entries)
