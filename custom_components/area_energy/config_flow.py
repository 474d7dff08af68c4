"""Config flow handlers for the Area Energy integration."""

from __future__ import annotations

import logging
from typing import Any

from homeassistant import config_entries
from homeassistant.config_entries import ConfigEntry
from homeassistant.core import callback
from homeassistant.data_entry_flow import FlowResult
from homeassistant.helpers import selector
import voluptuous as vol

from .const import (
    AXIS_STYLES,
    CHART_TYPES,
    CONF_AREA,
    CONF_AXIS_STYLE,
    CONF_CHART,
    CONF_CHART_TYPE,
    CONF_COLOR,
    CONF_ENTITIES,
    CONF_ENTITY_ID,
    CONF_FEATURES,
    CONF_LEGEND_STYLE,
    CONF_LINE_TYPE,
    CONF_NAME,
    CONF_TOTAL_POWER_ENTITY,
    DEFAULT_AXIS_STYLE,
    DEFAULT_CHART_TYPE,
    DEFAULT_LEGEND_STYLE,
    DEFAULT_LINE_TYPE,
    DOMAIN,
    FEATURES,
    KIND_ENERGY,
    KIND_POWER,
    LEGEND_STYLES,
    LINE_TYPES,
)
from .coordinator import build_registry_snapshot
from .domain.config import config_from_entry, parse_config
from .resolver import suggest_area

_LOGGER = logging.getLogger(__name__)


def _select(options: tuple[str, ...], *, multiple: bool = False) -> selector.SelectSelector:
    return selector.SelectSelector(
        selector.SelectSelectorConfig(
            options=list(options),
            multiple=multiple,
            mode=selector.SelectSelectorMode.DROPDOWN,
        )
    )


def _user_schema(default_area: str = "", default_name: str = "") -> vol.Schema:
    """Build the area form schema with provided defaults."""
    return vol.Schema(
        {
            vol.Required(CONF_AREA, default=default_area): selector.AreaSelector(),
            vol.Optional(CONF_NAME, default=default_name): selector.TextSelector(),
        }
    )


def _options_schema(current: dict[str, Any]) -> vol.Schema:
    """Build the options form schema from the current options."""
    chart = current.get(CONF_CHART) or {}
    entities = [
        entity_id
        for item in current.get(CONF_ENTITIES) or []
        if (entity_id := item if isinstance(item, str) else item.get("entity_id"))
    ]
    total_power = chart.get(CONF_TOTAL_POWER_ENTITY)
    total_power_key = (
        vol.Optional(CONF_TOTAL_POWER_ENTITY, default=total_power)
        if total_power
        else vol.Optional(CONF_TOTAL_POWER_ENTITY)
    )
    return vol.Schema(
        {
            vol.Optional(CONF_ENTITIES, default=entities): selector.EntitySelector(
                selector.EntitySelectorConfig(
                    device_class=[KIND_POWER, KIND_ENERGY], multiple=True
                )
            ),
            vol.Required(
                CONF_CHART_TYPE, default=chart.get(CONF_CHART_TYPE, DEFAULT_CHART_TYPE)
            ): _select(CHART_TYPES),
            vol.Required(
                CONF_LINE_TYPE, default=chart.get(CONF_LINE_TYPE, DEFAULT_LINE_TYPE)
            ): _select(LINE_TYPES),
            vol.Required(
                CONF_LEGEND_STYLE,
                default=chart.get(CONF_LEGEND_STYLE, DEFAULT_LEGEND_STYLE),
            ): _select(LEGEND_STYLES),
            vol.Required(
                CONF_AXIS_STYLE, default=chart.get(CONF_AXIS_STYLE, DEFAULT_AXIS_STYLE)
            ): _select(AXIS_STYLES),
            total_power_key: selector.EntitySelector(
                selector.EntitySelectorConfig(device_class=KIND_POWER)
            ),
            vol.Optional(
                CONF_FEATURES, default=list(current.get(CONF_FEATURES) or [])
            ): _select(FEATURES, multiple=True),
        }
    )


def _entities_with_colors(
    selected: list[str], current: list[Any] | None
) -> list[str | dict[str, Any]]:
    """Re-attach stored colors to the entity ids picked in the form."""

    colors = {
        item[CONF_ENTITY_ID]: item[CONF_COLOR]
        for item in current or []
        if isinstance(item, dict) and item.get(CONF_ENTITY_ID) and item.get(CONF_COLOR)
    }
    return [
        {CONF_ENTITY_ID: entity_id, CONF_COLOR: colors[entity_id]}
        if entity_id in colors
        else entity_id
        for entity_id in selected
    ]


def options_from_input(
    user_input: dict[str, Any], current: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Fold flat form values into the stored options layout.

    Colors of entities already stored in ``current`` survive the round trip.
    """

    return {
        CONF_ENTITIES: _entities_with_colors(
            list(user_input.get(CONF_ENTITIES) or []),
            (current or {}).get(CONF_ENTITIES),
        ),
        CONF_CHART: {
            CONF_CHART_TYPE: user_input.get(CONF_CHART_TYPE, DEFAULT_CHART_TYPE),
            CONF_LINE_TYPE: user_input.get(CONF_LINE_TYPE, DEFAULT_LINE_TYPE),
            CONF_LEGEND_STYLE: user_input.get(CONF_LEGEND_STYLE, DEFAULT_LEGEND_STYLE),
            CONF_AXIS_STYLE: user_input.get(CONF_AXIS_STYLE, DEFAULT_AXIS_STYLE),
            CONF_TOTAL_POWER_ENTITY: user_input.get(CONF_TOTAL_POWER_ENTITY) or None,
        },
        CONF_FEATURES: list(user_input.get(CONF_FEATURES) or []),
    }


class AreaEnergyConfigFlow(config_entries.ConfigFlow, domain=DOMAIN):
    """Pick the area a chart is built for."""

    VERSION = 1

    async def async_step_user(self, user_input: dict[str, Any] | None = None) -> FlowResult:
        """Collect the area and optional title and create the config entry."""
        if user_input is None:
            default_area = suggest_area(build_registry_snapshot(self.hass))
            return self.async_show_form(
                step_id="user", data_schema=_user_schema(default_area=default_area)
            )

        errors: dict[str, str] = {}
        try:
            config = parse_config(user_input)
        except vol.Invalid as err:
            _LOGGER.debug("Rejected area energy input %s: %s", user_input, err)
            errors["base"] = "invalid_config"
        else:
            if not config.area:
                errors[CONF_AREA] = "area_required"

        if errors:
            return self.async_show_form(
                step_id="user",
                data_schema=_user_schema(
                    default_area=user_input.get(CONF_AREA) or "",
                    default_name=user_input.get(CONF_NAME) or "",
                ),
                errors=errors,
            )

        await self.async_set_unique_id(config.area)
        self._abort_if_unique_id_configured()

        data = {CONF_AREA: config.area}
        if config.name:
            data[CONF_NAME] = config.name
        return self.async_create_entry(title=config.name or config.area, data=data)

    @staticmethod
    @callback
    def async_get_options_flow(config_entry: ConfigEntry) -> AreaEnergyOptionsFlow:
        """Return the options flow handler for this config entry."""
        return AreaEnergyOptionsFlow(config_entry)


class AreaEnergyOptionsFlow(config_entries.OptionsFlow):
    """Options flow for entities, chart settings and features."""

    def __init__(self, entry: ConfigEntry) -> None:
        """Store the entry being configured."""
        self.entry = entry

    async def async_step_init(self, user_input: dict[str, Any] | None = None) -> FlowResult:
        """Show or process the chart options form."""
        if user_input is None:
            return self.async_show_form(
                step_id="init", data_schema=_options_schema(dict(self.entry.options))
            )

        options = options_from_input(user_input, dict(self.entry.options))
        try:
            config_from_entry(self.entry.data, options)
        except vol.Invalid as err:
            _LOGGER.debug("Rejected area energy options %s: %s", user_input, err)
            return self.async_show_form(
                step_id="init",
                data_schema=_options_schema(options),
                errors={"base": "invalid_config"},
            )
        return self.async_create_entry(title="", data=options)
