"""Normalisation of the user-facing Area Energy configuration."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import voluptuous as vol

from ..const import (
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
    FEATURE_EXCLUDE_DEFAULT_ENTITIES,
    FEATURE_HIDE_NAME,
    FEATURES,
    LEGEND_STYLES,
    LINE_TYPES,
)


def _entity_id(value: Any) -> str:
    """Validate a loosely formatted ``domain.object_id`` entity id."""

    if not isinstance(value, str):
        raise vol.Invalid(f"invalid entity id: {value!r}")
    text = value.strip()
    if "." not in text or text.startswith(".") or text.endswith("."):
        raise vol.Invalid(f"invalid entity id: {value!r}")
    return text


ENTITY_OBJECT_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_ENTITY_ID): _entity_id,
        vol.Optional(CONF_COLOR): vol.Any(None, vol.Coerce(str)),
    },
    extra=vol.REMOVE_EXTRA,
)

ENTITY_SCHEMA = vol.Any(ENTITY_OBJECT_SCHEMA, _entity_id)

CHART_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_CHART_TYPE, default=DEFAULT_CHART_TYPE): vol.In(CHART_TYPES),
        vol.Optional(CONF_LINE_TYPE, default=DEFAULT_LINE_TYPE): vol.In(LINE_TYPES),
        vol.Optional(CONF_LEGEND_STYLE, default=DEFAULT_LEGEND_STYLE): vol.In(
            LEGEND_STYLES
        ),
        vol.Optional(CONF_AXIS_STYLE, default=DEFAULT_AXIS_STYLE): vol.In(AXIS_STYLES),
        vol.Optional(CONF_TOTAL_POWER_ENTITY): vol.Any(None, "", _entity_id),
    },
    extra=vol.REMOVE_EXTRA,
)

CONFIG_SCHEMA = vol.Schema(
    {
        vol.Required(CONF_AREA, default=""): vol.Any(None, vol.Coerce(str)),
        vol.Optional(CONF_NAME): vol.Any(None, vol.Coerce(str)),
        vol.Optional(CONF_ENTITIES, default=list): [ENTITY_SCHEMA],
        vol.Optional(CONF_CHART, default=dict): vol.Any(None, CHART_SCHEMA),
        vol.Optional(CONF_FEATURES, default=list): [vol.In(FEATURES)],
    },
    extra=vol.REMOVE_EXTRA,
)


@dataclass(frozen=True, slots=True)
class EntityConfig:
    """Explicitly configured entity with an optional color override."""

    entity_id: str
    color: str | None = None


@dataclass(frozen=True, slots=True)
class ChartSettings:
    """Chart presentation settings."""

    chart_type: str = DEFAULT_CHART_TYPE
    line_type: str = DEFAULT_LINE_TYPE
    legend_style: str = DEFAULT_LEGEND_STYLE
    axis_style: str = DEFAULT_AXIS_STYLE
    total_power_entity: str | None = None


@dataclass(frozen=True, slots=True)
class AreaEnergyConfig:
    """Validated configuration for one area chart."""

    area: str
    name: str | None = None
    entities: tuple[EntityConfig, ...] = ()
    chart: ChartSettings = field(default_factory=ChartSettings)
    features: frozenset[str] = frozenset()

    def has_feature(self, feature: str) -> bool:
        """Return ``True`` when ``feature`` is enabled."""

        return feature in self.features

    @property
    def hide_name(self) -> bool:
        """Return ``True`` when the title should be hidden."""

        return self.has_feature(FEATURE_HIDE_NAME)

    @property
    def exclude_default_entities(self) -> bool:
        """Return ``True`` when only configured entities are charted."""

        return self.has_feature(FEATURE_EXCLUDE_DEFAULT_ENTITIES)

    @property
    def entity_ids(self) -> list[str]:
        """Return configured entity ids in configuration order."""

        return [entity.entity_id for entity in self.entities]

    @property
    def entity_color_map(self) -> dict[str, str]:
        """Return ``entity_id -> color`` for entities carrying a color.

        Later entries win when an entity id is configured twice.
        """

        return {
            entity.entity_id: entity.color
            for entity in self.entities
            if entity.color
        }


def normalize_entity(value: str | Mapping[str, Any]) -> EntityConfig:
    """Normalise a string or ``{entity_id, color}`` mapping to ``EntityConfig``."""

    if isinstance(value, str):
        return EntityConfig(entity_id=value)
    color = value.get(CONF_COLOR)
    return EntityConfig(
        entity_id=str(value[CONF_ENTITY_ID]),
        color=str(color) if color else None,
    )


def parse_config(raw: Mapping[str, Any]) -> AreaEnergyConfig:
    """Validate ``raw`` and return an :class:`AreaEnergyConfig`.

    Raises ``voluptuous.Invalid`` when the mapping does not match the schema.
    """

    validated = CONFIG_SCHEMA(dict(raw))
    chart_raw = validated.get(CONF_CHART) or CHART_SCHEMA({})
    total_power = chart_raw.get(CONF_TOTAL_POWER_ENTITY) or None

    return AreaEnergyConfig(
        area=validated.get(CONF_AREA) or "",
        name=validated.get(CONF_NAME) or None,
        entities=tuple(normalize_entity(item) for item in validated[CONF_ENTITIES]),
        chart=ChartSettings(
            chart_type=chart_raw[CONF_CHART_TYPE],
            line_type=chart_raw[CONF_LINE_TYPE],
            legend_style=chart_raw[CONF_LEGEND_STYLE],
            axis_style=chart_raw[CONF_AXIS_STYLE],
            total_power_entity=total_power,
        ),
        features=frozenset(validated[CONF_FEATURES]),
    )


def config_from_entry(data: Mapping[str, Any], options: Mapping[str, Any]) -> AreaEnergyConfig:
    """Merge config entry ``data`` and ``options`` and parse the result."""

    merged: dict[str, Any] = dict(data)
    merged.update(options)
    return parse_config(merged)
