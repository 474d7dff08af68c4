"""Resolve which entities take part in an area energy chart."""

from __future__ import annotations

from collections.abc import Callable
import logging

from .const import DOMAIN_LIGHT, DOMAIN_SWITCH, KIND_ENERGY, KIND_POWER
from .domain.config import AreaEnergyConfig
from .domain.models import EntityEntry, EntityState, RegistrySnapshot, ResolvedEntities

_LOGGER = logging.getLogger(__name__)

ActivePredicate = Callable[[EntityState], bool]

_INACTIVE_STATES = frozenset({"off", "unavailable", "unknown", "idle", "standby"})


def is_state_active(state: EntityState) -> bool:
    """Return ``True`` when a light or switch state counts as active."""

    if state.domain in (DOMAIN_LIGHT, DOMAIN_SWITCH):
        return state.state == "on"
    return state.state not in _INACTIVE_STATES


def in_area(snapshot: RegistrySnapshot, entity: EntityEntry, area_id: str) -> bool:
    """Return ``True`` when ``entity`` belongs to ``area_id``.

    An entity's own area wins; the owning device's area is only consulted when
    the entity has none.
    """

    if not area_id:
        return False
    if entity.area_id:
        return entity.area_id == area_id
    device = snapshot.device_for(entity)
    return device is not None and device.area_id == area_id


def area_entities(snapshot: RegistrySnapshot, area_id: str) -> list[str]:
    """Return ids of registry entities located in ``area_id``."""

    return [
        entity_id
        for entity_id, entity in snapshot.entities.items()
        if in_area(snapshot, entity, area_id)
    ]


def resolve(
    snapshot: RegistrySnapshot,
    config: AreaEnergyConfig,
    *,
    is_active: ActivePredicate = is_state_active,
) -> ResolvedEntities:
    """Return the power/energy working set and active light/switch counters."""

    configured = set(config.entity_ids)
    skip_default_entities = config.exclude_default_entities

    power_entities: list[EntityState] = []
    energy_entities: list[EntityState] = []
    active_lights = 0
    active_switches = 0

    for entity_id, entity in snapshot.entities.items():
        is_config_entity = entity_id in configured
        in_resolved_area = in_area(snapshot, entity, config.area)
        if not is_config_entity and not in_resolved_area:
            continue

        state = snapshot.state_for(entity_id)
        if state is None:
            _LOGGER.debug("%s: no live state; skipping", entity_id)
            continue

        # Counters only cover the area itself, not configured extras.
        if in_resolved_area and is_active(state):
            if state.domain == DOMAIN_LIGHT:
                active_lights += 1
            elif state.domain == DOMAIN_SWITCH:
                active_switches += 1

        if not is_config_entity and skip_default_entities:
            continue

        device_class = state.device_class
        if device_class == KIND_POWER:
            power_entities.append(state)
        elif device_class == KIND_ENERGY:
            energy_entities.append(state)

    _LOGGER.debug(
        "Resolved area %s: %d power, %d energy, %d lights on, %d switches on",
        config.area,
        len(power_entities),
        len(energy_entities),
        active_lights,
        active_switches,
    )

    return ResolvedEntities(
        power_entities=tuple(power_entities),
        energy_entities=tuple(energy_entities),
        active_lights=active_lights,
        active_switches=active_switches,
    )


def suggest_area(snapshot: RegistrySnapshot) -> str:
    """Return the first area holding both a W power and a kWh energy sensor."""

    for area_id in snapshot.areas:
        states = [
            state
            for entity_id in area_entities(snapshot, area_id)
            if (state := snapshot.state_for(entity_id)) is not None
        ]
        has_power = any(
            state.device_class == KIND_POWER and state.unit_of_measurement == "W"
            for state in states
        )
        has_energy = any(
            state.device_class == KIND_ENERGY and state.unit_of_measurement == "kWh"
            for state in states
        )
        if has_power and has_energy:
            return area_id
    return ""


def area_display_name(snapshot: RegistrySnapshot, config: AreaEnergyConfig) -> str:
    """Return the chart title for ``config``."""

    if config.name:
        return config.name
    area = snapshot.areas.get(config.area)
    area_name = area.name if area is not None and area.name else config.area
    return f"{area_name} Energy Consumption"
