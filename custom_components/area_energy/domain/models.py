"""Typed models shared by the resolver, fetcher and chart builder."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True, slots=True)
class EntityState:
    """Live state of a single entity as read from the state machine."""

    entity_id: str
    state: str
    attributes: Mapping[str, Any] = field(default_factory=dict)

    @property
    def domain(self) -> str:
        """Return the entity domain, e.g. ``sensor`` for ``sensor.kitchen``."""

        return self.entity_id.split(".", 1)[0]

    @property
    def device_class(self) -> str | None:
        """Return the ``device_class`` attribute when present."""

        value = self.attributes.get("device_class")
        return str(value) if value is not None else None

    @property
    def unit_of_measurement(self) -> str | None:
        """Return the ``unit_of_measurement`` attribute when present."""

        value = self.attributes.get("unit_of_measurement")
        return str(value) if value is not None else None

    @property
    def friendly_name(self) -> str:
        """Return the friendly name, falling back to the entity id."""

        name = self.attributes.get("friendly_name")
        if isinstance(name, str) and name:
            return name
        return self.entity_id

    @classmethod
    def from_state(cls, state: Any) -> EntityState:
        """Build an :class:`EntityState` from a Home Assistant ``State``."""

        return cls(
            entity_id=state.entity_id,
            state=str(state.state),
            attributes=dict(state.attributes),
        )


@dataclass(frozen=True, slots=True)
class EntityEntry:
    """Entity registry entry relevant to area membership."""

    entity_id: str
    area_id: str | None = None
    device_id: str | None = None


@dataclass(frozen=True, slots=True)
class DeviceEntry:
    """Device registry entry relevant to area membership."""

    id: str
    area_id: str | None = None
    name: str | None = None


@dataclass(frozen=True, slots=True)
class AreaEntry:
    """Area registry entry."""

    area_id: str
    name: str


@dataclass(frozen=True, slots=True)
class RegistrySnapshot:
    """Point-in-time view of the entity, device and area registries."""

    entities: Mapping[str, EntityEntry] = field(default_factory=dict)
    devices: Mapping[str, DeviceEntry] = field(default_factory=dict)
    areas: Mapping[str, AreaEntry] = field(default_factory=dict)
    states: Mapping[str, EntityState] = field(default_factory=dict)

    @classmethod
    def from_entries(
        cls,
        entities: Iterable[EntityEntry],
        devices: Iterable[DeviceEntry] = (),
        areas: Iterable[AreaEntry] = (),
        states: Iterable[EntityState] = (),
    ) -> RegistrySnapshot:
        """Build a snapshot keyed by identifiers, preserving iteration order."""

        return cls(
            entities={entry.entity_id: entry for entry in entities},
            devices={device.id: device for device in devices},
            areas={area.area_id: area for area in areas},
            states={state.entity_id: state for state in states},
        )

    def device_for(self, entity: EntityEntry) -> DeviceEntry | None:
        """Return the device owning ``entity`` when registered."""

        if entity.device_id is None:
            return None
        return self.devices.get(entity.device_id)

    def state_for(self, entity_id: str) -> EntityState | None:
        """Return the live state for ``entity_id`` when present."""

        return self.states.get(entity_id)


@dataclass(frozen=True, slots=True)
class HistoryDataPoint:
    """A single aggregated statistic value."""

    timestamp: datetime
    value: float

    @property
    def timestamp_ms(self) -> int:
        """Return the timestamp as epoch milliseconds."""

        return round(self.timestamp.timestamp() * 1000)


@dataclass(frozen=True, slots=True)
class EntityData:
    """Historical series for one entity."""

    entity_id: str
    friendly_name: str
    data: tuple[HistoryDataPoint, ...] = ()

    def __post_init__(self) -> None:
        """Store ``data`` as an immutable tuple."""

        object.__setattr__(self, "data", tuple(self.data))

    def __iter__(self) -> Iterator[HistoryDataPoint]:
        """Iterate over the data points."""

        return iter(self.data)

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when the series has no points."""

        return not self.data


@dataclass(frozen=True, slots=True)
class PowerEnergyData:
    """Power and energy series assembled for one refresh."""

    power_data: tuple[EntityData, ...] = ()
    energy_data: tuple[EntityData, ...] = ()
    untracked_power_data: EntityData | None = None

    def __post_init__(self) -> None:
        """Store the series lists as tuples."""

        object.__setattr__(self, "power_data", tuple(self.power_data))
        object.__setattr__(self, "energy_data", tuple(self.energy_data))

    @property
    def has_history(self) -> bool:
        """Return ``True`` when any power or energy series holds a point."""

        return any(
            not series.is_empty for series in (*self.power_data, *self.energy_data)
        )


ChartData = PowerEnergyData


@dataclass(frozen=True, slots=True)
class ResolvedEntities:
    """Working set of entities for an area."""

    power_entities: tuple[EntityState, ...] = ()
    energy_entities: tuple[EntityState, ...] = ()
    active_lights: int = 0
    active_switches: int = 0

    @property
    def entity_ids(self) -> list[str]:
        """Return the ids of all resolved power and energy entities."""

        return [
            state.entity_id
            for state in (*self.power_entities, *self.energy_entities)
        ]
