"""Domain-layer primitives for the Area Energy integration."""

from .config import (
    AreaEnergyConfig,
    ChartSettings,
    EntityConfig,
    config_from_entry,
    normalize_entity,
    parse_config,
)
from .models import (
    AreaEntry,
    ChartData,
    DeviceEntry,
    EntityData,
    EntityEntry,
    EntityState,
    HistoryDataPoint,
    PowerEnergyData,
    RegistrySnapshot,
    ResolvedEntities,
)

__all__ = [
    "AreaEnergyConfig",
    "AreaEntry",
    "ChartData",
    "ChartSettings",
    "DeviceEntry",
    "EntityConfig",
    "EntityData",
    "EntityEntry",
    "EntityState",
    "HistoryDataPoint",
    "PowerEnergyData",
    "RegistrySnapshot",
    "ResolvedEntities",
    "config_from_entry",
    "normalize_entity",
    "parse_config",
]
