"""Coordinator refreshing one area chart on demand."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from homeassistant.core import HomeAssistant
from homeassistant.helpers import (
    area_registry as ar,
    device_registry as dr,
    entity_registry as er,
)
from homeassistant.helpers.update_coordinator import DataUpdateCoordinator, UpdateFailed
from homeassistant.util import dt as dt_util

from .chart.builder import ChartConfigBuilder
from .const import DOMAIN
from .domain.config import AreaEnergyConfig
from .domain.models import AreaEntry, DeviceEntry, EntityEntry, EntityState, RegistrySnapshot
from .pipeline import AreaEnergyResult, async_build_area_energy
from .recorder import RecorderStatisticsQuery
from .statistics import StatisticsQuery

_LOGGER = logging.getLogger(__name__)

_DataT = TypeVar("_DataT")


class RaiseUpdateFailedCoordinator(DataUpdateCoordinator[_DataT]):
    """Coordinator that propagates ``UpdateFailed`` to manual refresh callers."""

    async def async_refresh(self) -> None:
        """Refresh data and raise ``UpdateFailed`` when the update fails."""

        await super().async_refresh()
        exc = getattr(self, "last_exception", None)
        if not self.last_update_success and isinstance(exc, UpdateFailed):
            raise exc


def build_registry_snapshot(hass: HomeAssistant) -> RegistrySnapshot:
    """Return a snapshot of the entity, device and area registries."""

    entities = [
        EntityEntry(
            entity_id=entry.entity_id,
            area_id=entry.area_id,
            device_id=entry.device_id,
        )
        for entry in er.async_get(hass).entities.values()
    ]
    devices = [
        DeviceEntry(
            id=device.id,
            area_id=device.area_id,
            name=device.name_by_user or device.name,
        )
        for device in dr.async_get(hass).devices.values()
    ]
    areas = [
        AreaEntry(area_id=area.id, name=area.name)
        for area in ar.async_get(hass).async_list_areas()
    ]
    states = [EntityState.from_state(state) for state in hass.states.async_all()]
    return RegistrySnapshot.from_entries(entities, devices, areas, states)


class AreaEnergyCoordinator(RaiseUpdateFailedCoordinator[AreaEnergyResult]):
    """Build the chart of one configured area whenever a refresh is requested."""

    def __init__(
        self,
        hass: HomeAssistant,
        config: AreaEnergyConfig,
        *,
        query: StatisticsQuery | None = None,
        entry_id: str | None = None,
    ) -> None:
        super().__init__(
            hass,
            logger=_LOGGER,
            name=f"{DOMAIN}_{config.area or entry_id or 'area'}",
            update_interval=None,
        )
        self.config = config
        self.entry_id = entry_id
        self.builder = ChartConfigBuilder()
        self._query = query if query is not None else RecorderStatisticsQuery(hass)
        self.last_refresh: dict[str, Any] | None = None

    async def _async_update_data(self) -> AreaEnergyResult:
        """Resolve entities, fetch statistics and build the chart."""

        try:
            snapshot = build_registry_snapshot(self.hass)
            result = await async_build_area_energy(
                snapshot,
                self.config,
                self._query,
                self.builder,
                time_zone=dt_util.get_default_time_zone(),
            )
        except Exception as err:
            _LOGGER.exception("Area %s: refresh failed", self.config.area)
            raise UpdateFailed(f"Failed to build area energy chart: {err}") from err

        self.last_refresh = {
            "at": dt_util.utcnow().isoformat(),
            "period": result.period,
            "power_entities": len(result.resolved.power_entities),
            "energy_entities": len(result.resolved.energy_entities),
            "datasets": (
                len(result.chart["data"]["datasets"]) if result.chart is not None else 0
            ),
            "error": result.error,
        }
        return result
