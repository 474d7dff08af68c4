# ruff: noqa: D100,D101,D102,D103,D104,D105,D106,D107,INP001,E402
from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, datetime, timedelta
import inspect
from typing import Any

import pytest

from custom_components.area_energy.domain.models import (
    AreaEntry,
    DeviceEntry,
    EntityData,
    EntityEntry,
    EntityState,
    HistoryDataPoint,
    RegistrySnapshot,
)

NOW = datetime(2024, 1, 2, 12, 0, tzinfo=UTC)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom pytest markers used across the suite."""

    if not config.pluginmanager.hasplugin("pytest_asyncio"):
        config.addinivalue_line(
            "markers", "asyncio: mark test as requiring asyncio event loop support."
        )


def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute async tests when pytest-asyncio is unavailable."""

    if pyfuncitem.config.pluginmanager.hasplugin("pytest_asyncio"):
        return None

    testfunction = pyfuncitem.obj
    if not inspect.iscoroutinefunction(testfunction):
        return None

    marker = pyfuncitem.get_closest_marker("asyncio")
    if marker is None:
        return None

    funcargs = {
        name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
    }
    with asyncio.Runner(debug=False) as runner:
        runner.run(testfunction(**funcargs))
    return True


def make_state(
    entity_id: str,
    state: str = "0",
    *,
    device_class: str | None = None,
    unit: str | None = None,
    name: str | None = None,
) -> EntityState:
    attributes: dict[str, Any] = {}
    if device_class is not None:
        attributes["device_class"] = device_class
    if unit is not None:
        attributes["unit_of_measurement"] = unit
    if name is not None:
        attributes["friendly_name"] = name
    return EntityState(entity_id=entity_id, state=state, attributes=attributes)


def make_snapshot(
    entities: Iterable[EntityEntry],
    states: Iterable[EntityState],
    *,
    devices: Iterable[DeviceEntry] = (),
    areas: Iterable[AreaEntry] = (),
) -> RegistrySnapshot:
    return RegistrySnapshot.from_entries(entities, devices, areas, states)


def make_series(
    entity_id: str,
    values: Sequence[float],
    *,
    name: str | None = None,
    start: datetime = NOW,
    step: timedelta = timedelta(hours=1),
) -> EntityData:
    return EntityData(
        entity_id=entity_id,
        friendly_name=name or entity_id,
        data=[
            HistoryDataPoint(timestamp=start + step * index, value=value)
            for index, value in enumerate(values)
        ],
    )


class FakeStatisticsQuery:
    """Statistics source returning canned rows and recording every call."""

    def __init__(
        self,
        rows: Mapping[str, Sequence[Any]] | None = None,
        *,
        failures: Mapping[str, BaseException] | None = None,
    ) -> None:
        self.rows = dict(rows or {})
        self.failures = dict(failures or {})
        self.calls: list[tuple[tuple[str, ...], datetime, datetime, str]] = []

    async def __call__(
        self,
        entity_ids: Sequence[str],
        start_time: datetime,
        end_time: datetime,
        period: str,
    ) -> Mapping[str, Sequence[Any]]:
        self.calls.append((tuple(entity_ids), start_time, end_time, period))
        await asyncio.sleep(0)
        for entity_id in entity_ids:
            if entity_id in self.failures:
                raise self.failures[entity_id]
        return {
            entity_id: self.rows[entity_id]
            for entity_id in entity_ids
            if entity_id in self.rows
        }


def rows_at(
    values: Sequence[float], *, start: datetime = NOW, key: str = "mean"
) -> list[dict[str, Any]]:
    """Return statistics rows with ``start`` in epoch seconds, one per hour."""

    return [
        {"start": (start + timedelta(hours=index)).timestamp(), key: value}
        for index, value in enumerate(values)
    ]

