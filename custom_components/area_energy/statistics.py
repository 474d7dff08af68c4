"""Fetch and normalise recorder statistics for resolved entities."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from datetime import UTC, datetime, timedelta
import logging
from typing import Any, Protocol

from .const import MS_TIMESTAMP_THRESHOLD, PERIOD_DETAILED, STATISTICS_PERIODS
from .domain.models import (
    EntityData,
    EntityState,
    HistoryDataPoint,
    PowerEnergyData,
    ResolvedEntities,
)
from .untracked import derive_untracked
from .util import finite_number

_LOGGER = logging.getLogger(__name__)

# Value fields in priority order.
VALUE_FIELDS = ("mean", "state", "sum")

NowCallable = Callable[[], datetime]


class StatisticsQuery(Protocol):
    """Source of aggregated statistics, e.g. the recorder."""

    def __call__(
        self,
        entity_ids: Sequence[str],
        start_time: datetime,
        end_time: datetime,
        period: str,
    ) -> Awaitable[Mapping[str, Sequence[Any]]]:
        """Return statistics records keyed by entity id."""


def utcnow() -> datetime:
    return datetime.now(UTC)


def _row_get(row: Any, key: str) -> Any:
    """Read a field from a statistics row regardless of its container type."""

    if isinstance(row, Mapping):
        return row.get(key)
    return getattr(row, key, None)


def validate_period(period: str) -> str:
    """Return ``period`` when supported by the statistics backend."""

    if period not in STATISTICS_PERIODS:
        raise ValueError(f"Unsupported statistics period: {period}")
    return period


def normalize_timestamp(start: Any) -> datetime | None:
    """Return ``start`` as an aware UTC datetime.

    Numbers at or above the year-2000 epoch in milliseconds are milliseconds;
    anything smaller is seconds.
    """

    if isinstance(start, datetime):
        return start if start.tzinfo is not None else start.replace(tzinfo=UTC)
    if isinstance(start, str):
        try:
            parsed = datetime.fromisoformat(start.replace("Z", "+00:00"))
        except ValueError:
            return None
        return normalize_timestamp(parsed)

    value = finite_number(start)
    if value is None:
        return None
    millis = value if value >= MS_TIMESTAMP_THRESHOLD else value * 1000
    try:
        return datetime.fromtimestamp(millis / 1000, UTC)
    except (OverflowError, OSError, ValueError):
        return None


def record_value(row: Any) -> float | None:
    """Return the charted value of a statistics row.

    The first of ``mean``, ``state`` and ``sum`` that is present is used; it
    must be a finite number, otherwise the row is unusable.
    """

    for key in VALUE_FIELDS:
        candidate = _row_get(row, key)
        if candidate is not None:
            return finite_number(candidate)
    return None


def records_to_points(rows: Iterable[Any]) -> list[HistoryDataPoint]:
    """Convert raw statistics rows into data points, dropping malformed rows."""

    points: list[HistoryDataPoint] = []
    dropped = 0
    for row in rows:
        value = record_value(row)
        timestamp = normalize_timestamp(_row_get(row, "start"))
        if value is None or timestamp is None:
            dropped += 1
            continue
        points.append(HistoryDataPoint(timestamp=timestamp, value=value))
    if dropped:
        _LOGGER.debug("Dropped %d statistics rows without a usable value", dropped)
    return points


async def fetch_entity_statistics(
    query: StatisticsQuery,
    entity_id: str,
    start_time: datetime,
    end_time: datetime | None = None,
    period: str = PERIOD_DETAILED,
    *,
    states: Mapping[str, EntityState] | None = None,
    now: NowCallable = utcnow,
) -> list[HistoryDataPoint]:
    """Return the statistics of ``entity_id`` between ``start_time`` and ``end_time``.

    Failures are logged and reported as an empty list; they never propagate.
    """

    validate_period(period)
    if states is not None and entity_id not in states:
        _LOGGER.debug("%s: entity not found; skipping statistics", entity_id)
        return []

    end = end_time or now()
    try:
        result = await query([entity_id], start_time, end, period)
    except Exception:  # noqa: BLE001
        _LOGGER.warning(
            "%s: failed to fetch statistics between %s and %s",
            entity_id,
            start_time,
            end,
            exc_info=True,
        )
        return []

    rows = result.get(entity_id) if isinstance(result, Mapping) else None
    if not rows:
        _LOGGER.debug("%s: no statistics between %s and %s", entity_id, start_time, end)
        return []
    return records_to_points(rows)


async def fetch_recent_statistics(
    query: StatisticsQuery,
    entity_id: str,
    hours: float = 24,
    period: str = PERIOD_DETAILED,
    *,
    states: Mapping[str, EntityState] | None = None,
    now: NowCallable = utcnow,
) -> list[HistoryDataPoint]:
    """Return the statistics of ``entity_id`` for the last ``hours`` hours."""

    end = now()
    return await fetch_entity_statistics(
        query,
        entity_id,
        end - timedelta(hours=hours),
        end,
        period,
        states=states,
        now=now,
    )


class StatisticsFetcher:
    """Fetch power and energy history for a resolved entity set."""

    def __init__(
        self,
        query: StatisticsQuery,
        *,
        states: Mapping[str, EntityState] | None = None,
        now: NowCallable = utcnow,
    ) -> None:
        """Store the statistics source and the live states used for naming."""

        self._query = query
        self._states = states
        self._now = now

    async def _fetch_series(
        self,
        entity_id: str,
        friendly_name: str,
        start: datetime,
        end: datetime,
        period: str,
    ) -> EntityData:
        points = await fetch_entity_statistics(
            self._query,
            entity_id,
            start,
            end,
            period,
            states=self._states,
            now=self._now,
        )
        return EntityData(entity_id=entity_id, friendly_name=friendly_name, data=points)

    def _friendly_name(self, entity_id: str) -> str:
        state = self._states.get(entity_id) if self._states is not None else None
        return state.friendly_name if state is not None else entity_id

    async def fetch(
        self,
        resolved: ResolvedEntities,
        lookback_hours: float,
        period: str,
        total_power_entity_id: str | None = None,
    ) -> PowerEnergyData:
        """Fetch every series concurrently and derive untracked power.

        Every request settles before this returns; entities whose request
        failed are kept with an empty series.
        """

        validate_period(period)
        end = self._now()
        start = end - timedelta(hours=lookback_hours)

        power_tasks = [
            self._fetch_series(state.entity_id, state.friendly_name, start, end, period)
            for state in resolved.power_entities
        ]
        energy_tasks = [
            self._fetch_series(state.entity_id, state.friendly_name, start, end, period)
            for state in resolved.energy_entities
        ]
        total_tasks = []
        if total_power_entity_id:
            total_tasks.append(
                self._fetch_series(
                    total_power_entity_id,
                    self._friendly_name(total_power_entity_id),
                    start,
                    end,
                    period,
                )
            )

        _LOGGER.debug(
            "Fetching %s statistics for %d power, %d energy and %d total series",
            period,
            len(power_tasks),
            len(energy_tasks),
            len(total_tasks),
        )
        results = await asyncio.gather(*power_tasks, *energy_tasks, *total_tasks)

        power_count = len(power_tasks)
        energy_count = len(energy_tasks)
        power_data = results[:power_count]
        energy_data = results[power_count : power_count + energy_count]

        untracked: EntityData | None = None
        if total_tasks:
            total = results[-1]
            if not total.is_empty:
                untracked = derive_untracked(power_data, total)

        return PowerEnergyData(
            power_data=power_data,
            energy_data=energy_data,
            untracked_power_data=untracked,
        )
