"""Derive the power not attributed to any tracked entity."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import datetime
import logging

from .domain.models import EntityData, HistoryDataPoint

_LOGGER = logging.getLogger(__name__)

UNTRACKED_SUFFIX = "(Untracked)"


def tracked_sums(tracked: Iterable[EntityData]) -> dict[datetime, float]:
    """Return the summed tracked value for every timestamp seen."""

    sums: dict[datetime, float] = defaultdict(float)
    for series in tracked:
        for point in series.data:
            sums[point.timestamp] += point.value
    return sums


def derive_untracked(
    tracked: Iterable[EntityData], total: EntityData
) -> EntityData | None:
    """Return ``total`` minus the tracked power, or ``None`` when nothing remains.

    Timestamps are matched exactly; a tracked entity without a point at a given
    timestamp contributes nothing there. Values are clamped at zero and only
    strictly positive points are kept.
    """

    sums = tracked_sums(tracked)
    points = [
        HistoryDataPoint(timestamp=point.timestamp, value=remainder)
        for point in total.data
        if (remainder := max(0.0, point.value - sums.get(point.timestamp, 0.0))) > 0
    ]
    if not points:
        _LOGGER.debug("%s: no untracked power remains", total.entity_id)
        return None

    return EntityData(
        entity_id=total.entity_id,
        friendly_name=f"{total.friendly_name} {UNTRACKED_SUFFIX}",
        data=points,
    )
