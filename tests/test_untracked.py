"""Tests for untracked power derivation."""

from __future__ import annotations

from datetime import timedelta

from conftest import NOW, make_series

from custom_components.area_energy.domain.models import EntityData, HistoryDataPoint
from custom_components.area_energy.untracked import derive_untracked, tracked_sums

T1 = NOW + timedelta(hours=1)


def test_derive_untracked_example() -> None:
    tracked = [make_series("sensor.a", [30, 50]), make_series("sensor.b", [50, 60])]
    total = make_series("sensor.main", [100, 100], name="Main")

    untracked = derive_untracked(tracked, total)

    assert untracked is not None
    assert untracked.entity_id == "sensor.main"
    assert untracked.friendly_name == "Main (Untracked)"
    assert [(p.timestamp, p.value) for p in untracked] == [(NOW, 20.0)]


def test_missing_tracked_timestamp_contributes_nothing() -> None:
    tracked = [
        EntityData("sensor.a", "A", [HistoryDataPoint(NOW, 40.0)]),
    ]
    total = make_series("sensor.main", [100, 90])

    untracked = derive_untracked(tracked, total)

    assert untracked is not None
    assert [(p.timestamp, p.value) for p in untracked] == [(NOW, 60.0), (T1, 90.0)]


def test_fully_tracked_total_yields_none() -> None:
    tracked = [make_series("sensor.a", [100, 120])]
    total = make_series("sensor.main", [100, 110])

    assert derive_untracked(tracked, total) is None


def test_tracked_sums_adds_matching_timestamps() -> None:
    sums = tracked_sums([make_series("a", [1, 2]), make_series("b", [3])])

    assert sums == {NOW: 4.0, T1: 2.0}
