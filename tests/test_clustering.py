import random

import pytest

from territory_engine.errors import ConfigurationError
from territory_engine.models.domain import FailureEvent
from territory_engine.services.clustering import (
    cluster_events,
    dominant_cause,
    events_within,
    worst_cluster,
)


def _event(event_id: str, lon: float, lat: float, cause: str = "Compound access control") -> FailureEvent:
    return FailureEvent(
        event_id=event_id,
        longitude=lon,
        latitude=lat,
        duration_minutes=40.0,
        overdue_minutes=10.0,
        cause=cause,
        cause_category="access",
    )


TIGHT = [
    _event(f"E{index}", 116.5005 + index * 0.0005, 39.9005 + index * 0.0005)
    for index in range(5)
]


def test_dense_cell_forms_single_cluster():
    clusters = cluster_events(TIGHT, 0.008, 3)

    assert len(clusters) == 1
    cluster = clusters[0]
    assert cluster.count == 5
    assert cluster.cluster_id == "G14562_4987"
    assert cluster.cell == (14562, 4987)
    assert cluster.longitude == pytest.approx(116.5015)
    assert cluster.latitude == pytest.approx(39.9015)


def test_small_cluster_uses_radius_floor():
    cluster = cluster_events(TIGHT, 0.008, 3)[0]
    assert cluster.radius_m == pytest.approx(250.0)


def test_radius_is_farthest_member_plus_margin():
    events = [_event(f"W{index}", lon, 39.9010) for index, lon in enumerate((116.4965, 116.5000, 116.5035))]
    cluster = cluster_events(events, 0.008, 3)[0]

    # 0.0035 deg of longitude is 297.5 m
    assert cluster.radius_m == pytest.approx(377.5, abs=0.1)


def test_sparse_events_do_not_cluster():
    spread = [_event(f"S{index}", 116.5005 + index * 0.01, 39.9005) for index in range(5)]
    assert cluster_events(spread, 0.008, 3) == []


def test_clusters_do_not_depend_on_input_order():
    events = TIGHT + [_event(f"F{index}", 116.6005 + index * 0.001, 39.9505) for index in range(3)]
    expected = cluster_events(events, 0.008, 3)

    shuffled = list(events)
    random.Random(7).shuffle(shuffled)
    assert cluster_events(shuffled, 0.008, 3) == expected
    assert [cluster.cell for cluster in expected] == sorted(cluster.cell for cluster in expected)


def test_minimum_size_is_inclusive():
    assert len(cluster_events(TIGHT[:3], 0.008, 3)) == 1
    assert cluster_events(TIGHT[:2], 0.008, 3) == []


def test_defaults_come_from_settings():
    assert len(cluster_events(TIGHT)) == 1


@pytest.mark.parametrize("cell_size, min_size", [(0.0, 3), (-0.1, 3), (0.008, 0)])
def test_invalid_parameters_are_rejected(cell_size, min_size):
    with pytest.raises(ConfigurationError):
        cluster_events(TIGHT, cell_size, min_size)


def test_worst_cluster_prefers_count_then_lowest_cell():
    second = [_event(f"B{index}", 116.6005 + index * 0.001, 39.9505) for index in range(5)]
    third = [_event(f"C{index}", 116.4005 + index * 0.001, 39.8505) for index in range(3)]
    clusters = cluster_events(TIGHT + second + third, 0.008, 3)

    worst = worst_cluster(clusters)
    assert worst.count == 5
    assert worst.cell == min(cluster.cell for cluster in clusters if cluster.count == 5)
    assert worst_cluster([]) is None


def test_events_within_and_dominant_cause():
    cluster = cluster_events(TIGHT, 0.008, 3)[0]
    stray = _event("X1", 116.60, 39.95, cause="Customer not home")

    nearby = events_within(cluster, TIGHT + [stray])
    assert stray not in nearby
    assert len(nearby) == 5
    assert dominant_cause(nearby) == "Compound access control"


def test_dominant_cause_breaks_ties_alphabetically():
    events = [_event("A", 0.0, 0.0, "Parking"), _event("B", 0.0, 0.0, "Elevator")]
    assert dominant_cause(events) == "Elevator"
    assert dominant_cause([]) is None
