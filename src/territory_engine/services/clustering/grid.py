"""Fixed-grid density clustering of failure events."""

from __future__ import annotations

import math
from collections import Counter
from typing import Sequence

from ...config import settings
from ...errors import ConfigurationError
from ...models.domain import Cluster, FailureEvent
from ..geospatial import distance_km


def grid_key(event: FailureEvent, cell_size_deg: float) -> tuple[int, int]:
    return (
        math.floor(event.longitude / cell_size_deg),
        math.floor(event.latitude / cell_size_deg),
    )


def _member_order(event: FailureEvent) -> tuple[float, float, str]:
    return (event.longitude, event.latitude, event.event_id)


def cluster_events(
    events: Sequence[FailureEvent],
    cell_size_deg: float | None = None,
    min_cluster_size: int | None = None,
    *,
    radius_floor_m: float | None = None,
    radius_margin_m: float | None = None,
) -> list[Cluster]:
    """Group events by grid cell and report every cell with enough members.

    Events in sparse cells are not part of any cluster. The result is sorted
    by grid key and does not depend on the order of the input events.
    """

    cell_size_deg = settings.cluster_cell_size_deg if cell_size_deg is None else cell_size_deg
    min_cluster_size = settings.min_cluster_size if min_cluster_size is None else min_cluster_size
    radius_floor_m = settings.cluster_radius_floor_m if radius_floor_m is None else radius_floor_m
    radius_margin_m = settings.cluster_radius_margin_m if radius_margin_m is None else radius_margin_m

    if not cell_size_deg > 0:
        raise ConfigurationError(f"cell_size_deg must be positive, got {cell_size_deg}")
    if min_cluster_size < 1:
        raise ConfigurationError(f"min_cluster_size must be >= 1, got {min_cluster_size}")
    if radius_floor_m < 0 or radius_margin_m < 0:
        raise ConfigurationError("Cluster radius floor and margin must be non-negative.")

    grid: dict[tuple[int, int], list[FailureEvent]] = {}
    for event in events:
        grid.setdefault(grid_key(event, cell_size_deg), []).append(event)

    clusters: list[Cluster] = []
    for key in sorted(grid):
        members = sorted(grid[key], key=_member_order)
        if len(members) < min_cluster_size:
            continue
        center = (
            math.fsum(event.longitude for event in members) / len(members),
            math.fsum(event.latitude for event in members) / len(members),
        )
        farthest_m = max(distance_km(center, event.position) for event in members) * 1000.0
        clusters.append(
            Cluster(
                cluster_id=f"G{key[0]}_{key[1]}",
                cell=key,
                longitude=center[0],
                latitude=center[1],
                count=len(members),
                radius_m=max(farthest_m + radius_margin_m, radius_floor_m),
                members=tuple(members),
            )
        )
    return clusters


def worst_cluster(clusters: Sequence[Cluster]) -> Cluster | None:
    """Cluster with the most members; the lowest grid key wins ties."""

    if not clusters:
        return None
    return min(clusters, key=lambda cluster: (-cluster.count, cluster.cell))


def events_within(cluster: Cluster, events: Sequence[FailureEvent]) -> list[FailureEvent]:
    """Events closer to the cluster center than its radius."""

    radius_km = cluster.radius_m / 1000.0
    return [event for event in events if distance_km(cluster.center, event.position) < radius_km]


def dominant_cause(events: Sequence[FailureEvent]) -> str | None:
    """Most frequent cause label, alphabetical on ties."""

    counts = Counter(event.cause for event in events)
    if not counts:
        return None
    return min(counts.items(), key=lambda item: (-item[1], item[0]))[0]
