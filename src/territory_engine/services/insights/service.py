"""Rank operational insights from site metrics, failure clusters and trips."""

from __future__ import annotations

import logging
from itertools import combinations
from typing import Sequence

from ...config import settings
from ...models.domain import DeliveryTrip, FailureEvent, Insight, Site
from ..clustering.grid import cluster_events, dominant_cause, events_within, worst_cluster
from ..geospatial import distance_km, nearest_site

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def summarize_sites(sites: Sequence[Site]) -> dict:
    """Roster-level totals for dashboards."""

    count = len(sites)
    return {
        "site_count": count,
        "total_daily_orders": sum(site.daily_orders for site in sites),
        "avg_on_time_rate": (sum(site.on_time_rate for site in sites) / count) if count else 0.0,
        "warning_count": sum(1 for site in sites if site.on_time_rate < settings.on_time_warning_rate),
    }


def _on_time_insights(sites: Sequence[Site]) -> list[Insight]:
    insights: list[Insight] = []
    for site in sites:
        percent = f"{site.on_time_rate * 100:.0f}%"
        if site.on_time_rate < settings.on_time_warning_rate:
            insights.append(
                Insight(
                    insight_id=f"warning-{site.site_id}",
                    kind="warning",
                    title="Timeout warning",
                    description=f"{site.name} on-time rate is {percent}; consider adding riders",
                    priority="high" if site.on_time_rate < settings.on_time_critical_rate else "medium",
                    site_id=site.site_id,
                )
            )
        if site.on_time_rate >= settings.on_time_success_rate:
            insights.append(
                Insight(
                    insight_id=f"success-{site.site_id}",
                    kind="success",
                    title="Strong performer",
                    description=f"{site.name} on-time rate is {percent}; share its practices",
                    priority="low",
                    site_id=site.site_id,
                )
            )
    return insights


def _black_hole_insight(sites: Sequence[Site], events: Sequence[FailureEvent]) -> Insight | None:
    worst = worst_cluster(cluster_events(events))
    if worst is None:
        return None
    site = nearest_site(worst.center, sites)
    cause = dominant_cause(events_within(worst, events)) or "unknown"
    location = f"near {site.name}" if site else "in an unassigned area"
    return Insight(
        insight_id="blackhole-1",
        kind="warning",
        title="Delivery black hole",
        description=f"{worst.count} timed-out deliveries clustered {location}; main cause: {cause}",
        priority="high",
        site_id=site.site_id if site else None,
    )


def _route_insight(sites: Sequence[Site], trips: Sequence[DeliveryTrip]) -> Insight | None:
    if not trips:
        return None
    total_saved = sum(trip.time_saved_minutes for trip in trips)
    best_trip = max(
        (trip for trip in trips if trip.executed_minutes > 0),
        key=lambda trip: trip.time_saved_minutes / trip.executed_minutes,
        default=None,
    )
    if best_trip is None or best_trip.time_saved_minutes <= 0:
        return None

    average_ratio = (total_saved / len(trips)) / settings.route_baseline_minutes
    if average_ratio <= settings.route_saving_threshold:
        return None

    by_id = {site.site_id: site for site in sites}
    best_site = by_id.get(best_trip.site_id)
    daily_saving = round(total_saved / settings.trips_per_site)
    site_name = best_site.name if best_site else f"site {best_trip.site_id}"
    return Insight(
        insight_id="route-optimization",
        kind="suggestion",
        title="Route optimization",
        description=(
            f"Optimized stop order could save about {daily_saving} minutes per day; "
            f"{site_name} has the most room to improve"
        ),
        priority="medium",
        site_id=best_trip.site_id,
    )


def _overlap_insight(sites: Sequence[Site]) -> Insight | None:
    threshold = settings.overlap_distance_km
    pairs = [
        (distance_km(a.position, b.position), a, b)
        for a, b in combinations(sites, 2)
        if distance_km(a.position, b.position) < threshold
    ]
    if not pairs:
        return None
    distance, first, second = min(pairs, key=lambda pair: pair[0])
    overlap_percent = round((1 - distance / threshold) * 40)
    return Insight(
        insight_id="overlap-warning",
        kind="suggestion",
        title="Service range overlap",
        description=(
            f"{first.name} and {second.name} overlap by roughly {overlap_percent}%; "
            "consider adjusting the boundary dynamically"
        ),
        priority="medium" if overlap_percent > 25 else "low",
    )


def _capacity_insight() -> Insight:
    return Insight(
        insight_id="suggestion-peak",
        kind="suggestion",
        title="Capacity planning",
        description=(
            f"Schedule {settings.peak_extra_riders} extra riders ahead of the "
            f"{settings.peak_window} peak"
        ),
        priority="medium",
    )


def generate_insights(
    sites: Sequence[Site],
    events: Sequence[FailureEvent],
    trips: Sequence[DeliveryTrip],
    *,
    limit: int | None = None,
) -> list[Insight]:
    """Collect every insight, order by priority (stable) and keep the first ``limit``."""

    limit = settings.max_insights if limit is None else limit
    insights = _on_time_insights(sites)
    for candidate in (
        _black_hole_insight(sites, events),
        _route_insight(sites, trips),
        _overlap_insight(sites),
    ):
        if candidate is not None:
            insights.append(candidate)
    insights.append(_capacity_insight())

    insights.sort(key=lambda insight: PRIORITY_ORDER[insight.priority])
    logging.info(f"Generated {len(insights)} insights, returning top {min(limit, len(insights))}")
    return insights[:limit]
