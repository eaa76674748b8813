"""Domain models for sites, territories, failure events and trips."""

from dataclasses import dataclass, field
from typing import Literal, Optional

Coordinate = tuple[float, float]
"""A (longitude, latitude) pair in degrees."""

Ring = tuple[Coordinate, ...]
"""An explicitly closed polygon ring; the empty tuple is the empty polygon."""

Window = tuple[float, float, float, float]
"""A bounding rectangle (min_lon, min_lat, max_lon, max_lat)."""


@dataclass(slots=True, frozen=True)
class Site:
    """Represents a retail site that fulfils deliveries."""

    site_id: int
    name: str
    longitude: float
    latitude: float
    daily_orders: int
    on_time_rate: float
    avg_delivery_minutes: Optional[float] = None
    timeout_orders: Optional[int] = None

    @property
    def position(self) -> Coordinate:
        return (self.longitude, self.latitude)


@dataclass(slots=True, frozen=True)
class Territory:
    """Final service area for a site."""

    site_id: int
    polygon: Ring
    area_km2: float
    daily_orders: int
    constrained: bool = False


@dataclass(slots=True, frozen=True)
class FailureEvent:
    """A delivery that exceeded the timeout threshold."""

    event_id: str
    longitude: float
    latitude: float
    duration_minutes: float
    overdue_minutes: float
    cause: str
    cause_category: str

    @property
    def position(self) -> Coordinate:
        return (self.longitude, self.latitude)


@dataclass(slots=True, frozen=True)
class Cluster:
    cluster_id: str
    cell: tuple[int, int]
    longitude: float
    latitude: float
    count: int
    radius_m: float
    members: tuple[FailureEvent, ...] = field(default=(), repr=False)

    @property
    def center(self) -> Coordinate:
        return (self.longitude, self.latitude)


@dataclass(slots=True, frozen=True)
class DeliveryTrip:
    """One rider trip with its as-executed and greedily optimized orderings."""

    trip_id: str
    site_id: int
    stops: tuple[Coordinate, ...]
    executed_path: tuple[Coordinate, ...]
    executed_minutes: float
    optimized_path: tuple[Coordinate, ...]
    optimized_minutes: float

    @property
    def time_saved_minutes(self) -> float:
        return self.executed_minutes - self.optimized_minutes


InsightKind = Literal["warning", "success", "suggestion"]
InsightPriority = Literal["high", "medium", "low"]


@dataclass(slots=True, frozen=True)
class Insight:
    insight_id: str
    kind: InsightKind
    title: str
    description: str
    priority: InsightPriority
    site_id: Optional[int] = None
