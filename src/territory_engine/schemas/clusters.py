"""Failure event clustering schemas."""

from __future__ import annotations

from typing import Optional, Sequence

from pydantic import BaseModel, Field

from ..models.domain import FailureEvent


class FailureEventModel(BaseModel):
    event_id: str = ""
    longitude: float
    latitude: float
    duration_minutes: float = 0.0
    overdue_minutes: float = Field(default=0.0, description="Minutes beyond the delivery timeout.")
    cause: str = "unknown"
    cause_category: str = "other"

    def to_domain(self) -> FailureEvent:
        return FailureEvent(**self.model_dump())


class ClusterRequest(BaseModel):
    events: Sequence[FailureEventModel]
    cell_size_deg: Optional[float] = Field(default=None, gt=0.0, description="Grid cell size in degrees.")
    min_cluster_size: Optional[int] = Field(default=None, ge=1)


class ClusterModel(BaseModel):
    cluster_id: str
    longitude: float
    latitude: float
    count: int
    radius_m: float
    dominant_cause: Optional[str] = None


class ClusterResponse(BaseModel):
    clusters: list[ClusterModel]
    worst_cluster_id: Optional[str] = None
    unclustered_events: int
