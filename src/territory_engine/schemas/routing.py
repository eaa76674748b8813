"""Routing request/response schemas."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class TripRequest(BaseModel):
    start: tuple[float, float] = Field(..., description="Site location as (lon, lat).")
    stops: List[tuple[float, float]] = Field(..., description="Stops in their original creation order.")
    trip_id: str = ""
    site_id: int = 0
    speed_kmh: Optional[float] = Field(default=None, gt=0.0)
    stop_minutes: Optional[float] = Field(default=None, ge=0.0)


class TripComparisonResponse(BaseModel):
    trip_id: str
    site_id: int
    executed_path: List[tuple[float, float]]
    executed_minutes: float
    optimized_path: List[tuple[float, float]]
    optimized_minutes: float
    time_saved_minutes: float
