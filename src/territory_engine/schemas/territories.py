"""Pydantic request/response models for territory endpoints."""

from __future__ import annotations

from typing import Optional, Sequence

from pydantic import BaseModel, Field, field_validator, model_validator

from .sites import SiteModel


class TerritoryRequest(BaseModel):
    sites: Optional[Sequence[SiteModel]] = Field(
        default=None, description="Site roster; defaults to the configured roster file."
    )
    window: Optional[tuple[float, float, float, float]] = Field(
        default=None, description="Bounding window (min_lon, min_lat, max_lon, max_lat)."
    )
    reachability: Optional[dict[int, Sequence[tuple[float, float]]]] = Field(
        default=None, description="Reachability rings keyed by site id, as (lon, lat) pairs."
    )
    use_stored_reachability: bool = Field(
        default=True, description="Load reachability polygons from file when none are supplied."
    )
    min_points: Optional[int] = Field(default=None, ge=3)
    max_points: Optional[int] = Field(default=None, ge=4)

    @field_validator("sites")
    @classmethod
    def validate_sites(cls, value: Optional[Sequence[SiteModel]]) -> Optional[Sequence[SiteModel]]:
        if value is not None and not value:
            raise ValueError("sites must not be empty when provided")
        return value

    @model_validator(mode="after")
    def validate_band(self) -> "TerritoryRequest":
        if self.min_points is not None and self.max_points is not None and self.min_points >= self.max_points:
            raise ValueError("min_points must be below max_points")
        return self


class TerritoryModel(BaseModel):
    site_id: int
    polygon: list[tuple[float, float]]
    area_km2: float
    daily_orders: int
    constrained: bool


class TerritoryResponse(BaseModel):
    territories: list[TerritoryModel]
    metadata: dict
