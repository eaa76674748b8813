"""Site roster schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..models.domain import Site


class SiteModel(BaseModel):
    site_id: int
    name: str = ""
    longitude: float = Field(..., ge=-180.0, le=180.0)
    latitude: float = Field(..., ge=-90.0, le=90.0)
    daily_orders: int = Field(default=0, ge=0)
    on_time_rate: float = Field(default=0.0, ge=0.0, le=1.0)
    avg_delivery_minutes: Optional[float] = None
    timeout_orders: Optional[int] = None

    def to_domain(self) -> Site:
        return Site(**self.model_dump())

    @classmethod
    def from_domain(cls, site: Site) -> "SiteModel":
        return cls(
            site_id=site.site_id,
            name=site.name,
            longitude=site.longitude,
            latitude=site.latitude,
            daily_orders=site.daily_orders,
            on_time_rate=site.on_time_rate,
            avg_delivery_minutes=site.avg_delivery_minutes,
            timeout_orders=site.timeout_orders,
        )


class SiteSummaryResponse(BaseModel):
    site_count: int
    total_daily_orders: int
    avg_on_time_rate: float
    warning_count: int
