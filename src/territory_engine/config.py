"""Application configuration and settings management."""

from pathlib import Path
from typing import Any

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="TERRITORY_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Service Territory Engine API"
    api_prefix: str = "/api"
    sites_file: Path = Field(
        default=Path("data/sites.json"),
        description="Site roster with coordinates, demand and quality metrics.",
    )
    reachability_file: Path = Field(
        default=Path("data/reachability.json"),
        description="Precomputed reachability polygons keyed by site id.",
    )
    default_window: tuple[float, float, float, float] = Field(
        default=(116.35, 39.85, 116.65, 40.05),
        description="Bounding window (min_lon, min_lat, max_lon, max_lat) for the partition.",
    )

    # Local equirectangular scaling, valid near the deployment latitude (~40N).
    lon_km_per_degree: float = Field(default=85.0, gt=0.0)
    lat_km_per_degree: float = Field(default=111.0, gt=0.0)

    min_polygon_points: int = Field(default=8, ge=3)
    max_polygon_points: int = Field(default=12, ge=4)
    simplify_initial_tolerance: float = Field(default=0.0005, gt=0.0)
    simplify_escalation: float = Field(default=1.5, gt=1.0)
    simplify_max_tolerance: float = Field(default=0.01, gt=0.0)
    coordinate_precision: int = Field(default=6, ge=0)

    cluster_cell_size_deg: float = Field(default=0.008, gt=0.0)
    min_cluster_size: int = Field(default=3, ge=1)
    cluster_radius_floor_m: float = Field(default=250.0, ge=0.0)
    cluster_radius_margin_m: float = Field(default=80.0, ge=0.0)

    average_speed_kmh: float = Field(default=20.0, gt=0.0)
    stop_handling_minutes: float = Field(default=3.0, ge=0.0)
    delivery_timeout_minutes: float = Field(default=30.0, gt=0.0)

    on_time_warning_rate: float = Field(default=0.88, ge=0.0, le=1.0)
    on_time_critical_rate: float = Field(default=0.85, ge=0.0, le=1.0)
    on_time_success_rate: float = Field(default=0.91, ge=0.0, le=1.0)
    overlap_distance_km: float = Field(default=4.0, gt=0.0)
    route_baseline_minutes: float = Field(default=25.0, gt=0.0)
    route_saving_threshold: float = Field(default=0.08, ge=0.0)
    trips_per_site: int = Field(default=5, ge=1)
    peak_window: str = "11:00-13:00"
    peak_extra_riders: int = Field(default=2, ge=0)
    max_insights: int = Field(default=6, ge=1)
    simulation_seed: int = 42

    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("sites_file", "reachability_file", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("default_window", mode="before")
    @classmethod
    def _parse_window_from_env(cls, value: Any) -> Any:
        """Parse the bounding window from a JSON array or comma-separated string."""
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(float(item) for item in parsed)
            except (json.JSONDecodeError, TypeError, ValueError):
                pass
            return tuple(float(item.strip()) for item in value.split(",") if item.strip())
        if isinstance(value, list):
            return tuple(float(item) for item in value)
        return value


settings = Settings()
