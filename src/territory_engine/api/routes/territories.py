"""API routes for territory generation."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, status

from ...config import settings
from ...data.sites_repository import load_reachability, load_sites
from ...models.domain import Territory
from ...schemas.territories import TerritoryModel, TerritoryRequest, TerritoryResponse
from ...services.export import territories_to_geojson
from ...services.geospatial import close_ring
from ...services.territories import compute_territories

router = APIRouter(prefix="/territories", tags=["territories"])


def _run(payload: TerritoryRequest) -> tuple[list[Territory], dict[str, Any]]:
    sites = [site.to_domain() for site in payload.sites] if payload.sites else list(load_sites())
    if payload.reachability is not None:
        reachability = {site_id: close_ring(ring) for site_id, ring in payload.reachability.items()}
    elif payload.use_stored_reachability:
        reachability = load_reachability()
    else:
        reachability = {}

    window = payload.window or settings.default_window
    territories = compute_territories(
        sites,
        window,
        reachability,
        min_points=payload.min_points,
        max_points=payload.max_points,
    )
    metadata = {
        "window": list(window),
        "site_count": len(sites),
        "constrained_count": sum(1 for territory in territories if territory.constrained),
        "empty_count": sum(1 for territory in territories if not territory.polygon),
        "min_points": payload.min_points or settings.min_polygon_points,
        "max_points": payload.max_points or settings.max_polygon_points,
    }
    return territories, metadata


def _handle(payload: TerritoryRequest) -> tuple[list[Territory], dict[str, Any]]:
    try:
        return _run(payload)
    except FileNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error generating territories: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate territories: {exc}",
        ) from exc


@router.post("/generate", response_model=TerritoryResponse, status_code=status.HTTP_200_OK)
def generate_territories(payload: TerritoryRequest) -> TerritoryResponse:
    territories, metadata = _handle(payload)
    return TerritoryResponse(
        territories=[
            TerritoryModel(
                site_id=territory.site_id,
                polygon=list(territory.polygon),
                area_km2=territory.area_km2,
                daily_orders=territory.daily_orders,
                constrained=territory.constrained,
            )
            for territory in territories
        ],
        metadata=metadata,
    )


@router.post("/geojson", status_code=status.HTTP_200_OK)
def generate_territories_geojson(payload: TerritoryRequest) -> dict:
    territories, _ = _handle(payload)
    return territories_to_geojson(territories)
