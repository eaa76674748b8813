"""API routes for delivery route comparison."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import TripComparisonResponse, TripRequest
from ...services.export import trip_to_geojson
from ...services.routing import compare_trip

router = APIRouter(prefix="/routes", tags=["routes"])


def _compare(payload: TripRequest):
    try:
        return compare_trip(
            payload.start,
            payload.stops,
            trip_id=payload.trip_id,
            site_id=payload.site_id,
            speed_kmh=payload.speed_kmh,
            stop_minutes=payload.stop_minutes,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error comparing routes: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to compare routes: {exc}",
        ) from exc


@router.post("/compare", response_model=TripComparisonResponse, status_code=status.HTTP_200_OK)
def compare_routes(payload: TripRequest) -> TripComparisonResponse:
    trip = _compare(payload)
    return TripComparisonResponse(
        trip_id=trip.trip_id,
        site_id=trip.site_id,
        executed_path=list(trip.executed_path),
        executed_minutes=trip.executed_minutes,
        optimized_path=list(trip.optimized_path),
        optimized_minutes=trip.optimized_minutes,
        time_saved_minutes=trip.time_saved_minutes,
    )


@router.post("/compare/geojson", status_code=status.HTTP_200_OK)
def compare_routes_geojson(payload: TripRequest) -> dict:
    return trip_to_geojson(_compare(payload))
