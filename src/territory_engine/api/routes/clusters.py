"""API routes for failure event clustering."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...models.domain import Cluster
from ...schemas.clusters import ClusterModel, ClusterRequest, ClusterResponse
from ...services.clustering import cluster_events, dominant_cause, worst_cluster
from ...services.export import clusters_to_geojson

router = APIRouter(prefix="/clusters", tags=["clusters"])


def _cluster(payload: ClusterRequest) -> list[Cluster]:
    events = [event.to_domain() for event in payload.events]
    try:
        return cluster_events(events, payload.cell_size_deg, payload.min_cluster_size)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error clustering events: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to cluster events: {exc}",
        ) from exc


@router.post("", response_model=ClusterResponse, status_code=status.HTTP_200_OK)
def build_clusters(payload: ClusterRequest) -> ClusterResponse:
    clusters = _cluster(payload)
    worst = worst_cluster(clusters)
    return ClusterResponse(
        clusters=[
            ClusterModel(
                cluster_id=cluster.cluster_id,
                longitude=cluster.longitude,
                latitude=cluster.latitude,
                count=cluster.count,
                radius_m=cluster.radius_m,
                dominant_cause=dominant_cause(cluster.members),
            )
            for cluster in clusters
        ],
        worst_cluster_id=worst.cluster_id if worst else None,
        unclustered_events=len(payload.events) - sum(cluster.count for cluster in clusters),
    )


@router.post("/geojson", status_code=status.HTTP_200_OK)
def build_clusters_geojson(payload: ClusterRequest) -> dict:
    return clusters_to_geojson(_cluster(payload))
