"""Data access helpers for loading the site roster and reachability polygons."""

from __future__ import annotations

import functools
import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..config import settings
from ..models.domain import Ring, Site
from ..services.geospatial import close_ring


def _coerce_optional(value: Any, cast: type) -> Any:
    if value is None or value == "":
        return None
    return cast(value)


def _site_from_record(record: dict) -> Site:
    try:
        return Site(
            site_id=int(record["id"] if "id" in record else record["site_id"]),
            name=str(record.get("name") or "").strip(),
            longitude=float(record.get("lon", record.get("longitude"))),
            latitude=float(record.get("lat", record.get("latitude"))),
            daily_orders=int(record.get("daily_orders") or 0),
            on_time_rate=float(record.get("on_time_rate") or 0.0),
            avg_delivery_minutes=_coerce_optional(
                record.get("avg_delivery_time", record.get("avg_delivery_minutes")), float
            ),
            timeout_orders=_coerce_optional(record.get("timeout_orders"), int),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Invalid site record {record!r}: {exc}") from exc


@functools.lru_cache(maxsize=1)
def load_sites(source: Optional[Path] = None) -> tuple[Site, ...]:
    """Load the site roster from the configured JSON file."""

    json_path = source or settings.sites_file
    if not json_path.exists():
        raise FileNotFoundError(f"Site roster not found: {json_path}")

    with json_path.open(mode="r", encoding="utf-8") as handle:
        payload = json.load(handle)
    records = payload.get("sites", []) if isinstance(payload, dict) else payload
    sites = tuple(_site_from_record(record) for record in records)

    seen: set[int] = set()
    for site in sites:
        if site.site_id in seen:
            raise ValueError(f"Duplicate site id {site.site_id} in {json_path}")
        seen.add(site.site_id)
    return sites


def _parse_isochrone_export(payload: dict) -> dict[int, Ring]:
    polygons: dict[int, Ring] = {}
    for store in payload.get("stores", []):
        features = (store.get("isochrone") or {}).get("features") or []
        if not features:
            continue
        coordinates = (features[0].get("geometry") or {}).get("coordinates") or []
        if not coordinates:
            continue
        polygons[int(store["store_id"])] = close_ring(coordinates[0])
    return polygons


def parse_reachability(payload: Any) -> dict[int, Ring]:
    """Accept either ``{site_id: [[lon, lat], ...]}`` or the isochrone export layout."""

    if isinstance(payload, dict) and "stores" in payload:
        return _parse_isochrone_export(payload)
    if isinstance(payload, dict):
        return {int(site_id): close_ring(ring) for site_id, ring in payload.items() if ring}
    raise ValueError("Unrecognized reachability payload; expected a JSON object.")


def load_reachability(source: Optional[Path] = None) -> dict[int, Ring]:
    """Load reachability polygons; a missing file means no site is constrained."""

    json_path = source or settings.reachability_file
    if not json_path.exists():
        logging.info(f"Reachability file not found at {json_path}; territories stay unconstrained")
        return {}
    with json_path.open(mode="r", encoding="utf-8") as handle:
        return parse_reachability(json.load(handle))
