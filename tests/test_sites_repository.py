import json
from pathlib import Path

import pytest

from territory_engine.data.sites_repository import (
    load_reachability,
    load_sites,
    parse_reachability,
)

ROSTER = Path(__file__).resolve().parents[1] / "data" / "sites.json"


@pytest.fixture(autouse=True)
def clear_site_cache():
    load_sites.cache_clear()
    yield
    load_sites.cache_clear()


def _write(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_bundled_roster_loads():
    sites = load_sites(ROSTER)

    assert [site.site_id for site in sites] == [1, 2, 3, 4, 5, 6]
    assert sites[0].avg_delivery_minutes == 23
    assert sites[0].timeout_orders == 42
    assert all(0.0 < site.on_time_rate <= 1.0 for site in sites)


def test_load_sites_accepts_wrapped_records(tmp_path):
    path = _write(
        tmp_path / "sites.json",
        {
            "sites": [
                {"site_id": 10, "name": " Depot ", "longitude": 116.4, "latitude": 39.9, "daily_orders": 12, "on_time_rate": 0.9},
            ]
        },
    )
    (site,) = load_sites(path)

    assert site.site_id == 10
    assert site.name == "Depot"
    assert site.position == (116.4, 39.9)
    assert site.avg_delivery_minutes is None


def test_load_sites_rejects_duplicate_ids(tmp_path):
    record = {"id": 1, "name": "A", "lon": 116.4, "lat": 39.9}
    path = _write(tmp_path / "sites.json", [record, record])

    with pytest.raises(ValueError, match="Duplicate site id"):
        load_sites(path)


def test_load_sites_rejects_bad_records(tmp_path):
    path = _write(tmp_path / "sites.json", [{"id": 1, "name": "A", "lon": "east", "lat": 39.9}])

    with pytest.raises(ValueError, match="Invalid site record"):
        load_sites(path)


def test_load_sites_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_sites(tmp_path / "missing.json")


def test_parse_reachability_mapping():
    polygons = parse_reachability({"3": [[0, 0], [1, 0], [1, 1]]})

    assert polygons == {3: ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 0.0))}


def test_parse_reachability_isochrone_export():
    payload = {
        "stores": [
            {
                "store_id": 2,
                "isochrone": {
                    "features": [
                        {"geometry": {"coordinates": [[[116.4, 39.9], [116.5, 39.9], [116.5, 40.0], [116.4, 39.9]]]}}
                    ]
                },
            },
            {"store_id": 5, "isochrone": {"features": []}},
        ]
    }
    polygons = parse_reachability(payload)

    assert list(polygons) == [2]
    assert polygons[2][0] == polygons[2][-1]
    assert len(polygons[2]) == 4


def test_parse_reachability_rejects_lists():
    with pytest.raises(ValueError):
        parse_reachability([[0, 0], [1, 1]])


def test_load_reachability_missing_file_means_unconstrained(tmp_path):
    assert load_reachability(tmp_path / "missing.json") == {}


def test_load_reachability_from_file(tmp_path):
    path = _write(tmp_path / "reach.json", {"1": [[0, 0], [1, 0], [1, 1], [0, 1]]})
    assert set(load_reachability(path)) == {1}
