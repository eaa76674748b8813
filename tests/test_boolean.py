import logging

import pytest
from shapely.geometry import Polygon

from territory_engine.services.geospatial import close_ring
from territory_engine.services.territories import boolean
from territory_engine.services.territories.boolean import intersect

CELL = ((0.0, 0.0), (4.0, 0.0), (4.0, 4.0), (0.0, 4.0))


def test_intersection_with_contained_reach():
    result = intersect(CELL, ((1.0, 1.0), (3.0, 1.0), (3.0, 3.0), (1.0, 3.0)))

    assert result[0] == result[-1]
    assert Polygon(result).area == pytest.approx(4.0)
    assert Polygon(result).bounds == pytest.approx((1.0, 1.0, 3.0, 3.0))


def test_multi_component_result_keeps_largest_piece():
    # U-shaped reach: both arms cross the cell, the right arm is wider.
    reach = (
        (-0.5, -2.0), (3.5, -2.0), (3.5, 3.0), (2.0, 3.0),
        (2.0, -1.0), (1.0, -1.0), (1.0, 3.0), (-0.5, 3.0),
    )
    result = intersect(CELL, reach)

    assert Polygon(result).area == pytest.approx(4.5)
    assert Polygon(result).bounds == pytest.approx((2.0, 0.0, 3.5, 3.0))


@pytest.mark.parametrize("reach", [None, (), ((1.0, 1.0), (2.0, 2.0))])
def test_missing_or_degenerate_reach_returns_cell(reach, caplog):
    with caplog.at_level(logging.INFO):
        assert intersect(CELL, reach) == close_ring(CELL)
    assert "missing or degenerate" in caplog.text


def test_disjoint_reach_returns_cell(caplog):
    reach = ((10.0, 10.0), (11.0, 10.0), (11.0, 11.0), (10.0, 11.0))
    with caplog.at_level(logging.INFO):
        assert intersect(CELL, reach) == close_ring(CELL)
    assert "does not overlap" in caplog.text


def test_touching_reach_has_no_area_and_returns_cell():
    reach = ((4.0, 0.0), (5.0, 0.0), (5.0, 4.0), (4.0, 4.0))
    assert intersect(CELL, reach) == close_ring(CELL)


def test_backend_failure_returns_cell(monkeypatch, caplog):
    def _boom(a, b):
        raise ValueError("backend exploded")

    monkeypatch.setattr(boolean, "intersect_largest", _boom)
    with caplog.at_level(logging.WARNING):
        result = intersect(CELL, ((1.0, 1.0), (3.0, 1.0), (3.0, 3.0)))
    assert result == close_ring(CELL)
    assert "intersection failed" in caplog.text


def test_self_intersecting_reach_is_repaired():
    bowtie = ((0.0, 0.0), (2.0, 2.0), (2.0, 0.0), (0.0, 2.0))
    result = intersect(CELL, bowtie)

    assert Polygon(result).is_valid
    assert Polygon(result).area == pytest.approx(1.0)
