import pytest
from shapely.geometry import Point, Polygon

from territory_engine.errors import ConfigurationError
from territory_engine.services.geospatial import is_degenerate, shoelace
from territory_engine.services.territories import build_partition

UNIT_WINDOW = (0.0, 0.0, 1.0, 1.0)

SCATTERED = [
    (0.13, 0.21),
    (0.71, 0.33),
    (0.42, 0.84),
    (0.90, 0.90),
    (0.35, 0.50),
]


def _area(ring) -> float:
    return abs(shoelace(ring)) / 2.0 if ring else 0.0


def test_two_sites_split_window_at_bisector():
    cells = build_partition([(0.25, 0.5), (0.75, 0.5)], UNIT_WINDOW)

    assert len(cells) == 2
    left, right = (Polygon(cell) for cell in cells)
    assert left.bounds == pytest.approx((0.0, 0.0, 0.5, 1.0))
    assert right.bounds == pytest.approx((0.5, 0.0, 1.0, 1.0))
    for cell in cells:
        assert cell[0] == cell[-1]


def test_cells_follow_input_order_and_contain_their_site():
    cells = build_partition(SCATTERED, UNIT_WINDOW)

    assert len(cells) == len(SCATTERED)
    for position, cell in zip(SCATTERED, cells):
        assert Polygon(cell).contains(Point(position))


def test_cells_cover_window_without_overlap():
    cells = [Polygon(cell) for cell in build_partition(SCATTERED, UNIT_WINDOW)]

    assert sum(cell.area for cell in cells) == pytest.approx(1.0)
    for index, cell in enumerate(cells):
        for other in cells[index + 1:]:
            assert cell.intersection(other).area == pytest.approx(0.0, abs=1e-12)


def test_every_sample_point_lies_in_cell_of_nearest_site():
    cells = [Polygon(cell) for cell in build_partition(SCATTERED, UNIT_WINDOW)]

    for i in range(10):
        for j in range(10):
            point = ((i + 0.5) / 10, (j + 0.5) / 10)
            distances = sorted(
                ((point[0] - x) ** 2 + (point[1] - y) ** 2, index)
                for index, (x, y) in enumerate(SCATTERED)
            )
            if distances[1][0] - distances[0][0] < 1e-9:
                continue
            assert cells[distances[0][1]].covers(Point(point))


def test_single_site_owns_whole_window():
    cells = build_partition([(0.3, 0.3)], UNIT_WINDOW)

    assert len(cells) == 1
    assert _area(cells[0]) == pytest.approx(1.0)


def test_site_outside_window_can_receive_empty_cell():
    cells = build_partition([(0.5, 0.5), (5.0, 5.0)], UNIT_WINDOW)

    assert _area(cells[0]) == pytest.approx(1.0)
    assert cells[1] == ()


def test_colocated_sites_first_occurrence_wins():
    cells = build_partition([(0.2, 0.2), (0.2, 0.2), (0.8, 0.8)], UNIT_WINDOW)

    assert not is_degenerate(cells[0])
    assert cells[1] == ()
    assert not is_degenerate(cells[2])
    assert _area(cells[0]) + _area(cells[2]) == pytest.approx(1.0)


@pytest.mark.parametrize("window", [(1.0, 0.0, 0.0, 1.0), (0.0, 1.0, 1.0, 1.0)])
def test_invalid_window_is_rejected(window):
    with pytest.raises(ConfigurationError):
        build_partition([(0.5, 0.5)], window)


def test_empty_roster_is_rejected():
    with pytest.raises(ConfigurationError):
        build_partition([], UNIT_WINDOW)
