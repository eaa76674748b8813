import pytest

from territory_engine.errors import ConfigurationError
from territory_engine.services.routing import compare_trip, greedy_tour, path_distance_km, tour_duration

START = (116.50, 39.90)


def _east(units: float):
    return (START[0] + units * 0.01, START[1])


def test_greedy_tour_visits_nearest_first():
    stops = [_east(3), _east(1), _east(2)]
    assert greedy_tour(START, stops) == [START, _east(1), _east(2), _east(3)]


def test_greedy_tour_trivial_inputs():
    assert greedy_tour(START, []) == [START]
    assert greedy_tour(START, [_east(1)]) == [START, _east(1)]


def test_greedy_tour_ties_go_to_first_listed_stop():
    origin = (0.0, 0.0)
    assert greedy_tour(origin, [(-0.01, 0.0), (0.01, 0.0)]) == [origin, (-0.01, 0.0), (0.01, 0.0)]
    assert greedy_tour(origin, [(0.01, 0.0), (-0.01, 0.0)]) == [origin, (0.01, 0.0), (-0.01, 0.0)]


def test_greedy_tour_visits_every_stop_once():
    stops = [(116.51, 39.91), (116.49, 39.92), (116.52, 39.88), (116.48, 39.89)]
    path = greedy_tour(START, stops)

    assert path[0] == START
    assert sorted(path[1:]) == sorted(stops)


def test_tour_duration_linear_model():
    # 0.2 deg of longitude = 17 km at 20 km/h = 51 minutes, plus 3 minutes per point.
    assert tour_duration([START, _east(20)]) == pytest.approx(57.0)
    assert tour_duration([START]) == pytest.approx(3.0)
    assert tour_duration([]) == 0.0
    assert tour_duration([START, _east(20)], speed_kmh=34.0, stop_minutes=0.0) == pytest.approx(30.0)


def test_tour_duration_rejects_non_positive_speed():
    with pytest.raises(ConfigurationError):
        tour_duration([START, _east(1)], speed_kmh=0.0)


def test_path_distance():
    assert path_distance_km([START, _east(1), _east(3)]) == pytest.approx(2.55)
    assert path_distance_km([START]) == 0.0


def test_compare_trip_reports_saving():
    trip = compare_trip(START, [_east(3), _east(1), _east(2)], trip_id="T0101", site_id=1)

    assert trip.executed_path == (START, _east(3), _east(1), _east(2))
    assert trip.optimized_path == (START, _east(1), _east(2), _east(3))
    # 5.1 km executed vs 2.55 km optimized at 20 km/h
    assert trip.time_saved_minutes == pytest.approx(7.65)
    assert trip.trip_id == "T0101"
    assert trip.site_id == 1


def test_compare_trip_saving_can_be_negative():
    # Greedy jumps to the closest stop first and then has to double back.
    trip = compare_trip(START, [_east(-1.5), _east(1), _east(5)])

    assert trip.optimized_path == (START, _east(1), _east(-1.5), _east(5))
    assert trip.time_saved_minutes < 0


def test_greedy_tour_is_no_slower_than_worst_reverse_order():
    site = (0.0, 0.0)
    stops = [(0.0, 1 / 111), (0.0, 2 / 111), (1 / 85, 0.0)]
    path = greedy_tour(site, stops)

    assert len(path) == 4
    assert len(set(path[1:])) == 3
    assert set(path[1:]) == set(stops)
    assert tour_duration(path) <= tour_duration([site, *reversed(stops)]) + 1e-9
