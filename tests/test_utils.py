import math

import pytest

from config import EARTH_RADIUS_M
from models import Coordinate, RouteTooShort
from utils import (
    haversine_distance,
    calculate_distance_from_points,
    format_distance,
    distance_hint,
    calculate_bounds,
    create_gpx,
)

CHICAGO = Coordinate(41.88674, -87.63139)
LAKEFRONT = Coordinate(41.88254, -87.61512)
NORTH = Coordinate(41.93251, -87.63172)


@pytest.mark.parametrize("point", [CHICAGO, Coordinate(0, 0), Coordinate(90, 180), Coordinate(-45.5, -179.9)])
def test_distance_to_self_is_zero(point):
    assert haversine_distance(point, point) == 0


def test_distance_is_symmetric():
    assert haversine_distance(CHICAGO, NORTH) == pytest.approx(haversine_distance(NORTH, CHICAGO))


def test_one_degree_of_longitude_at_equator():
    expected = EARTH_RADIUS_M * math.pi / 180
    assert haversine_distance(Coordinate(0, 0), Coordinate(0, 1)) == pytest.approx(expected)


def test_antipodal_points():
    d = haversine_distance(Coordinate(0, 0), Coordinate(0, 180))
    assert d == pytest.approx(math.pi * EARTH_RADIUS_M)
    d = haversine_distance(Coordinate(90, 0), Coordinate(-90, 0))
    assert d == pytest.approx(math.pi * EARTH_RADIUS_M)


def test_triangle_inequality_on_meridian():
    a, b, c = Coordinate(10, 20), Coordinate(20, 20), Coordinate(30, 20)
    ab = haversine_distance(a, b)
    bc = haversine_distance(b, c)
    ac = haversine_distance(a, c)
    assert ac <= ab + bc + 1e-6
    assert ac == pytest.approx(ab + bc)


def test_triangle_inequality_with_detour():
    a, b, c = Coordinate(0, 0), Coordinate(5, 5), Coordinate(0, 10)
    assert haversine_distance(a, c) < haversine_distance(a, b) + haversine_distance(b, c)


def test_total_distance_short_routes():
    assert calculate_distance_from_points([]) == 0
    assert calculate_distance_from_points([CHICAGO]) == 0


def test_total_distance_sums_legs():
    route = [CHICAGO, LAKEFRONT, NORTH]
    expected = haversine_distance(CHICAGO, LAKEFRONT) + haversine_distance(LAKEFRONT, NORTH)
    assert calculate_distance_from_points(route) == pytest.approx(expected)


def test_total_distance_reversed_is_same():
    route = [CHICAGO, LAKEFRONT, NORTH]
    assert calculate_distance_from_points(route[::-1]) == pytest.approx(calculate_distance_from_points(route))


def test_total_distance_depends_on_interior_order():
    a, b, c = Coordinate(0, 0), Coordinate(0, 1), Coordinate(0, 2)
    assert calculate_distance_from_points([a, c, b]) > calculate_distance_from_points([a, b, c])


def test_format_distance():
    assert format_distance(1609.344) == ("1.61", "1.00")
    assert format_distance(0) == ("0.00", "0.00")


def test_distance_hint_rounds_to_ten_meters():
    assert distance_hint(5234.9) == 5230
    assert distance_hint(5236) == 5240
    assert distance_hint(0) == 0


def test_calculate_bounds():
    bounds = calculate_bounds([CHICAGO, LAKEFRONT, NORTH])
    assert bounds == [[41.88254, -87.63172], [41.93251, -87.61512]]


def test_calculate_bounds_requires_points():
    with pytest.raises(ValueError):
        calculate_bounds([])


def test_gpx_two_points():
    xml = create_gpx([Coordinate(0, 0), Coordinate(0, 1)])
    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert xml.count("<trkpt ") == 2
    assert 'lat="0" lon="0"' in xml
    assert 'lat="0" lon="1"' in xml
    assert xml.count("<ele>0</ele>") == 2
    assert 'creator="TrailRouter-Lite"' in xml
    assert "<name>TrailRouter-Lite Route</name>" in xml
    assert xml.count("<trkseg>") == 1
    assert "<time>" not in xml


def test_gpx_keeps_full_precision():
    xml = create_gpx([Coordinate(41.886741234, -87.631391234), LAKEFRONT])
    assert 'lat="41.886741234" lon="-87.631391234"' in xml


def test_gpx_is_deterministic():
    route = [CHICAGO, LAKEFRONT, NORTH]
    assert create_gpx(route) == create_gpx(list(route))


@pytest.mark.parametrize("route", [[], [CHICAGO]])
def test_gpx_rejects_short_routes(route):
    with pytest.raises(RouteTooShort):
        create_gpx(route)
