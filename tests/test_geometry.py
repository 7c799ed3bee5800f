from __future__ import annotations

import pytest

from pygeofence.geometry import (
    bounding_box_center,
    contains,
    haversine_distance,
    interpolate_straight_line,
    planar_distance,
    polyline_length,
)
from pygeofence.models.geo import Coordinate


def _c(lat: float, lng: float) -> Coordinate:
    return Coordinate(lat=lat, lng=lng)


UNIT_SQUARE = [_c(0, 0), _c(0, 1), _c(1, 1), _c(1, 0)]


def test_unit_square_center_inside_and_far_point_outside() -> None:
    assert contains(_c(0.5, 0.5), UNIT_SQUARE) is True
    assert contains(_c(2, 2), UNIT_SQUARE) is False


def test_containment_is_deterministic() -> None:
    point = _c(0.25, 0.75)
    results = {contains(point, UNIT_SQUARE) for _ in range(50)}
    assert results == {True}


def test_concave_polygon_notch_is_outside() -> None:
    # L-shape: the upper-right quadrant is cut away.
    l_shape = [_c(0, 0), _c(0, 2), _c(1, 2), _c(1, 1), _c(2, 1), _c(2, 0)]

    assert contains(_c(0.5, 1.5), l_shape) is True
    assert contains(_c(1.5, 0.5), l_shape) is True
    assert contains(_c(1.5, 1.5), l_shape) is False


def test_boundary_parity_follows_ray_casting() -> None:
    # West and south edges read as inside, east and north edges as outside.
    assert contains(_c(0.5, 0.0), UNIT_SQUARE) is True
    assert contains(_c(0.0, 0.5), UNIT_SQUARE) is True
    assert contains(_c(0.5, 1.0), UNIT_SQUARE) is False
    assert contains(_c(1.0, 0.5), UNIT_SQUARE) is False


def test_vertex_order_does_not_matter() -> None:
    clockwise = list(reversed(UNIT_SQUARE))
    assert contains(_c(0.5, 0.5), clockwise) is True
    assert contains(_c(-0.1, 0.5), clockwise) is False


def test_bounding_box_center() -> None:
    center = bounding_box_center([_c(51.5030, -0.1450), _c(51.5030, -0.1380), _c(51.5000, -0.1380)])
    assert center.lat == pytest.approx(51.5015)
    assert center.lng == pytest.approx(-0.1415)


def test_distances() -> None:
    assert planar_distance(_c(0, 0), _c(3, 4)) == pytest.approx(5.0)
    # One degree of longitude on the equator.
    assert haversine_distance(_c(0, 0), _c(0, 1)) == pytest.approx(111_195, rel=1e-3)
    assert polyline_length([_c(0, 0), _c(0, 1), _c(0, 2)]) == pytest.approx(2 * 111_195, rel=1e-3)
    assert polyline_length([_c(0, 0)]) == 0


def test_interpolate_straight_line_includes_endpoints() -> None:
    route = interpolate_straight_line([_c(0, 0), _c(1, 2)], points_per_segment=4)

    assert len(route) == 5
    assert route[0] == _c(0, 0)
    assert route[-1] == _c(1, 2)
    assert route[2].lat == pytest.approx(0.5)
    assert route[2].lng == pytest.approx(1.0)


def test_interpolate_straight_line_multiple_segments() -> None:
    route = interpolate_straight_line([_c(0, 0), _c(1, 0), _c(1, 1)], points_per_segment=50)
    assert len(route) == 2 * 51


def test_interpolate_rejects_zero_density() -> None:
    with pytest.raises(ValueError):
        interpolate_straight_line([_c(0, 0), _c(1, 1)], points_per_segment=0)
