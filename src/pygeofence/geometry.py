"""Planar and spherical geometry helpers.

Containment uses the even-odd (ray casting) rule on raw lat/lng values.
Points lying exactly on a polygon edge get whatever parity the crossing
count yields: a point on a left or bottom edge of an axis-aligned box
reads as inside, one on a right or top edge as outside. Callers that
need boundary-inclusive semantics must buffer their polygons.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from pygeofence._constants import EARTH_RADIUS_M
from pygeofence.models.geo import Coordinate


def contains(point: Coordinate, polygon: Sequence[Coordinate]) -> bool:
    """Return ``True`` when *point* lies inside *polygon*.

    A ray is cast eastward from the point; every edge that straddles the
    point's latitude and crosses east of it toggles the result. O(n) in
    the vertex count, no side effects.
    """
    inside = False
    count = len(polygon)
    j = count - 1
    for i in range(count):
        xi, yi = polygon[i].lng, polygon[i].lat
        xj, yj = polygon[j].lng, polygon[j].lat
        # The straddle test guarantees yi != yj, so the division is safe.
        if (yi > point.lat) != (yj > point.lat) and point.lng < (xj - xi) * (point.lat - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside


def bounding_box_center(polygon: Sequence[Coordinate]) -> Coordinate:
    """Midpoint of the polygon's lat/lng bounding box."""
    if not polygon:
        raise ValueError("polygon must have at least one vertex")
    lats = [p.lat for p in polygon]
    lngs = [p.lng for p in polygon]
    return Coordinate(
        lat=(min(lats) + max(lats)) / 2,
        lng=(min(lngs) + max(lngs)) / 2,
    )


def planar_distance(a: Coordinate, b: Coordinate) -> float:
    """Euclidean distance in degrees. Only meaningful for short spans."""
    return math.hypot(a.lat - b.lat, a.lng - b.lng)


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in metres."""
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    dlat = lat2 - lat1
    dlng = math.radians(b.lng - a.lng)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_M * math.asin(min(1.0, math.sqrt(h)))


def polyline_length(points: Sequence[Coordinate]) -> float:
    """Sum of haversine distances between consecutive points, in metres."""
    return sum(haversine_distance(points[i], points[i + 1]) for i in range(len(points) - 1))


def interpolate_straight_line(waypoints: Sequence[Coordinate], points_per_segment: int) -> list[Coordinate]:
    """Linearly interpolate between consecutive waypoints.

    Each segment contributes ``points_per_segment + 1`` points (both
    endpoints included), so joints between segments appear twice.
    """
    if points_per_segment < 1:
        raise ValueError(f"points_per_segment must be >= 1, got {points_per_segment}")
    route: list[Coordinate] = []
    for start, end in zip(waypoints, waypoints[1:]):
        for step in range(points_per_segment + 1):
            ratio = step / points_per_segment
            route.append(
                Coordinate(
                    lat=start.lat + (end.lat - start.lat) * ratio,
                    lng=start.lng + (end.lng - start.lng) * ratio,
                )
            )
    return route
