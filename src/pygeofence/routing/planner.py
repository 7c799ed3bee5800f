"""Journey planning: which zones a drive should pass through."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from pygeofence._constants import DEFAULT_MAX_DETOUR_FACTOR, GRAND_TOUR_ZONE_IDS
from pygeofence.exceptions import InvalidInputError
from pygeofence.geometry import planar_distance
from pygeofence.models.geo import Coordinate, Zone
from pygeofence.zones.index import ZoneIndex


def plan_intermediate_zones(
    zones: Iterable[Zone],
    start: Zone,
    dest: Zone,
    *,
    max_detour_factor: float = DEFAULT_MAX_DETOUR_FACTOR,
) -> list[Zone]:
    """Zones lying roughly on the way from *start* to *dest*.

    A zone qualifies when ``d(start, zone) + d(zone, dest)`` is at most
    ``max_detour_factor`` times the direct distance (centre to centre).
    Results are ordered by distance from the start.
    """
    start_point = start.center
    dest_point = dest.center
    budget = planar_distance(start_point, dest_point) * max_detour_factor

    candidates: list[tuple[float, Zone]] = []
    for zone in zones:
        if zone.id in (start.id, dest.id):
            continue
        center = zone.center
        from_start = planar_distance(start_point, center)
        if from_start + planar_distance(center, dest_point) <= budget:
            candidates.append((from_start, zone))

    # Stable sort keeps catalog order for equidistant zones.
    candidates.sort(key=lambda item: item[0])
    return [zone for _, zone in candidates]


def _require_zone(index: ZoneIndex, zone_id: str, field: str) -> Zone:
    zone = index.get(zone_id)
    if zone is None:
        raise InvalidInputError(f"Unknown zone: {zone_id}", field=field)
    return zone


def plan_journey(
    index: ZoneIndex,
    start_id: str,
    dest_id: str,
    *,
    max_detour_factor: float = DEFAULT_MAX_DETOUR_FACTOR,
) -> list[Zone]:
    """Ordered targets ``[start, *intermediate, dest]`` for a custom drive."""
    if start_id == dest_id:
        raise InvalidInputError("Start and destination cannot be the same", field="dest")
    start = _require_zone(index, start_id, "start")
    dest = _require_zone(index, dest_id, "dest")
    between = plan_intermediate_zones(index, start, dest, max_detour_factor=max_detour_factor)
    return [start, *between, dest]


def targets_from_ids(index: ZoneIndex, zone_ids: Sequence[str]) -> list[Zone]:
    return [_require_zone(index, zone_id, "zones") for zone_id in zone_ids]


def grand_tour(index: ZoneIndex) -> list[Zone]:
    """The fixed sightseeing loop, skipping zones missing from *index*."""
    return [zone for zone_id in GRAND_TOUR_ZONE_IDS if (zone := index.get(zone_id)) is not None]


def waypoints_for(zones: Iterable[Zone]) -> list[Coordinate]:
    """Zone centres, used as routing waypoints."""
    return [zone.center for zone in zones]
