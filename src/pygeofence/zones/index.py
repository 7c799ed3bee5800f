"""Ordered zone index.

Zones may overlap. Resolution is first-match-in-list-order, so the
catalog order is the priority tie-break and is preserved verbatim.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence

from pygeofence.exceptions import ZoneCatalogError
from pygeofence.geometry import contains, planar_distance
from pygeofence.models.geo import Coordinate, Zone


def resolve_zone(point: Coordinate, zones: Iterable[Zone]) -> str | None:
    """Return the id of the first zone containing *point*, or ``None``."""
    for zone in zones:
        if contains(point, zone.polygon):
            return zone.id
    return None


class ZoneIndex:
    """Immutable, ordered collection of zones."""

    def __init__(self, zones: Sequence[Zone]) -> None:
        seen: set[str] = set()
        for zone in zones:
            if zone.id in seen:
                raise ZoneCatalogError(f"Duplicate zone id: {zone.id}")
            seen.add(zone.id)
        self._zones: tuple[Zone, ...] = tuple(zones)
        self._by_id: dict[str, Zone] = {zone.id: zone for zone in self._zones}
        self._centers: dict[str, Coordinate] = {zone.id: zone.center for zone in self._zones}

    @property
    def zones(self) -> tuple[Zone, ...]:
        return self._zones

    def __iter__(self) -> Iterator[Zone]:
        return iter(self._zones)

    def __len__(self) -> int:
        return len(self._zones)

    def __contains__(self, zone_id: object) -> bool:
        return zone_id in self._by_id

    def get(self, zone_id: str) -> Zone | None:
        return self._by_id.get(zone_id)

    def center(self, zone_id: str) -> Coordinate | None:
        return self._centers.get(zone_id)

    def resolve(self, point: Coordinate) -> str | None:
        """First zone (in catalog order) whose polygon contains *point*."""
        return resolve_zone(point, self._zones)

    def nearest_within(self, point: Coordinate, radius_degrees: float) -> str | None:
        """First zone (in catalog order) whose centre is within *radius_degrees*.

        Despite the name this is not a nearest-neighbour search: the first
        zone inside the radius wins, matching :meth:`resolve` ordering.
        """
        for zone in self._zones:
            if planar_distance(point, self._centers[zone.id]) < radius_degrees:
                return zone.id
        return None
