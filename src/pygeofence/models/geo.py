"""Coordinate and zone models."""

from __future__ import annotations

from pydantic import Field

from pygeofence.models._base import GeofenceBaseModel


class Coordinate(GeofenceBaseModel):
    """A WGS84 point.

    Values are consumed as given: no wraparound handling at the
    antimeridian or the poles.
    """

    lat: float
    lng: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lng)


class Zone(GeofenceBaseModel):
    """A named polygonal region (geofence).

    Parameters
    ----------
    id : str
        Unique zone identifier.
    name : str
        Display name.
    polygon : tuple of Coordinate
        Ordered vertices, implicitly closed. At least three.
    """

    id: str = Field(..., min_length=1)
    name: str
    polygon: tuple[Coordinate, ...] = Field(..., min_length=3)

    @property
    def center(self) -> Coordinate:
        """Bounding-box midpoint of the polygon."""
        # Imported lazily; geometry depends on this module.
        from pygeofence.geometry import bounding_box_center

        return bounding_box_center(self.polygon)
