"""Route and route-progress models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from pygeofence.models._base import GeofenceBaseModel
from pygeofence.models.geo import Coordinate, Zone


class RouteSource(StrEnum):
    """Which stage of the fallback chain produced a route."""

    GRAPH = "graph"
    EXTERNAL = "external"
    STRAIGHT_LINE = "straight_line"


class StepState(StrEnum):
    COMPLETED = "completed"
    ACTIVE = "active"
    PENDING = "pending"


class RouteResult(GeofenceBaseModel):
    """A computed polyline for a multi-waypoint journey.

    Parameters
    ----------
    route : list of Coordinate
        Ordered polyline.
    source : RouteSource
        Producer of the polyline.
    distance : float or None
        Length in metres.
    duration : float or None
        Travel time in seconds, when the producer knows it.
    """

    route: list[Coordinate] = Field(default_factory=list)
    source: RouteSource
    distance: float | None = None
    duration: float | None = None


class RouteStep(GeofenceBaseModel):
    """One targeted zone of a journey, with its UI classification."""

    zone: Zone
    index: int
    state: StepState = StepState.PENDING


class ProgressSnapshot(GeofenceBaseModel):
    """Classified view of a journey's steps."""

    current_index: int
    steps: list[RouteStep] = Field(default_factory=list)
    finished: bool = False

    @property
    def current_step(self) -> RouteStep | None:
        if 0 <= self.current_index < len(self.steps):
            return self.steps[self.current_index]
        return None
