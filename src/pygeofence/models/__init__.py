"""Data models for pygeofence."""

from pygeofence.models._base import AwareDatetime, GeofenceBaseModel
from pygeofence.models.geo import Coordinate, Zone
from pygeofence.models.route import (
    ProgressSnapshot,
    RouteResult,
    RouteSource,
    RouteStep,
    StepState,
)
from pygeofence.models.vehicle import (
    EventResult,
    Transition,
    TransitionKind,
    VehicleEvent,
    VehicleState,
    VehicleStatus,
)

__all__ = [
    "AwareDatetime",
    "Coordinate",
    "EventResult",
    "GeofenceBaseModel",
    "ProgressSnapshot",
    "RouteResult",
    "RouteSource",
    "RouteStep",
    "StepState",
    "Transition",
    "TransitionKind",
    "VehicleEvent",
    "VehicleState",
    "VehicleStatus",
    "Zone",
]
