"""Vehicle telemetry and status models."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field, field_validator

from pygeofence.models._base import AwareDatetime, GeofenceBaseModel
from pygeofence.models.geo import Coordinate


class VehicleState(StrEnum):
    """Raw containment state of a vehicle."""

    INSIDE = "inside"
    OUTSIDE = "outside"


class TransitionKind(StrEnum):
    ENTERED = "entered"
    EXITED = "exited"


class VehicleEvent(GeofenceBaseModel):
    """A single location report. Transient; never retained as history."""

    vehicle_id: str = Field(..., description="Vehicle identifier")
    timestamp: AwareDatetime
    location: Coordinate

    @field_validator("vehicle_id")
    @classmethod
    def _normalize_vehicle_id(cls, value: str) -> str:
        vehicle_id = value.strip()
        if not vehicle_id:
            raise ValueError("vehicleId must be non-empty")
        return vehicle_id


class VehicleStatus(GeofenceBaseModel):
    """Last-known status of a vehicle.

    One instance per known vehicle id, replaced on every event.
    """

    vehicle_id: str
    current_zone_id: str | None = None
    state: VehicleState = VehicleState.OUTSIDE
    last_seen: AwareDatetime
    location: Coordinate


class Transition(GeofenceBaseModel):
    """A discrete zone enter/exit event."""

    vehicle_id: str
    kind: TransitionKind
    zone_id: str

    @property
    def description(self) -> str:
        return f"{self.kind.value} zone {self.zone_id}"

    def __str__(self) -> str:
        return self.description


class EventResult(GeofenceBaseModel):
    """Outcome of processing one :class:`VehicleEvent`."""

    status: VehicleStatus
    transition: str | None = None
