"""Tests for Pydantic model parsing with GeofenceBaseModel."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from pygeofence.models import (
    Coordinate,
    ProgressSnapshot,
    RouteResult,
    RouteSource,
    RouteStep,
    StepState,
    Transition,
    TransitionKind,
    VehicleEvent,
    VehicleStatus,
    Zone,
)

# ------------------------------------------------------------------
# GeofenceBaseModel
# ------------------------------------------------------------------


class TestBaseModel:
    def test_camel_case_and_snake_case_both_accepted(self) -> None:
        camel = VehicleEvent.model_validate(
            {"vehicleId": "car-1", "timestamp": "2026-03-01T12:00:00Z", "location": {"lat": 1, "lng": 2}}
        )
        snake = VehicleEvent(
            vehicle_id="car-1", timestamp=datetime(2026, 3, 1, 12, tzinfo=UTC), location=camel.location
        )
        assert camel == snake

    def test_models_are_frozen(self) -> None:
        point = Coordinate(lat=1, lng=2)
        with pytest.raises(ValidationError):
            point.lat = 5  # type: ignore[misc]

    def test_unknown_keys_ignored(self) -> None:
        point = Coordinate.model_validate({"lat": 1, "lng": 2, "alt": 30})
        assert point.as_tuple() == (1, 2)

    def test_naive_datetime_becomes_utc(self) -> None:
        status = VehicleStatus(
            vehicle_id="car-1",
            last_seen=datetime(2026, 3, 1, 12),
            location=Coordinate(lat=0, lng=0),
        )
        assert status.last_seen.tzinfo is UTC

    def test_aware_datetime_kept(self) -> None:
        plus_two = timezone(timedelta(hours=2))
        status = VehicleStatus(
            vehicle_id="car-1",
            last_seen=datetime(2026, 3, 1, 12, tzinfo=plus_two),
            location=Coordinate(lat=0, lng=0),
        )
        assert status.last_seen.utcoffset() == timedelta(hours=2)


# ------------------------------------------------------------------
# Vehicle models
# ------------------------------------------------------------------


class TestVehicleModels:
    def test_event_vehicle_id_stripped(self) -> None:
        event = VehicleEvent(vehicle_id="  car-1 ", timestamp=datetime.now(UTC), location=Coordinate(lat=0, lng=0))
        assert event.vehicle_id == "car-1"

    def test_event_blank_vehicle_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            VehicleEvent(vehicle_id="   ", timestamp=datetime.now(UTC), location=Coordinate(lat=0, lng=0))

    def test_transition_description(self) -> None:
        transition = Transition(vehicle_id="car-1", kind=TransitionKind.EXITED, zone_id="eye")
        assert transition.description == "exited zone eye"
        assert str(transition) == "exited zone eye"

    def test_status_defaults_to_outside(self) -> None:
        status = VehicleStatus(vehicle_id="car-1", last_seen=datetime.now(UTC), location=Coordinate(lat=0, lng=0))
        assert status.current_zone_id is None
        assert status.state == "outside"


# ------------------------------------------------------------------
# Zone and route models
# ------------------------------------------------------------------


class TestRouteModels:
    def test_zone_center(self) -> None:
        zone = Zone.model_validate(
            {"id": "z", "name": "Z", "polygon": [{"lat": 0, "lng": 0}, {"lat": 4, "lng": 0}, {"lat": 4, "lng": 2}]}
        )
        assert zone.center == Coordinate(lat=2, lng=1)

    def test_zone_empty_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Zone(id="", name="Nameless", polygon=(Coordinate(lat=0, lng=0),) * 3)

    def test_route_result_wire_format(self) -> None:
        result = RouteResult(route=[Coordinate(lat=1, lng=2)], source=RouteSource.STRAIGHT_LINE, distance=10.0)
        assert result.to_wire() == {
            "route": [{"lat": 1.0, "lng": 2.0}],
            "source": "straight_line",
            "distance": 10.0,
            "duration": None,
        }

    def test_progress_current_step(self) -> None:
        zone = Zone(id="z", name="Z", polygon=(Coordinate(lat=0, lng=0),) * 3)
        snapshot = ProgressSnapshot(current_index=0, steps=[RouteStep(zone=zone, index=0, state=StepState.ACTIVE)])
        assert snapshot.current_step is not None
        assert snapshot.current_step.state is StepState.ACTIVE
        assert ProgressSnapshot(current_index=1, steps=snapshot.steps, finished=True).current_step is None
        assert snapshot.to_wire()["currentIndex"] == 0
