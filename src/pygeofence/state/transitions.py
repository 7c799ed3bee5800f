"""Zone transition classification.

A direct move from zone A into zone B within one event is reported only
as an entry into B. No synthetic "exited A" is emitted for that case;
consumers that need it must derive it from the previous status.
"""

from __future__ import annotations

from pygeofence.models.vehicle import Transition, TransitionKind, VehicleStatus


def detect_transition(
    vehicle_id: str,
    previous: VehicleStatus | None,
    zone_id: str | None,
) -> Transition | None:
    """Compare a fresh zone resolution against the previous status.

    - first sighting inside a zone: entered
    - first sighting outside: nothing
    - zone changed to a zone: entered (new zone)
    - zone changed to none: exited (previous zone)
    - zone unchanged: nothing
    """
    previous_zone_id = previous.current_zone_id if previous is not None else None
    if previous_zone_id == zone_id:
        return None
    if zone_id is not None:
        return Transition(vehicle_id=vehicle_id, kind=TransitionKind.ENTERED, zone_id=zone_id)
    if previous_zone_id is not None:
        return Transition(vehicle_id=vehicle_id, kind=TransitionKind.EXITED, zone_id=previous_zone_id)
    return None
