"""Event processing: resolve, classify, store.

This is the only component allowed to write vehicle statuses.
"""

from __future__ import annotations

import logging

from pygeofence.models.vehicle import EventResult, Transition, VehicleEvent, VehicleState, VehicleStatus
from pygeofence.state.store import InMemoryStateStore, VehicleStateStore
from pygeofence.state.transitions import detect_transition
from pygeofence.zones.index import ZoneIndex

_logger = logging.getLogger(__name__)


class EventProcessor:
    """Turns raw location events into statuses and transitions.

    The store is injected so the detection logic is independent of the
    storage backend. The store always reflects the raw, undebounced zone.
    """

    def __init__(self, zones: ZoneIndex, store: VehicleStateStore | None = None) -> None:
        self._zones = zones
        self._store: VehicleStateStore = store if store is not None else InMemoryStateStore()

    @property
    def zones(self) -> ZoneIndex:
        return self._zones

    @property
    def store(self) -> VehicleStateStore:
        return self._store

    def process_event(self, event: VehicleEvent) -> EventResult:
        """Apply one event and return the new status plus any transition."""
        zone_id = self._zones.resolve(event.location)
        state = VehicleState.INSIDE if zone_id is not None else VehicleState.OUTSIDE
        transition: Transition | None = None

        def _apply(previous: VehicleStatus | None) -> VehicleStatus:
            nonlocal transition
            transition = detect_transition(event.vehicle_id, previous, zone_id)
            # Overwritten unconditionally so lastSeen/location always advance.
            return VehicleStatus(
                vehicle_id=event.vehicle_id,
                current_zone_id=zone_id,
                state=state,
                last_seen=event.timestamp,
                location=event.location,
            )

        status = self._store.update(event.vehicle_id, _apply)

        if transition is not None:
            _logger.info("Vehicle %s %s", event.vehicle_id, transition.description)
            return EventResult(status=status, transition=transition.description)
        _logger.debug("Vehicle %s at %s state=%s", event.vehicle_id, event.location.as_tuple(), state.value)
        return EventResult(status=status)

    def get_status(self, vehicle_id: str) -> VehicleStatus | None:
        """Last-known status, or ``None`` for an unknown vehicle."""
        return self._store.get(vehicle_id)

    def list_statuses(self) -> list[VehicleStatus]:
        return list(self._store.scan())
