"""Vehicle state store.

The store is the single source of truth for "where is this vehicle
now". It holds exactly one :class:`VehicleStatus` per vehicle id, which
is replaced (never appended to) on every event.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterator
from typing import Protocol

from pygeofence.models.vehicle import VehicleStatus


class VehicleStateStore(Protocol):
    """Structural store interface used by the event processor.

    Having a protocol here makes it easy to swap in a persistent or
    sharded backend without touching the detection logic.
    """

    def get(self, vehicle_id: str) -> VehicleStatus | None: ...

    def put(self, status: VehicleStatus) -> None: ...

    def scan(self) -> Iterator[VehicleStatus]: ...

    def update(
        self,
        vehicle_id: str,
        fn: Callable[[VehicleStatus | None], VehicleStatus],
    ) -> VehicleStatus:
        """Atomically read, transform and write one vehicle's status."""
        ...


class InMemoryStateStore:
    """Process-local store with per-vehicle atomic updates.

    ``update`` serialises read-modify-write cycles for the same vehicle
    id behind a per-key lock; different vehicles never contend.
    """

    def __init__(self) -> None:
        self._statuses: dict[str, VehicleStatus] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._guard = threading.Lock()

    def _lock_for(self, vehicle_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(vehicle_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[vehicle_id] = lock
            return lock

    def get(self, vehicle_id: str) -> VehicleStatus | None:
        return self._statuses.get(vehicle_id)

    def put(self, status: VehicleStatus) -> None:
        with self._lock_for(status.vehicle_id):
            self._statuses[status.vehicle_id] = status

    def scan(self) -> Iterator[VehicleStatus]:
        # Snapshot so concurrent writers can't break iteration.
        return iter(list(self._statuses.values()))

    def update(
        self,
        vehicle_id: str,
        fn: Callable[[VehicleStatus | None], VehicleStatus],
    ) -> VehicleStatus:
        with self._lock_for(vehicle_id):
            status = fn(self._statuses.get(vehicle_id))
            if status.vehicle_id != vehicle_id:
                raise ValueError(f"update for {vehicle_id!r} produced status for {status.vehicle_id!r}")
            self._statuses[vehicle_id] = status
            return status

    def __len__(self) -> int:
        return len(self._statuses)
