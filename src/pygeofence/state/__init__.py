"""State/store layer.

This package is the single source of truth for per-vehicle zone
status: events are resolved against the zone index, classified into
transitions, and written to the store.
"""

from pygeofence.state.processor import EventProcessor
from pygeofence.state.store import InMemoryStateStore, VehicleStateStore
from pygeofence.state.transitions import detect_transition

__all__ = [
    "EventProcessor",
    "InMemoryStateStore",
    "VehicleStateStore",
    "detect_transition",
]
