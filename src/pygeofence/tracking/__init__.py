"""Journey tracking: debounced zone confirmation and route progress."""

from pygeofence.tracking.debounce import DebounceFilter, DebounceResult, DebounceSession
from pygeofence.tracking.journey import Journey, JourneyRegistry, JourneyUpdate
from pygeofence.tracking.progress import RouteProgress, RouteProgressTracker

__all__ = [
    "DebounceFilter",
    "DebounceResult",
    "DebounceSession",
    "Journey",
    "JourneyRegistry",
    "JourneyUpdate",
    "RouteProgress",
    "RouteProgressTracker",
]
