"""pygeofence - Async vehicle geofencing and route-progress tracking."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pygeofence")
except PackageNotFoundError:
    __version__ = "0+local"
from pygeofence.config import GeofenceConfig
from pygeofence.exceptions import (
    GeofenceConfigError,
    GeofenceError,
    InvalidInputError,
    RoutingUnavailableError,
    UnknownJourneyError,
    ZoneCatalogError,
)
from pygeofence.geometry import contains
from pygeofence.models import (
    Coordinate,
    EventResult,
    ProgressSnapshot,
    RouteResult,
    RouteSource,
    RouteStep,
    StepState,
    Transition,
    TransitionKind,
    VehicleEvent,
    VehicleState,
    VehicleStatus,
    Zone,
)
from pygeofence.monitor import GeofenceMonitor
from pygeofence.routing import OsrmRouter, RouteGraph, RouteService
from pygeofence.state import EventProcessor, InMemoryStateStore, VehicleStateStore
from pygeofence.tracking import (
    DebounceFilter,
    DebounceSession,
    Journey,
    JourneyRegistry,
    RouteProgress,
    RouteProgressTracker,
)
from pygeofence.zones import DEFAULT_ZONES, ZoneIndex

__all__ = [
    "__version__",
    "Coordinate",
    "DEFAULT_ZONES",
    "DebounceFilter",
    "DebounceSession",
    "EventProcessor",
    "EventResult",
    "GeofenceConfig",
    "GeofenceConfigError",
    "GeofenceError",
    "GeofenceMonitor",
    "InMemoryStateStore",
    "InvalidInputError",
    "Journey",
    "JourneyRegistry",
    "OsrmRouter",
    "ProgressSnapshot",
    "RouteGraph",
    "RouteProgress",
    "RouteProgressTracker",
    "RouteResult",
    "RouteService",
    "RouteSource",
    "RouteStep",
    "RoutingUnavailableError",
    "StepState",
    "Transition",
    "TransitionKind",
    "UnknownJourneyError",
    "VehicleEvent",
    "VehicleState",
    "VehicleStateStore",
    "VehicleStatus",
    "Zone",
    "ZoneCatalogError",
    "ZoneIndex",
    "contains",
]
