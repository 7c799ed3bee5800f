"""High-level async facade over the geofence engine."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import aiohttp
from pydantic import ValidationError

from pygeofence.config import GeofenceConfig
from pygeofence.exceptions import GeofenceError, InvalidInputError
from pygeofence.ingestion.events import parse_vehicle_event
from pygeofence.ingestion.mqtt import MqttSettings, TelemetryMqttRuntime
from pygeofence.models.geo import Coordinate, Zone
from pygeofence.models.route import RouteResult
from pygeofence.models.vehicle import EventResult, VehicleEvent, VehicleStatus
from pygeofence.routing.graph import RouteGraph
from pygeofence.routing.osrm import OsrmRouter, Router
from pygeofence.routing.planner import grand_tour, plan_journey, targets_from_ids, waypoints_for
from pygeofence.routing.service import RouteService
from pygeofence.state.processor import EventProcessor
from pygeofence.state.store import VehicleStateStore
from pygeofence.tracking.debounce import DebounceFilter
from pygeofence.tracking.journey import Journey, JourneyRegistry, JourneyUpdate
from pygeofence.zones.catalog import DEFAULT_ZONES, load_zone_catalog
from pygeofence.zones.index import ZoneIndex

_logger = logging.getLogger(__name__)


class GeofenceMonitor:
    """Async facade for vehicle geofencing.

    Usage::

        async with GeofenceMonitor(config) as monitor:
            result = monitor.process_event(payload)
            route = await monitor.compute_route(waypoints)

    Event processing is synchronous and never blocks on I/O; only
    :meth:`compute_route` awaits (the external router).
    """

    def __init__(
        self,
        config: GeofenceConfig | None = None,
        *,
        zones: Sequence[Zone] | None = None,
        store: VehicleStateStore | None = None,
        graph: RouteGraph | None = None,
        router: Router | None = None,
        session: aiohttp.ClientSession | None = None,
        on_transition: Callable[[EventResult], None] | None = None,
    ) -> None:
        self._config = config if config is not None else GeofenceConfig()
        if zones is None:
            zones = load_zone_catalog(self._config.zones_file) if self._config.zones_file else DEFAULT_ZONES
        self._zones = ZoneIndex(zones)
        self._processor = EventProcessor(self._zones, store)
        self._graph = graph if graph is not None else RouteGraph.default(nodes=[z.id for z in self._zones])
        self._journeys = JourneyRegistry(DebounceFilter(self._config.exit_threshold))
        self._router = router
        self._owns_router = False
        self._external_session = session is not None
        self._http_session = session
        self._on_transition = on_transition
        self._loop: asyncio.AbstractEventLoop | None = None
        self._mqtt_runtime: TelemetryMqttRuntime | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> GeofenceMonitor:
        self._loop = asyncio.get_running_loop()
        if self._router is None and self._config.routing_enabled:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._router = OsrmRouter(self._config, self._http_session)
            self._owns_router = True
        if self._config.mqtt_enabled:
            self._start_mqtt()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        self._stop_mqtt()
        if self._owns_router:
            self._router = None
            self._owns_router = False
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._loop = None

    # ------------------------------------------------------------------
    # MQTT
    # ------------------------------------------------------------------

    def _start_mqtt(self) -> None:
        """Best-effort MQTT startup (failures must not break direct ingestion)."""
        if self._mqtt_runtime is not None and self._mqtt_runtime.is_running:
            return
        loop = self._loop or asyncio.get_running_loop()
        try:
            runtime = TelemetryMqttRuntime(loop=loop, on_event=self._on_mqtt_event, logger=_logger)
            runtime.start(MqttSettings.from_config(self._config))
            self._mqtt_runtime = runtime
        except Exception:
            _logger.debug("MQTT startup failed", exc_info=True)

    def _stop_mqtt(self) -> None:
        runtime = self._mqtt_runtime
        self._mqtt_runtime = None
        if runtime is not None:
            runtime.stop()

    def _on_mqtt_event(self, event: VehicleEvent) -> None:
        """Handle a parsed MQTT event (runs on the loop via call_soon_threadsafe)."""
        try:
            self.process_event(event)
        except GeofenceError:
            _logger.debug("MQTT event processing failed vehicle=%s", event.vehicle_id, exc_info=True)

    # ------------------------------------------------------------------
    # Events and status
    # ------------------------------------------------------------------

    @property
    def config(self) -> GeofenceConfig:
        return self._config

    @property
    def zones(self) -> ZoneIndex:
        return self._zones

    def process_event(self, event: VehicleEvent | Mapping[str, Any]) -> EventResult:
        """Resolve one location report and update the vehicle's status.

        Raw mappings are validated first; a malformed payload raises
        :class:`~pygeofence.exceptions.InvalidInputError` and leaves all
        state untouched.
        """
        parsed = event if isinstance(event, VehicleEvent) else parse_vehicle_event(event)
        result = self._processor.process_event(parsed)
        if result.transition is not None and self._on_transition is not None:
            try:
                self._on_transition(result)
            except Exception:
                _logger.debug("on_transition callback failed", exc_info=True)
        return result

    def get_status(self, vehicle_id: str) -> VehicleStatus | None:
        """Last-known status, or ``None`` if the vehicle was never seen."""
        return self._processor.get_status(vehicle_id)

    def list_statuses(self) -> list[VehicleStatus]:
        return self._processor.list_statuses()

    def list_zones(self) -> list[Zone]:
        """Zones in resolution priority order."""
        return list(self._zones.zones)

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def _route_service(self) -> RouteService:
        return RouteService(self._zones, self._graph, self._config, self._router)

    async def compute_route(self, waypoints: Sequence[Coordinate | Mapping[str, Any]]) -> RouteResult:
        """Polyline through *waypoints* via graph, external router or straight line."""
        try:
            points = [p if isinstance(p, Coordinate) else Coordinate.model_validate(p) for p in waypoints]
        except ValidationError as exc:
            raise InvalidInputError(f"Invalid waypoint: {exc.errors()[0].get('msg')}", field="waypoints") from exc
        return await self._route_service().compute_route(points)

    # ------------------------------------------------------------------
    # Journeys
    # ------------------------------------------------------------------

    def start_journey(self, zone_ids: Sequence[str]) -> Journey:
        """Track progress through an explicit, ordered list of zones."""
        return self._journeys.start(targets_from_ids(self._zones, zone_ids))

    def start_custom_journey(self, start_id: str, dest_id: str) -> Journey:
        """Track a drive from *start_id* to *dest_id* via zones on the way."""
        targets = plan_journey(
            self._zones,
            start_id,
            dest_id,
            max_detour_factor=self._config.max_detour_factor,
        )
        return self._journeys.start(targets)

    def start_grand_tour(self) -> Journey:
        return self._journeys.start(grand_tour(self._zones))

    def get_journey(self, journey_id: str) -> Journey:
        return self._journeys.get(journey_id)

    def observe_journey(self, journey_id: str, status: VehicleStatus) -> JourneyUpdate:
        """Feed a (raw) vehicle status into a journey's debounce/progress."""
        return self._journeys.get(journey_id).observe(status)

    def end_journey(self, journey_id: str) -> Journey:
        return self._journeys.end(journey_id)

    async def journey_route(self, journey_id: str) -> RouteResult:
        """Route through the centres of a journey's target zones."""
        journey = self._journeys.get(journey_id)
        return await self.compute_route(waypoints_for(journey.targets))
