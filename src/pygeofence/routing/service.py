"""Route computation with a graph -> external -> straight-line fallback chain."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from pygeofence.config import GeofenceConfig
from pygeofence.exceptions import InvalidInputError, RoutingUnavailableError
from pygeofence.geometry import interpolate_straight_line, polyline_length
from pygeofence.models.geo import Coordinate
from pygeofence.models.route import RouteResult, RouteSource
from pygeofence.routing.graph import RouteGraph
from pygeofence.routing.osrm import Router
from pygeofence.zones.index import ZoneIndex

_logger = logging.getLogger(__name__)


class RouteService:
    """Turns a waypoint list into a drivable polyline.

    1. Graph: each consecutive waypoint pair is snapped to zones by
       proximity and joined via the route graph; pairs that don't snap
       (or aren't connected) contribute a bare two-point segment.
    2. External router, when the graph result isn't materially richer
       than the waypoints themselves.
    3. Straight-line interpolation when the router fails or times out.
    """

    def __init__(
        self,
        zones: ZoneIndex,
        graph: RouteGraph,
        config: GeofenceConfig,
        router: Router | None = None,
    ) -> None:
        self._zones = zones
        self._graph = graph
        self._config = config
        self._router = router

    def graph_route(self, waypoints: Sequence[Coordinate]) -> list[Coordinate]:
        route: list[Coordinate] = []
        radius = self._config.zone_proximity_degrees
        for start, end in zip(waypoints, waypoints[1:]):
            start_id = self._zones.nearest_within(start, radius)
            end_id = self._zones.nearest_within(end, radius)
            if start_id is not None and end_id is not None:
                segment = self._graph.shortest_path(start_id, end_id)
                if segment is not None:
                    route.extend(segment)
                    continue
            route.append(start)
            route.append(end)
        return route

    def straight_line_route(self, waypoints: Sequence[Coordinate]) -> RouteResult:
        points = interpolate_straight_line(waypoints, self._config.straight_line_points_per_segment)
        return RouteResult(route=points, source=RouteSource.STRAIGHT_LINE, distance=polyline_length(points))

    async def _external_route(self, waypoints: Sequence[Coordinate]) -> RouteResult | None:
        if self._router is None or not self._config.routing_enabled:
            return None
        try:
            return await asyncio.wait_for(self._router.route(waypoints), self._config.routing_timeout)
        except RoutingUnavailableError:
            _logger.debug("External routing unavailable; using straight line", exc_info=True)
        except TimeoutError:
            _logger.debug("External routing timed out after %.1fs; using straight line", self._config.routing_timeout)
        except Exception:
            _logger.debug("External routing failed; using straight line", exc_info=True)
        return None

    async def compute_route(self, waypoints: Sequence[Coordinate]) -> RouteResult:
        """Best available polyline through *waypoints* (at least two)."""
        if len(waypoints) < 2:
            raise InvalidInputError("At least 2 waypoints required", field="waypoints")

        graph_points = self.graph_route(waypoints)
        if len(graph_points) >= self._config.graph_richness_factor * len(waypoints):
            _logger.debug("Graph route accepted points=%d waypoints=%d", len(graph_points), len(waypoints))
            return RouteResult(
                route=graph_points,
                source=RouteSource.GRAPH,
                distance=polyline_length(graph_points),
            )

        external = await self._external_route(waypoints)
        if external is not None and external.route:
            return external

        return self.straight_line_route(waypoints)
