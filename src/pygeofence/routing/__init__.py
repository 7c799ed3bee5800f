"""Route graph, journey planning and route computation."""

from pygeofence.routing.graph import DEFAULT_ROUTE_GRAPH_PATHS, RouteGraph
from pygeofence.routing.osrm import OsrmRouter, Router, parse_osrm_response
from pygeofence.routing.planner import (
    grand_tour,
    plan_intermediate_zones,
    plan_journey,
    targets_from_ids,
    waypoints_for,
)
from pygeofence.routing.service import RouteService

__all__ = [
    "DEFAULT_ROUTE_GRAPH_PATHS",
    "OsrmRouter",
    "RouteGraph",
    "RouteService",
    "Router",
    "grand_tour",
    "parse_osrm_response",
    "plan_intermediate_zones",
    "plan_journey",
    "targets_from_ids",
    "waypoints_for",
]
