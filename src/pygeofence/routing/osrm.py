"""External road routing via an OSRM-compatible HTTP API."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, Protocol

import aiohttp
from pydantic import ValidationError

from pygeofence._constants import USER_AGENT
from pygeofence.config import GeofenceConfig
from pygeofence.exceptions import RoutingUnavailableError
from pygeofence.models.geo import Coordinate
from pygeofence.models.route import RouteResult, RouteSource

_logger = logging.getLogger(__name__)


class Router(Protocol):
    """Structural router interface used by the route service.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`OsrmRouter`) concrete.
    """

    async def route(self, waypoints: Sequence[Coordinate]) -> RouteResult: ...


def _format_coordinates(waypoints: Sequence[Coordinate]) -> str:
    # OSRM expects lng,lat pairs.
    return ";".join(f"{p.lng},{p.lat}" for p in waypoints)


def parse_osrm_response(body: Any, *, endpoint: str = "") -> RouteResult:
    """Convert an OSRM ``/route`` JSON body into a :class:`RouteResult`."""
    if not isinstance(body, dict):
        raise RoutingUnavailableError("OSRM response is not an object", endpoint=endpoint)
    code = body.get("code")
    routes = body.get("routes")
    if code != "Ok" or not isinstance(routes, list) or not routes:
        raise RoutingUnavailableError(
            f"No route found (code={code} message={body.get('message', '')})",
            endpoint=endpoint,
        )
    best = routes[0]
    try:
        raw_points = best["geometry"]["coordinates"]
        route = [Coordinate(lat=float(lat), lng=float(lng)) for lng, lat, *_ in raw_points]
    except (KeyError, TypeError, ValueError) as exc:
        raise RoutingUnavailableError("OSRM route geometry is malformed", endpoint=endpoint) from exc
    try:
        return RouteResult(
            route=route,
            source=RouteSource.EXTERNAL,
            distance=best.get("distance"),
            duration=best.get("duration"),
        )
    except ValidationError as exc:
        raise RoutingUnavailableError("OSRM route summary is malformed", endpoint=endpoint) from exc


class OsrmRouter:
    """Async OSRM client with a bounded per-request timeout."""

    def __init__(self, config: GeofenceConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    def _endpoint(self, waypoints: Sequence[Coordinate]) -> str:
        base = self._config.routing_base_url.rstrip("/")
        return f"{base}/route/v1/{self._config.routing_profile}/{_format_coordinates(waypoints)}"

    async def route(self, waypoints: Sequence[Coordinate]) -> RouteResult:
        """Fetch a road-following polyline through *waypoints*."""
        endpoint = self._endpoint(waypoints)
        params = {"overview": "full", "geometries": "geojson"}
        headers = {"user-agent": USER_AGENT}
        timeout = aiohttp.ClientTimeout(total=self._config.routing_timeout)

        _logger.debug("GET %s", endpoint)

        try:
            async with self._http.get(endpoint, params=params, headers=headers, timeout=timeout) as resp:
                text = await resp.text()
                if resp.status != 200:
                    raise RoutingUnavailableError(
                        f"HTTP {resp.status} from router: {text[:200]}",
                        status_code=resp.status,
                        endpoint=endpoint,
                    )
        except RoutingUnavailableError:
            raise
        except TimeoutError as exc:
            raise RoutingUnavailableError(
                f"Router timed out after {self._config.routing_timeout}s",
                endpoint=endpoint,
            ) from exc
        except aiohttp.ClientError as exc:
            raise RoutingUnavailableError(f"Request to router failed: {exc}", endpoint=endpoint) from exc
        except UnicodeDecodeError as exc:
            raise RoutingUnavailableError("Router response is not valid text", endpoint=endpoint) from exc

        try:
            body = json.loads(text)
        except json.JSONDecodeError as exc:
            raise RoutingUnavailableError(f"Invalid JSON from router: {text[:200]}", endpoint=endpoint) from exc

        return parse_osrm_response(body, endpoint=endpoint)
