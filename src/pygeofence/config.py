"""Monitor configuration for pygeofence."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pygeofence._constants import (
    DEFAULT_EXIT_THRESHOLD,
    DEFAULT_GRAPH_RICHNESS_FACTOR,
    DEFAULT_MAX_DETOUR_FACTOR,
    DEFAULT_ROUTING_TIMEOUT_S,
    DEFAULT_STRAIGHT_LINE_POINTS_PER_SEGMENT,
    DEFAULT_ZONE_PROXIMITY_DEGREES,
    OSRM_BASE_URL,
)
from pygeofence.exceptions import GeofenceConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class GeofenceConfig:
    """Monitor configuration.

    Parameters
    ----------
    exit_threshold : int
        Consecutive raw "outside" observations required before a
        journey confirms a zone exit. Entries are never debounced.
    zone_proximity_degrees : float
        Radius (in degrees) used to snap a route waypoint to a known
        zone centre before consulting the route graph.
    graph_richness_factor : int
        A graph route is accepted when it has at least
        ``graph_richness_factor * len(waypoints)`` points; otherwise the
        external router is tried.
    routing_enabled : bool
        Enable the external road-routing lookup.
    routing_base_url : str
        OSRM-compatible base URL.
    routing_profile : str
        OSRM routing profile (e.g. ``"driving"``).
    routing_timeout : float
        Seconds before the external lookup is cancelled.
    straight_line_points_per_segment : int
        Interpolation density of the last-resort straight-line route.
    max_detour_factor : float
        Intermediate zones are kept when the detour through them is at
        most this factor of the direct start/destination distance.
    zones_file : str or None
        Path to a JSON zone catalog. ``None`` uses the built-in catalog.
    mqtt_enabled : bool
        Start the MQTT telemetry listener with the monitor.
    mqtt_host : str
        MQTT broker host.
    mqtt_port : int
        MQTT broker port.
    mqtt_topic : str
        Topic filter carrying JSON location events.
    mqtt_keepalive : int
        MQTT keepalive in seconds.
    mqtt_client_id : str
        MQTT client id. Empty lets the broker assign one.
    mqtt_username : str or None
        MQTT username, when the broker requires authentication.
    mqtt_password : str or None
        MQTT password, sent only with a username.
    """

    exit_threshold: int = DEFAULT_EXIT_THRESHOLD
    zone_proximity_degrees: float = DEFAULT_ZONE_PROXIMITY_DEGREES
    graph_richness_factor: int = DEFAULT_GRAPH_RICHNESS_FACTOR
    routing_enabled: bool = True
    routing_base_url: str = OSRM_BASE_URL
    routing_profile: str = "driving"
    routing_timeout: float = DEFAULT_ROUTING_TIMEOUT_S
    straight_line_points_per_segment: int = DEFAULT_STRAIGHT_LINE_POINTS_PER_SEGMENT
    max_detour_factor: float = DEFAULT_MAX_DETOUR_FACTOR
    zones_file: str | None = None
    mqtt_enabled: bool = False
    mqtt_host: str = "localhost"
    mqtt_port: int = 1883
    mqtt_topic: str = "vehicles/+/location"
    mqtt_keepalive: int = 120
    mqtt_client_id: str = ""
    mqtt_username: str | None = None
    mqtt_password: str | None = None

    def __post_init__(self) -> None:
        if self.exit_threshold < 1:
            raise GeofenceConfigError(f"exit_threshold must be >= 1, got {self.exit_threshold}")
        if self.routing_timeout <= 0:
            raise GeofenceConfigError(f"routing_timeout must be positive, got {self.routing_timeout}")
        if self.straight_line_points_per_segment < 1:
            raise GeofenceConfigError(
                f"straight_line_points_per_segment must be >= 1, got {self.straight_line_points_per_segment}"
            )

    @classmethod
    def from_env(cls, **overrides: Any) -> GeofenceConfig:
        """Create configuration from environment variables.

        Reads optional ``GEOFENCE_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        GeofenceConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONVERTERS: dict[str, tuple[str, Any]] = {
            "GEOFENCE_EXIT_THRESHOLD": ("exit_threshold", int),
            "GEOFENCE_ZONE_PROXIMITY_DEGREES": ("zone_proximity_degrees", float),
            "GEOFENCE_GRAPH_RICHNESS_FACTOR": ("graph_richness_factor", int),
            "GEOFENCE_ROUTING_BASE_URL": ("routing_base_url", str),
            "GEOFENCE_ROUTING_PROFILE": ("routing_profile", str),
            "GEOFENCE_ROUTING_TIMEOUT": ("routing_timeout", float),
            "GEOFENCE_STRAIGHT_LINE_POINTS": ("straight_line_points_per_segment", int),
            "GEOFENCE_MAX_DETOUR_FACTOR": ("max_detour_factor", float),
            "GEOFENCE_ZONES_FILE": ("zones_file", str),
            "GEOFENCE_MQTT_HOST": ("mqtt_host", str),
            "GEOFENCE_MQTT_PORT": ("mqtt_port", int),
            "GEOFENCE_MQTT_TOPIC": ("mqtt_topic", str),
            "GEOFENCE_MQTT_KEEPALIVE": ("mqtt_keepalive", int),
            "GEOFENCE_MQTT_CLIENT_ID": ("mqtt_client_id", str),
            "GEOFENCE_MQTT_USERNAME": ("mqtt_username", str),
            "GEOFENCE_MQTT_PASSWORD": ("mqtt_password", str),
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, (field_name, convert) in _ENV_CONVERTERS.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = convert(val)
            except ValueError as exc:
                raise GeofenceConfigError(f"Invalid value for {env_key}: {val!r}") from exc

        if "routing_enabled" not in overrides:
            config_kwargs["routing_enabled"] = _env_bool(env.get("GEOFENCE_ROUTING_ENABLED"), True)

        if "mqtt_enabled" not in overrides:
            config_kwargs["mqtt_enabled"] = _env_bool(env.get("GEOFENCE_MQTT_ENABLED"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
