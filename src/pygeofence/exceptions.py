"""Custom exception hierarchy for pygeofence."""

from __future__ import annotations


class GeofenceError(Exception):
    """Base exception for all pygeofence errors."""


class GeofenceConfigError(GeofenceError):
    """Invalid or missing configuration."""


class ZoneCatalogError(GeofenceConfigError):
    """Zone catalog could not be loaded or failed validation.

    Raised for duplicate zone ids, polygons with fewer than three
    vertices, or an unreadable/malformed catalog file.
    """


class InvalidInputError(GeofenceError):
    """Malformed telemetry event or route request.

    The offending input is discarded and no state is mutated.
    """

    def __init__(self, message: str, *, field: str = "") -> None:
        self.field = field
        super().__init__(message)


class RoutingUnavailableError(GeofenceError):
    """External routing lookup failed (network, non-200, timeout, no route)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class UnknownJourneyError(GeofenceError):
    """Journey id is not registered (never started or already ended)."""

    def __init__(self, journey_id: str) -> None:
        self.journey_id = journey_id
        super().__init__(f"Unknown journey: {journey_id}")
