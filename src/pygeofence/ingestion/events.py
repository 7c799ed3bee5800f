"""Telemetry event parsing.

Every ingestion path (direct calls, MQTT, an HTTP boundary) funnels raw
payloads through :func:`parse_vehicle_event`, so aliasing and coercion
rules live in one place. Only the event processor mutates state.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from pydantic import ValidationError

from pygeofence.exceptions import InvalidInputError
from pygeofence.ingestion.normalize import first_present, normalize_timestamp_seconds, safe_float, safe_str
from pygeofence.models.vehicle import VehicleEvent

VEHICLE_ID_KEYS = ("vehicleId", "vehicle_id")
_LAT_KEYS = ("lat", "latitude")
_LNG_KEYS = ("lng", "lon", "longitude")


def _coerce_timestamp(value: Any) -> Any:
    # Epoch numbers (seconds or ms) become datetimes; strings go to pydantic.
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = normalize_timestamp_seconds(value)
        if seconds is None:
            raise InvalidInputError(f"Invalid timestamp: {value!r}", field="timestamp")
        return datetime.fromtimestamp(seconds, tz=UTC)
    return value


def parse_vehicle_event(raw: Mapping[str, Any]) -> VehicleEvent:
    """Validate a raw telemetry payload into a :class:`VehicleEvent`.

    Accepts ``vehicleId``/``vehicle_id``, a nested ``location`` object or
    flat coordinates, and the common lat/lng spellings. Numeric strings
    are coerced. Raises :class:`InvalidInputError` when a required field
    is missing or unusable.
    """
    if not isinstance(raw, Mapping):
        raise InvalidInputError("Event payload must be an object")

    vehicle_id = safe_str(first_present(raw, *VEHICLE_ID_KEYS))
    if vehicle_id is None:
        raise InvalidInputError("Missing vehicleId", field="vehicleId")

    location = raw.get("location")
    source: Mapping[str, Any] = location if isinstance(location, Mapping) else raw
    lat = safe_float(first_present(source, *_LAT_KEYS))
    lng = safe_float(first_present(source, *_LNG_KEYS))
    if lat is None:
        raise InvalidInputError("Missing or non-numeric latitude", field="location.lat")
    if lng is None:
        raise InvalidInputError("Missing or non-numeric longitude", field="location.lng")

    timestamp = raw.get("timestamp")
    if timestamp is None:
        raise InvalidInputError("Missing timestamp", field="timestamp")

    try:
        return VehicleEvent.model_validate(
            {
                "vehicleId": vehicle_id,
                "timestamp": _coerce_timestamp(timestamp),
                "location": {"lat": lat, "lng": lng},
            }
        )
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ()))
        raise InvalidInputError(f"Invalid event: {first.get('msg', exc)}", field=field) from exc
