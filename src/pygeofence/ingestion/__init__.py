"""Ingestion layer.

This package contains adapters that receive raw telemetry (direct
payloads, MQTT) and emit validated :class:`VehicleEvent` objects.
"""

from pygeofence.ingestion.events import parse_vehicle_event

__all__ = ["parse_vehicle_event"]
