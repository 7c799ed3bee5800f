"""Tests for telemetry parsing and MQTT ingestion."""

from __future__ import annotations

import asyncio
import json
from datetime import UTC, datetime

import pytest

from pygeofence.config import GeofenceConfig
from pygeofence.exceptions import InvalidInputError
from pygeofence.ingestion import parse_vehicle_event
from pygeofence.ingestion.mqtt import (
    MqttSettings,
    TelemetryMqttRuntime,
    decode_telemetry_payload,
    vehicle_id_from_topic,
)
from pygeofence.ingestion.normalize import first_present, normalize_timestamp_seconds, safe_float, safe_str
from pygeofence.models.vehicle import VehicleEvent

# ------------------------------------------------------------------
# Normalization helpers
# ------------------------------------------------------------------


def test_safe_float() -> None:
    assert safe_float("51.5") == 51.5
    assert safe_float(3) == 3.0
    assert safe_float(None) is None
    assert safe_float("") is None
    assert safe_float("north") is None
    assert safe_float(True) is None
    assert safe_float(float("nan")) is None


def test_safe_str_and_first_present() -> None:
    assert safe_str("  car-1 ") == "car-1"
    assert safe_str("   ") is None
    assert safe_str(42) == "42"
    assert first_present({"a": None, "b": 0, "c": 1}, "a", "b", "c") == 0
    assert first_present({}, "a") is None


def test_normalize_timestamp_seconds() -> None:
    assert normalize_timestamp_seconds(1_772_366_400) == 1_772_366_400
    assert normalize_timestamp_seconds(1_772_366_400_000) == 1_772_366_400
    assert normalize_timestamp_seconds(0) is None
    assert normalize_timestamp_seconds(-5) is None
    assert normalize_timestamp_seconds("") is None


# ------------------------------------------------------------------
# Event parsing
# ------------------------------------------------------------------


def test_parse_nested_camel_case_event() -> None:
    event = parse_vehicle_event(
        {
            "vehicleId": "car-1",
            "timestamp": "2026-03-01T12:00:00Z",
            "location": {"lat": 51.5014, "lng": -0.1419},
        }
    )

    assert event.vehicle_id == "car-1"
    assert event.location.lat == 51.5014
    assert event.location.lng == -0.1419
    assert event.timestamp == datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def test_parse_flat_event_with_aliases_and_strings() -> None:
    event = parse_vehicle_event(
        {
            "vehicle_id": " car-2 ",
            "latitude": "51.5",
            "longitude": "-0.12",
            "timestamp": 1_772_366_400_000,
        }
    )

    assert event.vehicle_id == "car-2"
    assert event.location.lat == 51.5
    assert event.location.lng == -0.12
    assert event.timestamp == datetime.fromtimestamp(1_772_366_400, tz=UTC)


def test_parse_naive_timestamp_assumes_utc() -> None:
    event = parse_vehicle_event(
        {"vehicleId": "car-1", "timestamp": "2026-03-01T12:00:00", "location": {"lat": 1, "lon": 2}}
    )
    assert event.timestamp.tzinfo is not None
    assert event.location.lng == 2


@pytest.mark.parametrize(
    ("payload", "field"),
    [
        ({"timestamp": "2026-03-01T12:00:00Z", "location": {"lat": 1, "lng": 2}}, "vehicleId"),
        ({"vehicleId": "  ", "timestamp": "2026-03-01T12:00:00Z", "location": {"lat": 1, "lng": 2}}, "vehicleId"),
        ({"vehicleId": "car-1", "timestamp": "2026-03-01T12:00:00Z", "location": {"lng": 2}}, "location.lat"),
        ({"vehicleId": "car-1", "timestamp": "2026-03-01T12:00:00Z", "location": {"lat": 1}}, "location.lng"),
        ({"vehicleId": "car-1", "timestamp": "2026-03-01T12:00:00Z", "lat": "x", "lng": 2}, "location.lat"),
        ({"vehicleId": "car-1", "location": {"lat": 1, "lng": 2}}, "timestamp"),
        ({"vehicleId": "car-1", "timestamp": -1, "location": {"lat": 1, "lng": 2}}, "timestamp"),
        ({"vehicleId": "car-1", "timestamp": "yesterday", "location": {"lat": 1, "lng": 2}}, "timestamp"),
    ],
)
def test_parse_rejects_malformed_events(payload: dict, field: str) -> None:
    with pytest.raises(InvalidInputError) as excinfo:
        parse_vehicle_event(payload)
    assert excinfo.value.field == field


def test_parse_ignores_unlisted_key_spellings() -> None:
    with pytest.raises(InvalidInputError) as excinfo:
        parse_vehicle_event({"vin": "car-1", "time": "2026-03-01T12:00:00Z", "lat": 1, "lng": 2})
    assert excinfo.value.field == "vehicleId"

    with pytest.raises(InvalidInputError) as excinfo:
        parse_vehicle_event({"vehicleId": "car-1", "observedAt": "2026-03-01T12:00:00Z", "lat": 1, "lng": 2})
    assert excinfo.value.field == "timestamp"


def test_parse_rejects_non_mapping() -> None:
    with pytest.raises(InvalidInputError):
        parse_vehicle_event(["car-1", 51.5, -0.1])  # type: ignore[arg-type]


# ------------------------------------------------------------------
# MQTT
# ------------------------------------------------------------------


def _payload(**fields: object) -> bytes:
    body = {"timestamp": "2026-03-01T12:00:00Z", "location": {"lat": 51.5014, "lng": -0.1419}}
    body.update(fields)
    return json.dumps(body).encode("utf-8")


def test_vehicle_id_from_topic() -> None:
    assert vehicle_id_from_topic("vehicles/car-9/location") == "car-9"
    assert vehicle_id_from_topic("vehicles//location") is None
    assert vehicle_id_from_topic("fleet/car-9") is None


def test_decode_payload_falls_back_to_topic_vehicle_id() -> None:
    event = decode_telemetry_payload(_payload(), "vehicles/car-9/location")
    assert event.vehicle_id == "car-9"


def test_decode_payload_prefers_payload_vehicle_id() -> None:
    event = decode_telemetry_payload(_payload(vehicleId="car-1"), "vehicles/car-9/location")
    assert event.vehicle_id == "car-1"


def test_decode_payload_null_vehicle_id_uses_topic() -> None:
    event = decode_telemetry_payload(_payload(vehicle_id=None), "vehicles/car-9/location")
    assert event.vehicle_id == "car-9"


@pytest.mark.parametrize("payload", [b"not json", b"\xff\xfe", b"[1, 2]"])
def test_decode_payload_rejects_garbage(payload: bytes) -> None:
    with pytest.raises(InvalidInputError):
        decode_telemetry_payload(payload, "vehicles/car-9/location")


def test_mqtt_settings_from_config() -> None:
    settings = MqttSettings.from_config(GeofenceConfig(mqtt_host="broker.test", mqtt_port=8883, mqtt_keepalive=30))
    assert settings.host == "broker.test"
    assert settings.port == 8883
    assert settings.topic == "vehicles/+/location"
    assert settings.keepalive == 30
    assert settings.client_id == ""
    assert settings.username is None


def test_mqtt_settings_carry_credentials() -> None:
    config = GeofenceConfig(mqtt_client_id="geofence-1", mqtt_username="fleet", mqtt_password="s3cret")
    settings = MqttSettings.from_config(config)
    assert settings.client_id == "geofence-1"
    assert settings.username == "fleet"
    assert settings.password == "s3cret"


@pytest.mark.asyncio
async def test_runtime_schedules_events_on_loop() -> None:
    received: list[VehicleEvent] = []
    runtime = TelemetryMqttRuntime(loop=asyncio.get_running_loop(), on_event=received.append)

    runtime.handle_message("vehicles/car-9/location", _payload())
    runtime.handle_message("vehicles/car-9/location", b"garbage")
    await asyncio.sleep(0)

    assert [e.vehicle_id for e in received] == ["car-9"]
    assert runtime.is_running is False


def test_runtime_stop_without_start_is_noop() -> None:
    loop = asyncio.new_event_loop()
    try:
        runtime = TelemetryMqttRuntime(loop=loop, on_event=lambda event: None)
        runtime.stop()
        assert runtime.is_running is False
    finally:
        loop.close()
