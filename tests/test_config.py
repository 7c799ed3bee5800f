from __future__ import annotations

import pytest

from pygeofence.config import GeofenceConfig
from pygeofence.exceptions import GeofenceConfigError

_ENV_KEYS = (
    "GEOFENCE_EXIT_THRESHOLD",
    "GEOFENCE_ROUTING_TIMEOUT",
    "GEOFENCE_ROUTING_ENABLED",
    "GEOFENCE_ROUTING_BASE_URL",
    "GEOFENCE_MQTT_ENABLED",
    "GEOFENCE_MQTT_PORT",
    "GEOFENCE_ZONES_FILE",
    "GEOFENCE_MQTT_CLIENT_ID",
    "GEOFENCE_MQTT_USERNAME",
    "GEOFENCE_MQTT_PASSWORD",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults() -> None:
    config = GeofenceConfig()
    assert config.exit_threshold == 3
    assert config.zone_proximity_degrees == 0.005
    assert config.graph_richness_factor == 2
    assert config.routing_timeout == 5.0
    assert config.straight_line_points_per_segment == 50
    assert config.routing_enabled is True
    assert config.mqtt_enabled is False


def test_from_env_reads_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEOFENCE_EXIT_THRESHOLD", "5")
    monkeypatch.setenv("GEOFENCE_ROUTING_TIMEOUT", "2.5")
    monkeypatch.setenv("GEOFENCE_ROUTING_ENABLED", "off")
    monkeypatch.setenv("GEOFENCE_ROUTING_BASE_URL", "http://osrm.local")
    monkeypatch.setenv("GEOFENCE_MQTT_ENABLED", "yes")
    monkeypatch.setenv("GEOFENCE_MQTT_PORT", "8883")
    monkeypatch.setenv("GEOFENCE_MQTT_USERNAME", "fleet")
    monkeypatch.setenv("GEOFENCE_MQTT_PASSWORD", "s3cret")

    config = GeofenceConfig.from_env()

    assert config.exit_threshold == 5
    assert config.routing_timeout == 2.5
    assert config.routing_enabled is False
    assert config.routing_base_url == "http://osrm.local"
    assert config.mqtt_enabled is True
    assert config.mqtt_port == 8883
    assert config.mqtt_username == "fleet"
    assert config.mqtt_password == "s3cret"


def test_overrides_beat_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEOFENCE_EXIT_THRESHOLD", "5")
    monkeypatch.setenv("GEOFENCE_ROUTING_ENABLED", "false")

    config = GeofenceConfig.from_env(exit_threshold=7, routing_enabled=True)

    assert config.exit_threshold == 7
    assert config.routing_enabled is True


def test_unrecognised_bool_keeps_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEOFENCE_ROUTING_ENABLED", "maybe")
    assert GeofenceConfig.from_env().routing_enabled is True


def test_bad_numeric_env_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GEOFENCE_EXIT_THRESHOLD", "three")
    with pytest.raises(GeofenceConfigError, match="GEOFENCE_EXIT_THRESHOLD"):
        GeofenceConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"exit_threshold": 0},
        {"routing_timeout": 0},
        {"straight_line_points_per_segment": 0},
    ],
)
def test_invalid_values_rejected(kwargs: dict) -> None:
    with pytest.raises(GeofenceConfigError):
        GeofenceConfig(**kwargs)
