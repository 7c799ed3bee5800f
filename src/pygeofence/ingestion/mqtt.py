"""MQTT telemetry ingestion.

A threaded paho-mqtt client receives JSON location payloads and hands
parsed :class:`VehicleEvent` objects to an asyncio loop. All state
mutation then happens on that loop, which keeps a single writer per
vehicle without explicit locking.
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, cast

import paho.mqtt.client as mqtt

from pygeofence.config import GeofenceConfig
from pygeofence.exceptions import InvalidInputError
from pygeofence.ingestion.events import VEHICLE_ID_KEYS, parse_vehicle_event
from pygeofence.ingestion.normalize import first_present
from pygeofence.models.vehicle import VehicleEvent


@dataclass(frozen=True)
class MqttSettings:
    """Broker details required to subscribe to telemetry."""

    host: str
    port: int
    topic: str
    keepalive: int = 120
    client_id: str = ""
    username: str | None = None
    password: str | None = None

    @classmethod
    def from_config(cls, config: GeofenceConfig) -> MqttSettings:
        return cls(
            host=config.mqtt_host,
            port=config.mqtt_port,
            topic=config.mqtt_topic,
            keepalive=config.mqtt_keepalive,
            client_id=config.mqtt_client_id,
            username=config.mqtt_username,
            password=config.mqtt_password,
        )


def vehicle_id_from_topic(topic: str) -> str | None:
    """Extract ``<id>`` from topics shaped like ``vehicles/<id>/location``."""
    parts = topic.split("/")
    if len(parts) >= 3 and parts[0] == "vehicles" and parts[1]:
        return parts[1]
    return None


def decode_telemetry_payload(payload: bytes, topic: str) -> VehicleEvent:
    """Decode one MQTT message into a :class:`VehicleEvent`.

    The vehicle id falls back to the topic when the payload omits it.
    """
    try:
        parsed: Any = json.loads(payload.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidInputError(f"MQTT payload on {topic} is not JSON") from exc
    if not isinstance(parsed, dict):
        raise InvalidInputError(f"MQTT payload on {topic} is not an object")
    if first_present(parsed, *VEHICLE_ID_KEYS) is None:
        topic_vehicle = vehicle_id_from_topic(topic)
        if topic_vehicle is not None:
            parsed["vehicleId"] = topic_vehicle
    return parse_vehicle_event(parsed)


class TelemetryMqttRuntime:
    """Threaded paho-mqtt runtime that emits parsed events onto an asyncio loop."""

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        on_event: Callable[[VehicleEvent], None],
        logger: logging.Logger | None = None,
    ) -> None:
        self._loop = loop
        self._on_event = on_event
        self._logger = logger or logging.getLogger(__name__)
        self._client: mqtt.Client | None = None
        self._running = False
        self._topic: str | None = None

    @property
    def is_running(self) -> bool:
        """Whether the MQTT runtime is actively running."""
        return self._running

    def handle_message(self, topic: str, payload: bytes) -> None:
        """Decode a message and schedule it on the loop (MQTT thread side)."""
        try:
            event = decode_telemetry_payload(payload, topic)
        except InvalidInputError:
            self._logger.debug("MQTT payload rejected topic=%s", topic, exc_info=True)
            return
        self._loop.call_soon_threadsafe(self._on_event, event)

    def start(self, settings: MqttSettings) -> None:
        """Connect and subscribe with provided broker details."""
        self.stop()
        self._logger.debug(
            "MQTT runtime start requested host=%s port=%s topic=%s",
            settings.host,
            settings.port,
            settings.topic,
        )

        client = mqtt.Client(
            callback_api_version=cast(Any, mqtt).CallbackAPIVersion.VERSION2,
            client_id=settings.client_id,
            protocol=mqtt.MQTTv5,
        )
        client.enable_logger(self._logger)
        if settings.username is not None:
            client.username_pw_set(settings.username, settings.password)

        self._topic = settings.topic

        def on_connect(
            c: mqtt.Client,
            _userdata: Any,
            _flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if reason_code.value != 0:
                self._logger.warning("MQTT connect failed: %s", reason_code)
                return
            self._logger.debug("MQTT connected reason=%s", reason_code)
            if self._topic:
                c.subscribe(self._topic, qos=0)

        def on_message(_c: mqtt.Client, _userdata: Any, msg: mqtt.MQTTMessage) -> None:
            self.handle_message(msg.topic, msg.payload)

        def on_disconnect(
            _client: mqtt.Client,
            _userdata: Any,
            _disconnect_flags: Any,
            reason_code: Any,
            _properties: Any,
        ) -> None:
            if self._running:
                self._logger.debug("MQTT disconnected: %s", reason_code)

        client.on_connect = on_connect
        client.on_message = on_message
        client.on_disconnect = on_disconnect

        client.connect(settings.host, settings.port, keepalive=settings.keepalive)
        client.loop_start()

        self._client = client
        self._running = True
        self._logger.debug("MQTT network loop started")

    def stop(self) -> None:
        """Stop and disconnect current MQTT client if running."""
        client = self._client
        self._client = None
        was_running = self._running
        self._running = False
        self._topic = None

        if client is None:
            return
        try:
            if was_running:
                client.disconnect()
        finally:
            client.loop_stop()
            self._logger.debug("MQTT network loop stopped")
