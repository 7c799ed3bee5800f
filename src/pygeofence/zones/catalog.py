"""Built-in zone catalog and JSON catalog loading."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from pygeofence.exceptions import ZoneCatalogError
from pygeofence.models.geo import Zone

_ZONE_LIST = TypeAdapter(list[Zone])


def _box(north: float, east: float, south: float, west: float) -> list[dict[str, float]]:
    return [
        {"lat": north, "lng": west},
        {"lat": north, "lng": east},
        {"lat": south, "lng": east},
        {"lat": south, "lng": west},
    ]


_DEFAULT_CATALOG: list[dict[str, Any]] = [
    {"id": "downtown", "name": "City Center", "polygon": _box(51.5150, -0.1200, 51.5050, -0.1300)},
    {"id": "hydepark", "name": "Hyde Park", "polygon": _box(51.5110, -0.1600, 51.5030, -0.1750)},
    {"id": "palace", "name": "Buckingham Palace", "polygon": _box(51.5030, -0.1380, 51.5000, -0.1450)},
    {"id": "eye", "name": "London Eye", "polygon": _box(51.5040, -0.1180, 51.5025, -0.1200)},
    {"id": "shard", "name": "The Shard", "polygon": _box(51.5055, -0.0855, 51.5035, -0.0875)},
    {"id": "tower", "name": "Tower of London", "polygon": _box(51.5090, -0.0740, 51.5070, -0.0770)},
    {"id": "museum", "name": "British Museum", "polygon": _box(51.5200, -0.1250, 51.5180, -0.1280)},
    {"id": "abbey", "name": "Westminster Abbey", "polygon": _box(51.5000, -0.1270, 51.4985, -0.1290)},
    {"id": "stpauls", "name": "St Pauls Cathedral", "polygon": _box(51.5145, -0.0980, 51.5130, -0.1000)},
]

DEFAULT_ZONES: tuple[Zone, ...] = tuple(_ZONE_LIST.validate_python(_DEFAULT_CATALOG))
"""Central London landmarks, in resolution priority order."""


def parse_zone_catalog(raw: Any) -> list[Zone]:
    """Validate a decoded JSON catalog (a list of zone objects)."""
    try:
        return _ZONE_LIST.validate_python(raw)
    except ValidationError as exc:
        raise ZoneCatalogError(f"Invalid zone catalog: {exc.error_count()} error(s)") from exc


def load_zone_catalog(path: str | Path) -> list[Zone]:
    """Load and validate a zone catalog from a JSON file."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise ZoneCatalogError(f"Cannot read zone catalog {path}: {exc}") from exc
    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ZoneCatalogError(f"Zone catalog {path} is not valid JSON") from exc
    return parse_zone_catalog(raw)
