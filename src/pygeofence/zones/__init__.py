"""Zone catalog and lookup."""

from pygeofence.zones.catalog import DEFAULT_ZONES, load_zone_catalog, parse_zone_catalog
from pygeofence.zones.index import ZoneIndex, resolve_zone

__all__ = [
    "DEFAULT_ZONES",
    "ZoneIndex",
    "load_zone_catalog",
    "parse_zone_catalog",
    "resolve_zone",
]
