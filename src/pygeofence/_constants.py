"""Internal constants shared across the library."""

USER_AGENT = "GeofenceMonitor/1.0"
OSRM_BASE_URL = "http://router.project-osrm.org"

# Consecutive raw "outside" observations required to confirm a zone exit.
DEFAULT_EXIT_THRESHOLD = 3

# ~500 m at London latitudes.
DEFAULT_ZONE_PROXIMITY_DEGREES = 0.005

DEFAULT_ROUTING_TIMEOUT_S = 5.0
DEFAULT_GRAPH_RICHNESS_FACTOR = 2
DEFAULT_STRAIGHT_LINE_POINTS_PER_SEGMENT = 50
DEFAULT_MAX_DETOUR_FACTOR = 1.1

EARTH_RADIUS_M = 6_371_008.8

# Fixed sightseeing loop used by the simulated "grand tour" drive.
GRAND_TOUR_ZONE_IDS: tuple[str, ...] = (
    "palace",
    "abbey",
    "eye",
    "stpauls",
    "tower",
    "shard",
    "museum",
    "hydepark",
    "palace",
)
