"""Journey sessions: debounce plus route progress, keyed by journey id."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field

from pygeofence.exceptions import InvalidInputError, UnknownJourneyError
from pygeofence.models.geo import Zone
from pygeofence.models.route import ProgressSnapshot
from pygeofence.models.vehicle import VehicleStatus
from pygeofence.tracking.debounce import DebounceFilter, DebounceSession
from pygeofence.tracking.progress import RouteProgress, RouteProgressTracker

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class JourneyUpdate:
    """Result of feeding one status into a journey."""

    confirmed_zone_id: str | None
    changed: bool
    progress: ProgressSnapshot


@dataclass(slots=True)
class Journey:
    """One tracked drive.

    Owns its own debounce and progress sessions; nothing here is shared
    with other journeys, so concurrent journeys are independent.
    """

    journey_id: str
    debounce_filter: DebounceFilter
    tracker: RouteProgressTracker
    progress: RouteProgress
    debounce: DebounceSession = field(default_factory=DebounceSession)

    @property
    def targets(self) -> tuple[Zone, ...]:
        return self.progress.targets

    def observe(self, status: VehicleStatus) -> JourneyUpdate:
        """Debounce the raw zone of *status* and advance progress on change."""
        result = self.debounce_filter.observe(status.current_zone_id, self.debounce)
        if result.changed:
            snapshot = self.tracker.advance(self.progress, result.confirmed_zone_id)
            _logger.debug(
                "Journey %s confirmed zone=%s index=%d",
                self.journey_id,
                result.confirmed_zone_id,
                snapshot.current_index,
            )
        else:
            snapshot = self.tracker.snapshot(self.progress)
        return JourneyUpdate(
            confirmed_zone_id=result.confirmed_zone_id,
            changed=result.changed,
            progress=snapshot,
        )

    def snapshot(self) -> ProgressSnapshot:
        return self.tracker.snapshot(self.progress)


class JourneyRegistry:
    """Active journeys keyed by id."""

    def __init__(self, debounce_filter: DebounceFilter | None = None) -> None:
        self._filter = debounce_filter if debounce_filter is not None else DebounceFilter()
        self._tracker = RouteProgressTracker()
        self._journeys: dict[str, Journey] = {}

    def start(self, targets: Sequence[Zone], *, journey_id: str | None = None) -> Journey:
        """Begin a journey with fresh debounce and progress state."""
        if not targets:
            raise InvalidInputError("A journey needs at least one target zone", field="targets")
        journey = Journey(
            journey_id=journey_id or uuid.uuid4().hex,
            debounce_filter=self._filter,
            tracker=self._tracker,
            progress=RouteProgress.for_targets(targets),
        )
        self._journeys[journey.journey_id] = journey
        _logger.debug("Journey %s started targets=%s", journey.journey_id, [z.id for z in targets])
        return journey

    def get(self, journey_id: str) -> Journey:
        journey = self._journeys.get(journey_id)
        if journey is None:
            raise UnknownJourneyError(journey_id)
        return journey

    def end(self, journey_id: str) -> Journey:
        journey = self._journeys.pop(journey_id, None)
        if journey is None:
            raise UnknownJourneyError(journey_id)
        return journey

    def __len__(self) -> int:
        return len(self._journeys)

    def __contains__(self, journey_id: object) -> bool:
        return journey_id in self._journeys
