"""Exit debouncing for confirmed zone state.

Entries are committed on the first raw observation. Exits need
``threshold`` consecutive raw "outside" observations, which absorbs
GPS jitter along a polygon boundary. The underlying state store is not
affected; it always holds the raw zone.
"""

from __future__ import annotations

from dataclasses import dataclass

from pygeofence._constants import DEFAULT_EXIT_THRESHOLD
from pygeofence.exceptions import GeofenceConfigError


@dataclass(slots=True)
class DebounceSession:
    """Per-journey debounce state. Never shared across journeys.

    ``pending_exit_counter`` only grows while the raw signal is outside
    and ``last_confirmed_zone_id`` is set.
    """

    last_confirmed_zone_id: str | None = None
    pending_exit_counter: int = 0

    def reset(self) -> None:
        self.last_confirmed_zone_id = None
        self.pending_exit_counter = 0


@dataclass(frozen=True, slots=True)
class DebounceResult:
    confirmed_zone_id: str | None
    changed: bool


class DebounceFilter:
    """Stateless rule set applied to a caller-owned :class:`DebounceSession`."""

    def __init__(self, threshold: int = DEFAULT_EXIT_THRESHOLD) -> None:
        if threshold < 1:
            raise GeofenceConfigError(f"debounce threshold must be >= 1, got {threshold}")
        self._threshold = threshold

    @property
    def threshold(self) -> int:
        return self._threshold

    def observe(self, raw_zone_id: str | None, session: DebounceSession) -> DebounceResult:
        """Fold one raw zone observation into *session*."""
        if raw_zone_id is not None:
            if raw_zone_id != session.last_confirmed_zone_id:
                session.last_confirmed_zone_id = raw_zone_id
                session.pending_exit_counter = 0
                return DebounceResult(confirmed_zone_id=raw_zone_id, changed=True)
            session.pending_exit_counter = 0
            return DebounceResult(confirmed_zone_id=raw_zone_id, changed=False)

        if session.last_confirmed_zone_id is None:
            return DebounceResult(confirmed_zone_id=None, changed=False)

        session.pending_exit_counter += 1
        if session.pending_exit_counter >= self._threshold:
            session.last_confirmed_zone_id = None
            session.pending_exit_counter = 0
            return DebounceResult(confirmed_zone_id=None, changed=True)
        # Exit not yet corroborated; keep reporting the stale zone.
        return DebounceResult(confirmed_zone_id=session.last_confirmed_zone_id, changed=False)
