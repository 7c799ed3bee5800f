"""Route progress tracking.

A journey is an ordered list of target zones. ``current_index`` points
at the zone the vehicle is heading for (or currently inside) and only
ever moves forward:

* entering the current target marks it active;
* a confirmed exit while the current target is active advances to the
  next target (pending until entered);
* entering the *next* target directly (the exit was absorbed by
  debouncing or fast transit) advances and marks it active at once;
* any other zone is ignored.

Once the index runs past the last target every step is completed.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from pygeofence.models.geo import Zone
from pygeofence.models.route import ProgressSnapshot, RouteStep, StepState


@dataclass(slots=True)
class RouteProgress:
    """Per-journey progress state. Targets are fixed once the drive starts."""

    targets: tuple[Zone, ...] = field(default_factory=tuple)
    current_index: int = 0
    last_confirmed_zone_id: str | None = None

    @classmethod
    def for_targets(cls, targets: Sequence[Zone]) -> RouteProgress:
        return cls(targets=tuple(targets))

    @property
    def finished(self) -> bool:
        return self.current_index >= len(self.targets)

    @property
    def current_target(self) -> Zone | None:
        if self.finished:
            return None
        return self.targets[self.current_index]

    @property
    def is_inside_current(self) -> bool:
        target = self.current_target
        return target is not None and self.last_confirmed_zone_id == target.id


class RouteProgressTracker:
    """Applies confirmed zone changes to a :class:`RouteProgress`."""

    def snapshot(self, progress: RouteProgress) -> ProgressSnapshot:
        """Classify every step without mutating *progress*."""
        inside = progress.is_inside_current
        steps: list[RouteStep] = []
        for index, zone in enumerate(progress.targets):
            if index < progress.current_index:
                state = StepState.COMPLETED
            elif index == progress.current_index and inside:
                state = StepState.ACTIVE
            else:
                state = StepState.PENDING
            steps.append(RouteStep(zone=zone, index=index, state=state))
        return ProgressSnapshot(
            current_index=progress.current_index,
            steps=steps,
            finished=progress.finished,
        )

    def advance(self, progress: RouteProgress, confirmed_zone_id: str | None) -> ProgressSnapshot:
        """Fold a confirmed zone into *progress* and return the new snapshot."""
        current = progress.current_target
        if current is None:
            return self.snapshot(progress)

        if confirmed_zone_id == current.id:
            progress.last_confirmed_zone_id = confirmed_zone_id
        elif confirmed_zone_id is None:
            if progress.is_inside_current:
                progress.current_index += 1
            progress.last_confirmed_zone_id = None
        else:
            next_index = progress.current_index + 1
            if next_index < len(progress.targets) and progress.targets[next_index].id == confirmed_zone_id:
                progress.current_index = next_index
                progress.last_confirmed_zone_id = confirmed_zone_id
            elif not progress.is_inside_current:
                # Unrelated zone. Does not move the index; an active target
                # stays active until a confirmed exit.
                progress.last_confirmed_zone_id = confirmed_zone_id
        return self.snapshot(progress)
