#!/usr/bin/env python3
"""Replay a simulated drive through the geofence engine.

Computes a route (graph, external router, or straight-line fallback),
feeds every second route point as a location event for one vehicle,
and prints zone transitions plus debounced route progress as it goes.

Examples:
    python scripts/simulate_drive.py --tour
    python scripts/simulate_drive.py --start palace --dest stpauls --no-routing
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pygeofence import GeofenceConfig, GeofenceError, GeofenceMonitor, StepState  # noqa: E402
from pygeofence.models.route import ProgressSnapshot  # noqa: E402

_STEP_MARKS = {StepState.COMPLETED: "x", StepState.ACTIVE: ">", StepState.PENDING: " "}


def _format_progress(snapshot: ProgressSnapshot) -> str:
    return " ".join(f"[{_STEP_MARKS[step.state]}]{step.zone.id}" for step in snapshot.steps)


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate a vehicle drive through geofenced zones")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--tour", action="store_true", help="Drive the fixed grand tour (default)")
    group.add_argument("--start", help="Start zone id for a custom drive")
    parser.add_argument("--dest", help="Destination zone id for a custom drive")
    parser.add_argument("--vehicle", default="sim-1", help="Vehicle id to report as")
    parser.add_argument("--stride", type=int, default=2, help="Send every Nth route point (default: 2)")
    parser.add_argument("--no-routing", action="store_true", help="Disable the external router")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()
    if args.start and not args.dest:
        parser.error("--start requires --dest")
    if args.stride < 1:
        parser.error("--stride must be >= 1")
    return args


async def _run(args: argparse.Namespace) -> int:
    config = GeofenceConfig.from_env(routing_enabled=not args.no_routing)

    async with GeofenceMonitor(config) as monitor:
        try:
            if args.start:
                journey = monitor.start_custom_journey(args.start, args.dest)
            else:
                journey = monitor.start_grand_tour()
            route = await monitor.journey_route(journey.journey_id)
        except GeofenceError as exc:
            print(f"Cannot plan drive: {exc}", file=sys.stderr)
            return 1

        print(f"Route: {' -> '.join(z.name for z in journey.targets)}")
        print(f"Source: {route.source.value}  points: {len(route.route)}  distance: {route.distance or 0:.0f} m")

        clock = datetime.now(UTC)
        for index, point in enumerate(route.route[:: args.stride]):
            result = monitor.process_event(
                {
                    "vehicleId": args.vehicle,
                    "timestamp": (clock + timedelta(seconds=index)).isoformat(),
                    "location": {"lat": point.lat, "lng": point.lng},
                }
            )
            update = monitor.observe_journey(journey.journey_id, result.status)
            if result.transition:
                print(f"  {result.transition}")
            if update.changed:
                print(f"    {_format_progress(update.progress)}")

        final = monitor.end_journey(journey.journey_id).snapshot()
        print("Destination reached" if final.finished else f"Stopped at step {final.current_index}")
        return 0


def main() -> int:
    args = _parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    return asyncio.run(_run(args))


if __name__ == "__main__":
    raise SystemExit(main())
