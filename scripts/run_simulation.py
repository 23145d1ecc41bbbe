#!/usr/bin/env python3
"""Animate the sample fleet and print each tick.

Runs the motion simulator over the Ljubljana demo vehicles with the
sample geofences attached, printing positions after every tick and any
geofence enter/exit events.

Usage
-----
::

    python scripts/run_simulation.py --ticks 5 --interval 0.5 --seed 42

Options::

    --ticks N            Number of ticks to run (default: 10)
    --interval SECONDS   Seconds between ticks (default: FLEET_TICK_INTERVAL or 3)
    --seed N             Seed the random source for a reproducible run
    --json               Output one JSON document per tick
    --verbose            Enable DEBUG logging
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyfleet import (  # noqa: E402
    AlertStore,
    FleetConfig,
    FleetError,
    GeofenceEvent,
    GeofenceStore,
    SimulationRunner,
    VehiclePosition,
    VehicleStore,
)
from pyfleet.sample_data import sample_geofences, sample_vehicles  # noqa: E402

_JSON_FIELDS = {"id", "lat", "lng", "heading", "speed", "status"}

# ── output ───────────────────────────────────────────────────


def _vehicle_row(vehicle: VehiclePosition) -> str:
    return (
        f"  {vehicle.id:>3}  {vehicle.name:<16} {vehicle.status.value:<8}"
        f" {vehicle.lat:10.5f} {vehicle.lng:10.5f} {vehicle.heading:6.1f}° {vehicle.speed:6.1f} km/h"
    )


def _print_tick(index: int, vehicles: list[VehiclePosition], as_json: bool) -> None:
    if as_json:
        doc: dict[str, Any] = {
            "tick": index,
            "vehicles": [v.model_dump(mode="json", include=_JSON_FIELDS) for v in vehicles],
        }
        print(json.dumps(doc, ensure_ascii=False))
        return
    print(f"── tick {index} ──")
    for vehicle in vehicles:
        print(_vehicle_row(vehicle))


def _print_event(event: GeofenceEvent, as_json: bool) -> None:
    if as_json:
        print(json.dumps({"event": event.model_dump(mode="json")}, ensure_ascii=False))
        return
    print(f"  ! {event.kind.value.upper()} vehicle={event.vehicle_id} geofence={event.geofence_name or event.geofence_id}")


# ── main ─────────────────────────────────────────────────────


async def _run(args: argparse.Namespace) -> int:
    overrides: dict[str, Any] = {}
    if args.interval is not None:
        overrides["tick_interval"] = args.interval
    if args.seed is not None:
        overrides["seed"] = args.seed
    try:
        config = FleetConfig.from_env(**overrides)
    except FleetError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    store = VehicleStore(sample_vehicles())
    geofences = GeofenceStore.from_config(config, sample_geofences())
    alerts = AlertStore()
    counter = {"tick": 0}

    def on_tick(vehicles: list[VehiclePosition]) -> None:
        counter["tick"] += 1
        _print_tick(counter["tick"], vehicles, args.json)

    runner = SimulationRunner(
        store,
        config=config,
        geofences=geofences,
        alerts=alerts,
        on_tick=on_tick,
        on_geofence_event=lambda event: _print_event(event, args.json),
    )
    _print_tick(0, store.snapshot(), args.json)
    await runner.run_ticks(args.ticks)
    if not args.json:
        print(f"── {len(alerts)} alerts, {alerts.unread_count()} unread ──")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Animate the pyfleet sample fleet")
    parser.add_argument("--ticks", type=int, default=10, help="Number of ticks to run")
    parser.add_argument("--interval", type=float, default=None, help="Seconds between ticks")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--json", action="store_true", help="Output JSON lines")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable DEBUG logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
