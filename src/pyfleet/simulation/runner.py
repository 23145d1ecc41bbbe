"""Periodic asyncio driver for the motion simulator."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import Callable
from typing import Any

from pyfleet.config import FleetConfig
from pyfleet.models.vehicle import VehiclePosition
from pyfleet.simulation.motion import MotionSimulator
from pyfleet.state.alerts import AlertStore
from pyfleet.state.events import GeofenceEvent
from pyfleet.state.geofences import GeofenceStore
from pyfleet.state.vehicles import VehicleStore

_logger = logging.getLogger(__name__)


class SimulationRunner:
    """Advance a :class:`VehicleStore` on a fixed cadence.

    Ticks run one at a time on the event loop; each reads the store's
    snapshot, applies :meth:`MotionSimulator.tick` and writes the result
    back, stamping ``last_update`` on vehicles that moved. Geofence
    crossings are recorded in *alerts* when one is given. Callback
    failures are logged and never stop the loop.

    Usage::

        async with SimulationRunner(store, config=config) as runner:
            await asyncio.sleep(30)
    """

    def __init__(
        self,
        store: VehicleStore,
        *,
        config: FleetConfig | None = None,
        simulator: MotionSimulator | None = None,
        geofences: GeofenceStore | None = None,
        alerts: AlertStore | None = None,
        on_tick: Callable[[list[VehiclePosition]], None] | None = None,
        on_geofence_event: Callable[[GeofenceEvent], None] | None = None,
    ) -> None:
        self._config = config or FleetConfig()
        self._store = store
        self._simulator = simulator or MotionSimulator.from_config(self._config)
        self._geofences = geofences
        self._alerts = alerts
        self._on_tick = on_tick
        self._on_geofence_event = on_geofence_event
        self._task: asyncio.Task[None] | None = None
        self._tick_count = 0

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> SimulationRunner:
        self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def start(self) -> None:
        """Schedule the tick loop on the running event loop (idempotent)."""
        if self.is_running:
            return
        self._task = asyncio.get_running_loop().create_task(self._run(), name="pyfleet-simulation")
        _logger.debug("Simulation started interval=%.3fs vehicles=%d", self._config.tick_interval, len(self._store))

    async def stop(self) -> None:
        """Cancel the tick loop and wait for it to finish (idempotent)."""
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        _logger.debug("Simulation stopped after %d ticks", self._tick_count)

    # ------------------------------------------------------------------
    # Tick loop
    # ------------------------------------------------------------------

    def step(self) -> list[VehiclePosition]:
        """Run one tick synchronously and return the new snapshot."""
        previous = self._store.snapshot()
        current = self._store.replace(self._simulator.tick(previous))
        self._tick_count += 1

        if self._on_tick is not None:
            try:
                self._on_tick(current)
            except Exception:  # noqa: BLE001
                _logger.debug("on_tick callback failed", exc_info=True)

        if self._geofences is not None:
            for event in self._geofences.check_transitions(previous, current):
                _logger.debug(
                    "Geofence %s vehicle=%s geofence=%s", event.kind.value, event.vehicle_id, event.geofence_id
                )
                if self._alerts is not None:
                    vehicle = self._store.get(event.vehicle_id)
                    self._alerts.record_geofence_event(event, vehicle_name=vehicle.name if vehicle else "")
                if self._on_geofence_event is None:
                    continue
                try:
                    self._on_geofence_event(event)
                except Exception:  # noqa: BLE001
                    _logger.debug("on_geofence_event callback failed", exc_info=True)
        return current

    async def _run(self) -> None:
        interval = self._config.tick_interval
        while True:
            await asyncio.sleep(interval)
            try:
                self.step()
            except Exception:
                _logger.warning("Simulation tick failed, stopping loop", exc_info=True)
                raise

    async def run_ticks(self, count: int) -> list[VehiclePosition]:
        """Run *count* ticks at the configured cadence, then return."""
        snapshot = self._store.snapshot()
        for _ in range(count):
            await asyncio.sleep(self._config.tick_interval)
            snapshot = self.step()
        return snapshot
