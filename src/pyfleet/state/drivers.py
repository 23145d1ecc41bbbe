"""In-memory driver roster.

A vehicle has at most one assigned driver. :meth:`DriverStore.assign_vehicle`
takes the vehicle away from whoever holds it before handing it over.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from datetime import datetime
from typing import Any

from pyfleet.exceptions import FleetStateError
from pyfleet.models._base import utcnow
from pyfleet.models.driver import Driver, DriverStatus

_logger = logging.getLogger(__name__)

_PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at"})
_COUNTER_FIELDS = frozenset({"total_trips", "total_distance"})


class DriverStore:
    """Drivers in creation order."""

    def __init__(
        self,
        drivers: Iterable[Driver] = (),
        *,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory
        self._drivers: dict[str, Driver] = {}
        for driver in drivers:
            if driver.id in self._drivers:
                raise FleetStateError(f"duplicate driver id {driver.id!r}")
            self._check_vehicle_free(driver.assigned_vehicle_id, driver.id)
            self._drivers[driver.id] = driver

    def __len__(self) -> int:
        return len(self._drivers)

    def drivers(self) -> list[Driver]:
        return list(self._drivers.values())

    def get(self, driver_id: str) -> Driver | None:
        return self._drivers.get(driver_id)

    def driver_for(self, vehicle_id: str) -> Driver | None:
        """The driver currently assigned to *vehicle_id*, if any."""
        for driver in self._drivers.values():
            if driver.assigned_vehicle_id == vehicle_id:
                return driver
        return None

    def _check_vehicle_free(self, vehicle_id: str | None, driver_id: str) -> None:
        if vehicle_id is None:
            return
        holder = self.driver_for(vehicle_id)
        if holder is not None and holder.id != driver_id:
            raise FleetStateError(f"vehicle {vehicle_id!r} is already assigned to driver {holder.id!r}")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create_driver(self, **fields: Any) -> Driver:
        """Add a driver at the end of the roster with zeroed trip counters.

        Raises
        ------
        FleetStateError
            If ``assigned_vehicle_id`` is already held by another driver.
        """
        now = self._clock()
        data = {k: v for k, v in fields.items() if k not in _PROTECTED_FIELDS | _COUNTER_FIELDS}
        driver = Driver.model_validate({**data, "id": self._id_factory(), "created_at": now, "updated_at": now})
        self._check_vehicle_free(driver.assigned_vehicle_id, driver.id)
        self._drivers[driver.id] = driver
        return driver

    def update_driver(self, driver_id: str, **updates: Any) -> bool:
        """Merge *updates* into a driver. Returns ``False`` for unknown ids.

        Raises
        ------
        FleetStateError
            If the update would give a vehicle a second driver.
        """
        current = self._drivers.get(driver_id)
        if current is None:
            return False
        merged = current.model_dump()
        merged.update({k: v for k, v in updates.items() if k not in _PROTECTED_FIELDS})
        merged["updated_at"] = self._clock()
        driver = Driver.model_validate(merged)
        self._check_vehicle_free(driver.assigned_vehicle_id, driver_id)
        self._drivers[driver_id] = driver
        return True

    def delete_driver(self, driver_id: str) -> bool:
        return self._drivers.pop(driver_id, None) is not None

    def assign_vehicle(self, driver_id: str, vehicle_id: str | None) -> bool:
        """Put *driver_id* in charge of *vehicle_id*.

        The previous holder of the vehicle is unassigned and made
        ``available``; the new driver becomes ``on_trip``. Passing
        ``None`` unassigns the driver and makes them ``available``.
        Returns ``False`` (and changes nothing) for an unknown driver.
        """
        if driver_id not in self._drivers:
            return False
        if vehicle_id is not None:
            holder = self.driver_for(vehicle_id)
            if holder is not None and holder.id != driver_id:
                _logger.debug("Unassigning driver id=%s from vehicle id=%s", holder.id, vehicle_id)
                self.update_driver(holder.id, assigned_vehicle_id=None, status=DriverStatus.AVAILABLE)
        status = DriverStatus.ON_TRIP if vehicle_id is not None else DriverStatus.AVAILABLE
        return self.update_driver(driver_id, assigned_vehicle_id=vehicle_id, status=status)

    # ------------------------------------------------------------------
    # Summary
    # ------------------------------------------------------------------

    def status_counts(self) -> dict[str, int]:
        counts = {"all": len(self._drivers)}
        for status in DriverStatus:
            counts[status.value] = sum(1 for d in self._drivers.values() if d.status == status)
        return counts

    def average_safety_score(self) -> float | None:
        """Mean safety score, or ``None`` for an empty roster."""
        if not self._drivers:
            return None
        return sum(d.safety_score for d in self._drivers.values()) / len(self._drivers)
