"""In-memory vehicle store.

Holds the current fleet snapshot. The simulator and position patches
are the only writers; list and map views read :meth:`VehicleStore.snapshot`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from datetime import datetime
from typing import Any

from pydantic import AliasChoices

from pyfleet._normalize import prune_patch
from pyfleet.exceptions import FleetStateError
from pyfleet.models._base import utcnow
from pyfleet.models.vehicle import MotionStatus, VehiclePosition

_logger = logging.getLogger(__name__)


def _patch_key_map() -> dict[str, str]:
    """Map every accepted input key (name, alias, alias choice) to its field name."""
    keys: dict[str, str] = {}
    for name, info in VehiclePosition.model_fields.items():
        keys[name] = name
        if info.alias:
            keys[info.alias] = name
        choices = info.validation_alias.choices if isinstance(info.validation_alias, AliasChoices) else ()
        for choice in choices:
            if isinstance(choice, str):
                keys[choice] = name
    return keys


_PATCH_KEYS = _patch_key_map()


class VehicleStore:
    """Ordered, id-keyed collection of :class:`VehiclePosition` records.

    Vehicles are never removed during a session.
    """

    def __init__(
        self,
        vehicles: Iterable[VehiclePosition] = (),
        *,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._clock = clock
        self._vehicles: dict[str, VehiclePosition] = {}
        for vehicle in vehicles:
            if vehicle.id in self._vehicles:
                raise FleetStateError(f"duplicate vehicle id {vehicle.id!r}")
            self._vehicles[vehicle.id] = vehicle

    def __len__(self) -> int:
        return len(self._vehicles)

    def __contains__(self, vehicle_id: object) -> bool:
        return vehicle_id in self._vehicles

    def snapshot(self) -> list[VehiclePosition]:
        """Current vehicles in insertion order."""
        return list(self._vehicles.values())

    def get(self, vehicle_id: str) -> VehiclePosition | None:
        return self._vehicles.get(vehicle_id)

    def replace(self, vehicles: Sequence[VehiclePosition]) -> list[VehiclePosition]:
        """Accept a new snapshot produced from :meth:`snapshot`.

        The id set must match the stored one exactly. Records that differ
        from the stored ones get ``last_update`` stamped; unchanged records
        are kept as they are. Returns the stored snapshot.
        """
        incoming = [v.id for v in vehicles]
        if len(incoming) != len(set(incoming)) or set(incoming) != set(self._vehicles):
            raise FleetStateError("snapshot ids do not match the stored fleet")
        now = self._clock()
        self._vehicles = {
            v.id: v if v == self._vehicles[v.id] else v.model_copy(update={"last_update": now}) for v in vehicles
        }
        return self.snapshot()

    def update_vehicle_position(self, patch: dict[str, Any]) -> VehiclePosition | None:
        """Merge a partial update into an existing vehicle.

        ``patch`` must carry ``id``; other keys may use field names or
        their camelCase aliases. Placeholder values are dropped before
        merging. Unknown ids are ignored and ``None`` is returned.
        """
        vehicle_id = patch.get("id")
        if not isinstance(vehicle_id, str):
            raise FleetStateError("position patch requires a string 'id'")
        current = self._vehicles.get(vehicle_id)
        if current is None:
            _logger.debug("Ignoring position patch for unknown vehicle id=%s", vehicle_id)
            return None

        merged = current.model_dump()
        merged.update({_PATCH_KEYS[key]: value for key, value in prune_patch(patch).items() if key in _PATCH_KEYS})
        merged["last_update"] = self._clock()
        updated = VehiclePosition.model_validate(merged)
        self._vehicles[vehicle_id] = updated
        return updated

    def filter(self, *, status: MotionStatus | str | None = None, search: str = "") -> list[VehiclePosition]:
        """Vehicles matching *status* and a case-insensitive *search* term.

        The search term is matched against name, plate and driver.
        """
        needle = search.strip().lower()
        result: list[VehiclePosition] = []
        for vehicle in self._vehicles.values():
            if status is not None and vehicle.status != status:
                continue
            if needle and not any(needle in text.lower() for text in (vehicle.name, vehicle.plate, vehicle.driver)):
                continue
            result.append(vehicle)
        return result

    def status_counts(self) -> dict[str, int]:
        counts = {"all": len(self._vehicles)}
        for status in MotionStatus:
            counts[status.value] = sum(1 for v in self._vehicles.values() if v.status == status)
        return counts
