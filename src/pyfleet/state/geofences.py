"""In-memory geofence store with a rendered-polygon cache.

Polygons are regenerated only when a fence's geometry fields change;
renaming, recoloring or toggling a fence reuses the cached ring.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable, Iterator, Sequence
from datetime import datetime
from typing import Any

from pyfleet._constants import DEFAULT_POINT_COUNT, MAX_ABS_LATITUDE
from pyfleet.config import FleetConfig
from pyfleet.exceptions import FleetStateError
from pyfleet.models._base import utcnow
from pyfleet.models.geofence import GeofencePolygon, GeofenceSpec
from pyfleet.models.vehicle import VehiclePosition
from pyfleet.state.events import GeofenceEvent, GeofenceEventKind

_logger = logging.getLogger(__name__)

_PROTECTED_FIELDS = frozenset({"id", "created_at", "updated_at"})


class GeofenceStore:
    """Ordered geofence collection, newest first.

    Every write validates the geometry by rasterizing it before the store
    is touched, so an :class:`~pyfleet.exceptions.InvalidGeometryError`
    leaves the previous state intact.
    """

    def __init__(
        self,
        geofences: Iterable[GeofenceSpec] = (),
        *,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
        max_abs_latitude: float = MAX_ABS_LATITUDE,
        point_count: int = DEFAULT_POINT_COUNT,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory
        self._max_abs_latitude = max_abs_latitude
        self._point_count = point_count
        self._geofences: dict[str, GeofenceSpec] = {}
        self._polygons: dict[str, tuple[tuple[Any, ...], GeofencePolygon]] = {}
        for geofence in geofences:
            if geofence.id in self._geofences:
                raise FleetStateError(f"duplicate geofence id {geofence.id!r}")
            self._cache_polygon(geofence)
            self._geofences[geofence.id] = geofence

    @classmethod
    def from_config(cls, config: FleetConfig, geofences: Iterable[GeofenceSpec] = (), **kwargs: Any) -> GeofenceStore:
        """Store using the configured latitude limit and circle point count."""
        return cls(
            geofences,
            max_abs_latitude=config.max_abs_latitude,
            point_count=config.geofence_point_count,
            **kwargs,
        )

    def __len__(self) -> int:
        return len(self._geofences)

    def __iter__(self) -> Iterator[GeofenceSpec]:
        return iter(list(self._geofences.values()))

    def geofences(self) -> list[GeofenceSpec]:
        return list(self._geofences.values())

    def active(self) -> list[GeofenceSpec]:
        return [g for g in self._geofences.values() if g.is_active]

    def get(self, geofence_id: str) -> GeofenceSpec | None:
        return self._geofences.get(geofence_id)

    # ------------------------------------------------------------------
    # Polygon cache
    # ------------------------------------------------------------------

    def _cache_polygon(self, geofence: GeofenceSpec) -> GeofencePolygon:
        key = geofence.geometry_key
        cached = self._polygons.get(geofence.id)
        if cached is not None and cached[0] == key:
            return cached[1]
        polygon = geofence.to_polygon(max_abs_latitude=self._max_abs_latitude)
        _logger.debug("Rasterized geofence id=%s points=%d", geofence.id, len(polygon))
        self._polygons[geofence.id] = (key, polygon)
        return polygon

    def polygon(self, geofence_id: str) -> GeofencePolygon | None:
        """Rendered ring for *geofence_id*, or ``None`` if unknown."""
        geofence = self._geofences.get(geofence_id)
        if geofence is None:
            return None
        return self._cache_polygon(geofence)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def create(self, **fields: Any) -> GeofenceSpec:
        """Create a geofence and put it at the front of the list.

        Circles without an explicit ``point_count`` use the store default.
        """
        now = self._clock()
        data = {k: v for k, v in fields.items() if k not in _PROTECTED_FIELDS}
        if data.get("point_count") is None:
            data["point_count"] = self._point_count
        geofence = GeofenceSpec.model_validate({**data, "id": self._id_factory(), "created_at": now, "updated_at": now})
        self._cache_polygon(geofence)
        self._geofences = {geofence.id: geofence, **self._geofences}
        return geofence

    def update(self, geofence_id: str, **updates: Any) -> bool:
        """Apply *updates* to an existing geofence.

        Returns ``False`` when the id is unknown.
        """
        current = self._geofences.get(geofence_id)
        if current is None:
            return False
        merged = current.model_dump()
        merged.update({k: v for k, v in updates.items() if k not in _PROTECTED_FIELDS})
        merged["updated_at"] = self._clock()
        geofence = GeofenceSpec.model_validate(merged)
        self._cache_polygon(geofence)
        self._geofences[geofence_id] = geofence
        return True

    def delete(self, geofence_id: str) -> bool:
        self._polygons.pop(geofence_id, None)
        return self._geofences.pop(geofence_id, None) is not None

    def toggle(self, geofence_id: str) -> bool:
        current = self._geofences.get(geofence_id)
        if current is None:
            return False
        return self.update(geofence_id, is_active=not current.is_active)

    # ------------------------------------------------------------------
    # Alerts
    # ------------------------------------------------------------------

    def check_transitions(
        self,
        previous: Sequence[VehiclePosition],
        current: Sequence[VehiclePosition],
    ) -> list[GeofenceEvent]:
        """Compare two snapshots and report boundary crossings.

        Only active fences are checked; an event is emitted only if the
        fence asks for alerts of that kind. Vehicles missing from
        *previous* are skipped.
        """
        before = {v.id: v for v in previous}
        observed_at = self._clock()
        events: list[GeofenceEvent] = []
        for geofence in self.active():
            for vehicle in current:
                old = before.get(vehicle.id)
                if old is None:
                    continue
                was_inside = geofence.contains(old.lat, old.lng, max_abs_latitude=self._max_abs_latitude)
                is_inside = geofence.contains(vehicle.lat, vehicle.lng, max_abs_latitude=self._max_abs_latitude)
                if was_inside == is_inside:
                    continue
                kind = GeofenceEventKind.ENTER if is_inside else GeofenceEventKind.EXIT
                if kind == GeofenceEventKind.ENTER and not geofence.alert_on_enter:
                    continue
                if kind == GeofenceEventKind.EXIT and not geofence.alert_on_exit:
                    continue
                events.append(
                    GeofenceEvent(
                        kind=kind,
                        geofence_id=geofence.id,
                        geofence_name=geofence.name,
                        vehicle_id=vehicle.id,
                        lat=vehicle.lat,
                        lng=vehicle.lng,
                        observed_at=observed_at,
                    )
                )
        if events:
            _logger.debug("Detected %d geofence transitions", len(events))
        return events
