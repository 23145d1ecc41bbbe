"""In-memory trip track store."""

from __future__ import annotations

import uuid
from collections.abc import Callable, Iterable
from datetime import datetime

from pyfleet.exceptions import FleetStateError
from pyfleet.models._base import utcnow
from pyfleet.models.trip import TripCoordinate, TripStatus, TripTrack


class TripStore:
    """Trips for all vehicles, newest first."""

    def __init__(
        self,
        trips: Iterable[TripTrack] = (),
        *,
        clock: Callable[[], datetime] = utcnow,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory
        self._trips: dict[str, TripTrack] = {trip.id: trip for trip in trips}

    def get(self, trip_id: str) -> TripTrack | None:
        return self._trips.get(trip_id)

    def trips_for(self, vehicle_id: str) -> list[TripTrack]:
        return [t for t in self._trips.values() if t.vehicle_id == vehicle_id]

    def create_trip(self, vehicle_id: str, driver_id: str | None = None) -> TripTrack:
        now = self._clock()
        trip = TripTrack(
            id=self._id_factory(),
            vehicle_id=vehicle_id,
            driver_id=driver_id,
            trip_date=now.date(),
            start_time=now,
            created_at=now,
        )
        self._trips = {trip.id: trip, **self._trips}
        return trip

    def add_coordinate(self, trip_id: str, coordinate: TripCoordinate) -> bool:
        """Append a fix to an in-progress trip.

        Returns ``False`` for unknown trips.

        Raises
        ------
        FleetStateError
            If the trip is already completed or cancelled.
        """
        trip = self._trips.get(trip_id)
        if trip is None:
            return False
        if trip.status != TripStatus.IN_PROGRESS:
            raise FleetStateError(f"trip {trip_id!r} is {trip.status}, cannot record coordinates")
        self._trips[trip_id] = trip.model_copy(update={"coordinates": (*trip.coordinates, coordinate)})
        return True

    def complete_trip(self, trip_id: str, end_address: str | None = None) -> bool:
        trip = self._trips.get(trip_id)
        if trip is None:
            return False
        self._trips[trip_id] = trip.model_copy(
            update={"status": TripStatus.COMPLETED, "end_time": self._clock(), "end_address": end_address}
        )
        return True

    def cancel_trip(self, trip_id: str) -> bool:
        trip = self._trips.get(trip_id)
        if trip is None:
            return False
        self._trips[trip_id] = trip.model_copy(update={"status": TripStatus.CANCELLED, "end_time": self._clock()})
        return True
