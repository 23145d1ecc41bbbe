"""Trip track models."""

from __future__ import annotations

from datetime import date, datetime
from enum import StrEnum

from pydantic import Field, computed_field, field_validator

from pyfleet import geometry
from pyfleet._normalize import clamp_speed
from pyfleet.models._base import FleetBaseModel, FleetTimestamp, utcnow


class TripStatus(StrEnum):
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TripCoordinate(FleetBaseModel):
    """A single recorded fix along a trip."""

    lat: float
    lng: float
    timestamp: FleetTimestamp = Field(default_factory=utcnow)
    speed: float = 0.0

    @field_validator("speed")
    @classmethod
    def _clamp_speed(cls, value: float) -> float:
        return clamp_speed(value)


class TripTrack(FleetBaseModel):
    """Recorded path of one vehicle between ignition on and off.

    Distance and speed statistics are derived from ``coordinates``.
    """

    id: str
    vehicle_id: str
    driver_id: str | None = None
    trip_date: date = Field(default_factory=lambda: utcnow().date())
    start_time: FleetTimestamp | None = None
    end_time: FleetTimestamp | None = None
    start_address: str | None = None
    end_address: str | None = None
    status: TripStatus = TripStatus.IN_PROGRESS
    coordinates: tuple[TripCoordinate, ...] = ()
    created_at: FleetTimestamp = Field(default_factory=utcnow)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def total_distance(self) -> float:
        """Haversine path length in km."""
        total = 0.0
        for prev, cur in zip(self.coordinates, self.coordinates[1:], strict=False):
            total += geometry.haversine_km(prev.lat, prev.lng, cur.lat, cur.lng)
        return total

    @computed_field  # type: ignore[prop-decorator]
    @property
    def max_speed(self) -> float:
        return max((c.speed for c in self.coordinates), default=0.0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def avg_speed(self) -> float:
        if not self.coordinates:
            return 0.0
        return sum(c.speed for c in self.coordinates) / len(self.coordinates)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def duration_minutes(self) -> float:
        start = self.start_time or (self.coordinates[0].timestamp if self.coordinates else None)
        end: datetime | None = self.end_time or (self.coordinates[-1].timestamp if self.coordinates else None)
        if start is None or end is None or end < start:
            return 0.0
        return (end - start).total_seconds() / 60.0
