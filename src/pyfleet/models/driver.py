"""Driver roster model."""

from __future__ import annotations

from datetime import date
from enum import StrEnum

from pydantic import Field, field_validator

from pyfleet.models._base import FleetBaseModel, FleetTimestamp, utcnow


class DriverStatus(StrEnum):
    AVAILABLE = "available"
    ON_TRIP = "on_trip"
    OFF_DUTY = "off_duty"
    SUSPENDED = "suspended"


class Driver(FleetBaseModel):
    """A person who can be put in charge of one vehicle.

    ``assigned_vehicle_id`` is unique across a :class:`~pyfleet.state.DriverStore`;
    assignment goes through :meth:`~pyfleet.state.DriverStore.assign_vehicle`.
    """

    id: str
    name: str
    email: str | None = None
    phone: str | None = None
    license_number: str | None = None
    license_expiry: date | None = None
    avatar_url: str | None = None
    status: DriverStatus = DriverStatus.AVAILABLE
    total_trips: int = Field(default=0, ge=0)
    total_distance: float = Field(default=0.0, ge=0)
    """Lifetime distance in km."""
    safety_score: float = Field(default=100.0, ge=0, le=100)
    """Percentage, 0-100."""
    assigned_vehicle_id: str | None = None
    created_at: FleetTimestamp = Field(default_factory=utcnow)
    updated_at: FleetTimestamp = Field(default_factory=utcnow)

    @field_validator("name")
    @classmethod
    def _require_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("name must be non-empty")
        return name

    def license_expired(self, on: date) -> bool:
        return self.license_expiry is not None and self.license_expiry < on
