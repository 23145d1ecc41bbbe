"""Vehicle position model."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from pyfleet._normalize import clamp_speed, normalize_heading, safe_float
from pyfleet.models._base import FleetBaseModel, FleetTimestamp


class MotionStatus(StrEnum):
    MOVING = "moving"
    STOPPED = "stopped"
    IDLE = "idle"


class VehiclePosition(FleetBaseModel):
    """Kinematic state of one tracked vehicle.

    Heading is wrapped into ``[0, 360)`` and speed clamped to ``>= 0``
    when a record is validated. ``model_copy(update=...)`` skips
    validation, so code producing updates must keep both invariants
    itself (as :func:`pyfleet.simulation.motion.tick` does).

    Parameters
    ----------
    id : str
        Stable vehicle identifier.
    lat : float
        Latitude in degrees (WGS84).
    lng : float
        Longitude in degrees (WGS84).
    heading : float
        Compass heading in degrees.
    speed : float
        Speed in km/h.
    status : MotionStatus
        ``moving``, ``stopped`` or ``idle``. Only moving vehicles are
        animated by the simulator.
    """

    id: str
    lat: float = Field(validation_alias=AliasChoices("lat", "latitude"))
    lng: float = Field(validation_alias=AliasChoices("lng", "lon", "longitude"))
    heading: float = 0.0
    speed: float = 0.0
    status: MotionStatus = MotionStatus.STOPPED

    name: str = ""
    """Display name (e.g. ``"Transport Van 1"``)."""
    plate: str = ""
    """License plate."""
    driver: str = ""
    """Name of the assigned driver."""
    address: str = ""
    """Last reverse-geocoded address."""
    battery: float | None = None
    """Supply voltage reported by the tracker."""
    last_update: FleetTimestamp | None = None
    """When the last position patch was applied."""

    @field_validator("id")
    @classmethod
    def _normalize_id(cls, value: str) -> str:
        vehicle_id = value.strip()
        if not vehicle_id:
            raise ValueError("id must be non-empty")
        return vehicle_id

    @field_validator("battery", mode="before")
    @classmethod
    def _coerce_battery(cls, value: Any) -> float | None:
        return safe_float(value)

    @field_validator("heading")
    @classmethod
    def _wrap_heading(cls, value: float) -> float:
        return normalize_heading(value)

    @field_validator("speed")
    @classmethod
    def _clamp_speed(cls, value: float) -> float:
        return clamp_speed(value)

    @property
    def is_moving(self) -> bool:
        return self.status == MotionStatus.MOVING
