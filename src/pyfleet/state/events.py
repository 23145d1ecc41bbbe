"""Geofence transition events."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pyfleet.models._base import utcnow


class GeofenceEventKind(StrEnum):
    ENTER = "enter"
    EXIT = "exit"


class GeofenceEvent(BaseModel):
    """A vehicle crossed the boundary of an active geofence."""

    model_config = ConfigDict(frozen=True)

    kind: GeofenceEventKind
    geofence_id: str
    geofence_name: str = ""
    vehicle_id: str
    lat: float
    lng: float
    observed_at: datetime = Field(default_factory=utcnow)
