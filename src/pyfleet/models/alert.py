"""Dashboard alert model."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from pyfleet.models._base import FleetBaseModel, FleetTimestamp, utcnow


class AlertType(StrEnum):
    """Severity shown in the alerts panel."""

    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class AlertCategory(StrEnum):
    SPEED = "speed"
    GEOFENCE = "geofence"
    MAINTENANCE = "maintenance"
    FUEL = "fuel"
    TEMPERATURE = "temperature"
    SOS = "sos"


class Alert(FleetBaseModel):
    """One entry in the alert list.

    An alert stays in the list until dismissed. Resolving it hides it
    from filtered views and from the unread count but keeps the record.
    """

    id: str
    type: AlertType
    category: AlertCategory
    title: str
    message: str = ""
    vehicle_name: str = ""
    vehicle_id: str = ""
    location: str = ""
    timestamp: FleetTimestamp = Field(default_factory=utcnow)
    is_read: bool = False
    is_resolved: bool = False

    @property
    def is_open(self) -> bool:
        return not self.is_resolved
