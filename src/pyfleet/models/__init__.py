"""Data models for fleet records."""

from pyfleet.models._base import FleetBaseModel, FleetTimestamp, parse_timestamp
from pyfleet.models.alert import Alert, AlertCategory, AlertType
from pyfleet.models.driver import Driver, DriverStatus
from pyfleet.models.geofence import GeofencePolygon, GeofenceSpec, GeofenceType
from pyfleet.models.trip import TripCoordinate, TripStatus, TripTrack
from pyfleet.models.vehicle import MotionStatus, VehiclePosition

__all__ = [
    "Alert",
    "AlertCategory",
    "AlertType",
    "Driver",
    "DriverStatus",
    "FleetBaseModel",
    "FleetTimestamp",
    "GeofencePolygon",
    "GeofenceSpec",
    "GeofenceType",
    "MotionStatus",
    "TripCoordinate",
    "TripStatus",
    "TripTrack",
    "VehiclePosition",
    "parse_timestamp",
]
