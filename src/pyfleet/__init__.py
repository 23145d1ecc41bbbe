"""pyfleet - In-memory fleet tracking state, demo motion and geofence geometry."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyfleet")
except PackageNotFoundError:
    __version__ = "0+local"
from pyfleet.config import FleetConfig
from pyfleet.exceptions import (
    FleetConfigError,
    FleetError,
    FleetStateError,
    InvalidGeometryError,
    PolarLatitudeUnsupportedError,
)
from pyfleet.geometry import contains, haversine_km, point_in_polygon, rasterize
from pyfleet.models import (
    Alert,
    AlertCategory,
    AlertType,
    Driver,
    DriverStatus,
    GeofencePolygon,
    GeofenceSpec,
    GeofenceType,
    MotionStatus,
    TripCoordinate,
    TripStatus,
    TripTrack,
    VehiclePosition,
)
from pyfleet.simulation import MotionRanges, MotionSimulator, SimulationRunner, tick
from pyfleet.state import (
    AlertStore,
    DriverStore,
    GeofenceEvent,
    GeofenceEventKind,
    GeofenceStore,
    TripStore,
    VehicleStore,
)

__all__ = [
    "__version__",
    "Alert",
    "AlertCategory",
    "AlertStore",
    "AlertType",
    "Driver",
    "DriverStatus",
    "DriverStore",
    "FleetConfig",
    "FleetConfigError",
    "FleetError",
    "FleetStateError",
    "GeofenceEvent",
    "GeofenceEventKind",
    "GeofencePolygon",
    "GeofenceSpec",
    "GeofenceStore",
    "GeofenceType",
    "InvalidGeometryError",
    "MotionRanges",
    "MotionSimulator",
    "MotionStatus",
    "PolarLatitudeUnsupportedError",
    "SimulationRunner",
    "TripCoordinate",
    "TripStatus",
    "TripStore",
    "TripTrack",
    "VehiclePosition",
    "VehicleStore",
    "contains",
    "haversine_km",
    "point_in_polygon",
    "rasterize",
    "tick",
]
