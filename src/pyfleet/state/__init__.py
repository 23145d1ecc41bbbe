"""State/store layer.

In-memory stores for vehicles, geofences, trips, drivers and alerts.
They hold the session's records and are the only place snapshots are
replaced.
"""

from pyfleet.state.alerts import AlertStore, alert_from_geofence_event
from pyfleet.state.drivers import DriverStore
from pyfleet.state.events import GeofenceEvent, GeofenceEventKind
from pyfleet.state.geofences import GeofenceStore
from pyfleet.state.trips import TripStore
from pyfleet.state.vehicles import VehicleStore

__all__ = [
    "AlertStore",
    "DriverStore",
    "GeofenceEvent",
    "GeofenceEventKind",
    "GeofenceStore",
    "TripStore",
    "VehicleStore",
    "alert_from_geofence_event",
]
