"""Demo fleet around Ljubljana.

Each factory returns fresh model instances so callers can seed stores
without sharing state between sessions.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any

from pyfleet.models._base import utcnow
from pyfleet.models.alert import Alert
from pyfleet.models.driver import Driver
from pyfleet.models.geofence import GeofenceSpec
from pyfleet.models.trip import TripCoordinate, TripStatus, TripTrack
from pyfleet.models.vehicle import VehiclePosition

_VEHICLES: tuple[dict[str, Any], ...] = (
    {
        "id": "1",
        "name": "Grega",
        "plate": "LJ-123-AB",
        "driver": "Grega Novak",
        "lat": 46.05,
        "lng": 14.5,
        "status": "moving",
        "speed": 65,
        "heading": 45,
        "battery": 15.99,
        "address": "Babna Gora 57, 1355 Dobrova-Polhov Gradec",
    },
    {
        "id": "2",
        "name": "Transport Van 1",
        "plate": "VEH-2",
        "driver": "Unknown Driver",
        "lat": 46.08,
        "lng": 14.52,
        "status": "stopped",
        "speed": 0,
        "heading": 180,
        "battery": 14.2,
        "address": "Tržaška cesta 45, Ljubljana",
    },
    {
        "id": "3",
        "name": "Delivery Truck",
        "plate": "VEH-3",
        "driver": "Unknown Driver",
        "lat": 46.03,
        "lng": 14.48,
        "status": "idle",
        "speed": 0,
        "heading": 90,
        "battery": 13.8,
        "address": "Slovenska cesta 12, Ljubljana",
    },
    {
        "id": "4",
        "name": "Service Vehicle",
        "plate": "VEH-4",
        "driver": "Unknown Driver",
        "lat": 46.06,
        "lng": 14.55,
        "status": "moving",
        "speed": 42,
        "heading": 270,
        "battery": 15.1,
        "address": "Dunajska cesta 88, Ljubljana",
    },
    {
        "id": "5",
        "name": "Manager Car",
        "plate": "VEH-5",
        "driver": "Unknown Driver",
        "lat": 46.02,
        "lng": 14.45,
        "status": "moving",
        "speed": 78,
        "heading": 135,
        "battery": 14.6,
        "address": "Celovška cesta 33, Ljubljana",
    },
)

_GEOFENCES: tuple[dict[str, Any], ...] = (
    {
        "id": "1",
        "name": "Ljubljana Office",
        "description": "Main office zone",
        "type": "circle",
        "center_lat": 46.0569,
        "center_lng": 14.5058,
        "radius": 500,
        "color": "#00D4FF",
        "alert_on_enter": True,
        "alert_on_exit": True,
    },
    {
        "id": "2",
        "name": "Warehouse Zone",
        "description": "Delivery warehouse area",
        "type": "circle",
        "center_lat": 46.08,
        "center_lng": 14.52,
        "radius": 300,
        "color": "#FF6B00",
        "alert_on_enter": False,
        "alert_on_exit": True,
    },
)

_DRIVERS: tuple[dict[str, Any], ...] = (
    {
        "id": "1",
        "name": "Grega Novak",
        "email": "grega@example.com",
        "phone": "+386 40 123 456",
        "license_number": "SI-123456",
        "license_expiry": "2026-05-15",
        "status": "on_trip",
        "total_trips": 245,
        "total_distance": 19745,
        "safety_score": 87,
        "assigned_vehicle_id": "1",
    },
    {
        "id": "2",
        "name": "Marko Horvat",
        "email": "marko@example.com",
        "phone": "+386 41 234 567",
        "license_number": "SI-234567",
        "license_expiry": "2025-08-20",
        "status": "available",
        "total_trips": 189,
        "total_distance": 15230,
        "safety_score": 92,
    },
    {
        "id": "3",
        "name": "Ana Krajnc",
        "email": "ana@example.com",
        "phone": "+386 51 345 678",
        "license_number": "SI-345678",
        "license_expiry": "2027-01-10",
        "status": "on_trip",
        "total_trips": 312,
        "total_distance": 28450,
        "safety_score": 95,
        "assigned_vehicle_id": "3",
    },
)

# Alert fields plus minutes before now.
_ALERTS: tuple[tuple[dict[str, Any], int], ...] = (
    (
        {
            "id": "1",
            "type": "critical",
            "category": "speed",
            "title": "Speeding Alert",
            "message": "Vehicle exceeded 120 km/h in a 90 km/h zone",
            "vehicle_name": "Grega",
            "vehicle_id": "1",
            "location": "A1 Highway, km 234",
        },
        2,
    ),
    (
        {
            "id": "2",
            "type": "warning",
            "category": "geofence",
            "title": "Geofence Exit",
            "message": "Vehicle left designated work area",
            "vehicle_name": "Delivery Truck",
            "vehicle_id": "3",
            "location": "Outside Ljubljana zone",
        },
        15,
    ),
    (
        {
            "id": "3",
            "type": "info",
            "category": "maintenance",
            "title": "Service Due",
            "message": "Oil change scheduled in 500 km",
            "vehicle_name": "Transport Van 1",
            "vehicle_id": "2",
            "location": "N/A",
            "is_read": True,
        },
        60,
    ),
)

# (lat, lng, seconds before now, speed)
_TRIP_TODAY = (
    (46.05, 14.5, 3600, 0),
    (46.055, 14.51, 3300, 45),
    (46.06, 14.52, 3000, 62),
    (46.065, 14.525, 2700, 78),
    (46.07, 14.53, 2400, 85),
    (46.075, 14.535, 2100, 92),
    (46.08, 14.54, 1800, 88),
    (46.085, 14.545, 1500, 72),
    (46.09, 14.55, 1200, 55),
    (46.095, 14.555, 900, 38),
    (46.1, 14.56, 600, 25),
    (46.105, 14.565, 0, 0),
)
_TRIP_YESTERDAY = (
    (46.22, 14.46, 90000, 0),
    (46.18, 14.47, 89000, 65),
    (46.14, 14.48, 88000, 95),
    (46.1, 14.49, 87500, 110),
    (46.07, 14.5, 87000, 88),
    (46.05, 14.5, 86400, 0),
)


def sample_vehicles() -> list[VehiclePosition]:
    return [VehiclePosition.model_validate(data) for data in _VEHICLES]


def sample_geofences(now: datetime | None = None) -> list[GeofenceSpec]:
    stamp = now or utcnow()
    return [GeofenceSpec.model_validate({**data, "created_at": stamp, "updated_at": stamp}) for data in _GEOFENCES]


def _track(points: tuple[tuple[float, float, int, float], ...], now: datetime) -> tuple[TripCoordinate, ...]:
    return tuple(
        TripCoordinate(lat=lat, lng=lng, timestamp=now - timedelta(seconds=ago), speed=speed)
        for lat, lng, ago, speed in points
    )


def sample_trips(now: datetime | None = None) -> list[TripTrack]:
    stamp = now or utcnow()
    today = _track(_TRIP_TODAY, stamp)
    yesterday = _track(_TRIP_YESTERDAY, stamp)
    return [
        TripTrack(
            id="1",
            vehicle_id="1",
            trip_date=today[0].timestamp.date(),
            start_time=today[0].timestamp,
            end_time=today[-1].timestamp,
            start_address="Babna Gora 57, Dobrova-Polhov Gradec",
            end_address="Ljubljana Center",
            status=TripStatus.COMPLETED,
            coordinates=today,
            created_at=stamp,
        ),
        TripTrack(
            id="2",
            vehicle_id="1",
            trip_date=yesterday[0].timestamp.date(),
            start_time=yesterday[0].timestamp,
            end_time=yesterday[-1].timestamp,
            start_address="Ljubljana Airport",
            end_address="Babna Gora 57, Dobrova-Polhov Gradec",
            status=TripStatus.COMPLETED,
            coordinates=yesterday,
            created_at=stamp - timedelta(days=1),
        ),
    ]


def sample_drivers(now: datetime | None = None) -> list[Driver]:
    stamp = now or utcnow()
    return [Driver.model_validate({**data, "created_at": stamp, "updated_at": stamp}) for data in _DRIVERS]


def sample_alerts(now: datetime | None = None) -> list[Alert]:
    stamp = now or utcnow()
    return [
        Alert.model_validate({**data, "timestamp": stamp - timedelta(minutes=minutes)}) for data, minutes in _ALERTS
    ]
