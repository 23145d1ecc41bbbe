"""Tests for pydantic record parsing."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from pyfleet.exceptions import InvalidGeometryError, PolarLatitudeUnsupportedError
from pyfleet.models import (
    GeofencePolygon,
    GeofenceSpec,
    GeofenceType,
    MotionStatus,
    TripCoordinate,
    TripStatus,
    TripTrack,
    VehiclePosition,
    parse_timestamp,
)
from pyfleet.sample_data import sample_geofences, sample_trips, sample_vehicles

# ------------------------------------------------------------------
# VehiclePosition
# ------------------------------------------------------------------


class TestVehiclePosition:
    SAMPLE_PAYLOAD: dict = {
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
        "lastUpdate": "2026-01-01T12:00:00Z",
        "address": "Babna Gora 57, 1355 Dobrova-Polhov Gradec",
        "tripDistance": 20,
    }

    def test_parses_dashboard_payload(self) -> None:
        vehicle = VehiclePosition.model_validate(self.SAMPLE_PAYLOAD)
        assert vehicle.id == "1"
        assert vehicle.status == MotionStatus.MOVING
        assert vehicle.is_moving
        assert vehicle.speed == 65.0
        assert vehicle.battery == pytest.approx(15.99)
        assert vehicle.last_update == datetime(2026, 1, 1, 12, tzinfo=UTC)

    def test_coordinate_aliases(self) -> None:
        vehicle = VehiclePosition.model_validate({"id": "x", "latitude": 1.5, "longitude": 2.5})
        assert (vehicle.lat, vehicle.lng) == (1.5, 2.5)
        vehicle = VehiclePosition.model_validate({"id": "x", "lat": 1.5, "lon": 3.5})
        assert vehicle.lng == 3.5

    @pytest.mark.parametrize(
        ("heading", "expected"),
        [(0, 0.0), (45, 45.0), (360, 0.0), (370, 10.0), (-10, 350.0), (-720, 0.0), (-1e-17, 0.0)],
    )
    def test_heading_normalized(self, heading: float, expected: float) -> None:
        vehicle = VehiclePosition(id="x", lat=0, lng=0, heading=heading)
        assert vehicle.heading == pytest.approx(expected)
        assert 0 <= vehicle.heading < 360

    def test_negative_speed_clamped(self) -> None:
        assert VehiclePosition(id="x", lat=0, lng=0, speed=-3).speed == 0.0

    def test_defaults(self) -> None:
        vehicle = VehiclePosition(id="x", lat=0, lng=0)
        assert vehicle.status == MotionStatus.STOPPED
        assert vehicle.heading == 0.0
        assert vehicle.last_update is None

    def test_blank_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            VehiclePosition(id="  ", lat=0, lng=0)

    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(ValidationError):
            VehiclePosition.model_validate({"id": "x", "lat": 0, "lng": 0, "status": "parked"})

    def test_placeholders_fall_back_to_defaults(self) -> None:
        vehicle = VehiclePosition.model_validate({"id": "x", "lat": 0, "lng": 0, "address": "--", "driver": ""})
        assert vehicle.address == ""
        assert vehicle.driver == ""

    def test_frozen(self) -> None:
        vehicle = VehiclePosition(id="x", lat=0, lng=0)
        with pytest.raises(ValidationError):
            vehicle.lat = 1.0  # type: ignore[misc]


# ------------------------------------------------------------------
# GeofenceSpec / GeofencePolygon
# ------------------------------------------------------------------


class TestGeofenceSpec:
    def test_circle_polygon(self) -> None:
        geofence = GeofenceSpec(id="g", center_lat=46.05, center_lng=14.5, radius=500)
        polygon = geofence.to_polygon()
        assert polygon.geofence_id == "g"
        assert len(polygon) == 65
        assert polygon.points[0] == polygon.points[-1]

    def test_point_count_drives_ring_length(self) -> None:
        geofence = GeofenceSpec(id="g", center_lat=46.05, center_lng=14.5, radius=500, point_count=12)
        assert len(geofence.to_polygon()) == 13

    def test_camel_case_payload(self) -> None:
        geofence = GeofenceSpec.model_validate(
            {"id": "g", "centerLat": 46.0, "centerLng": 14.0, "radius": 100, "isActive": False, "alertOnEnter": False}
        )
        assert geofence.center_lat == 46.0
        assert geofence.is_active is False
        assert geofence.alert_on_enter is False
        assert geofence.alert_on_exit is True

    def test_circle_requires_center_and_radius(self) -> None:
        with pytest.raises(ValidationError):
            GeofenceSpec(id="g", center_lat=46.05, center_lng=14.5)

    def test_zero_radius_fails_at_rasterization(self) -> None:
        geofence = GeofenceSpec(id="g", center_lat=46.05, center_lng=14.5, radius=0)
        with pytest.raises(InvalidGeometryError):
            geofence.to_polygon()

    def test_polar_center_fails_at_rasterization(self) -> None:
        geofence = GeofenceSpec(id="g", center_lat=90, center_lng=0, radius=100)
        with pytest.raises(PolarLatitudeUnsupportedError):
            geofence.to_polygon()

    def test_polygon_points_from_dicts(self) -> None:
        geofence = GeofenceSpec.model_validate(
            {
                "id": "p",
                "type": "polygon",
                "polygon": [{"lat": 0, "lng": 0}, {"lat": 0, "lng": 1}, {"lat": 1, "lng": 1}],
            }
        )
        assert geofence.type == GeofenceType.POLYGON
        polygon = geofence.to_polygon()
        assert polygon.points == ((0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (0.0, 0.0))

    def test_polygon_type_requires_points(self) -> None:
        with pytest.raises(ValidationError):
            GeofenceSpec(id="p", type=GeofenceType.POLYGON)

    def test_polygon_with_repeated_points_rejected(self) -> None:
        geofence = GeofenceSpec(id="p", type="polygon", polygon=((0, 0), (1, 1), (0, 0)))
        with pytest.raises(InvalidGeometryError):
            geofence.to_polygon()

    def test_contains_circle_and_polygon(self) -> None:
        circle = GeofenceSpec(id="g", center_lat=46.05, center_lng=14.5, radius=500)
        assert circle.contains(46.05, 14.5)
        assert not circle.contains(46.06, 14.5)
        square = GeofenceSpec(id="p", type="polygon", polygon=((0, 0), (0, 1), (1, 1), (1, 0)))
        assert square.contains(0.5, 0.5)
        assert not square.contains(2, 2)

    def test_geometry_key_ignores_presentation_fields(self) -> None:
        geofence = GeofenceSpec(id="g", center_lat=46.05, center_lng=14.5, radius=500)
        renamed = geofence.model_copy(update={"name": "Office", "color": "#FF0000"})
        moved = geofence.model_copy(update={"radius": 600})
        assert geofence.geometry_key == renamed.geometry_key
        assert geofence.geometry_key != moved.geometry_key


class TestGeofencePolygon:
    def test_rejects_open_ring(self) -> None:
        with pytest.raises(ValidationError):
            GeofencePolygon(geofence_id="g", points=((0, 0), (0, 1), (1, 1), (1, 0)))

    def test_rejects_short_ring(self) -> None:
        with pytest.raises(ValidationError):
            GeofencePolygon(geofence_id="g", points=((0, 0), (0, 1), (0, 0)))

    def test_geojson_uses_lng_lat_order(self) -> None:
        polygon = GeofenceSpec(id="g", center_lat=46.05, center_lng=14.5, radius=500).to_polygon()
        geojson = polygon.to_geojson()
        assert geojson["type"] == "Polygon"
        ring = geojson["coordinates"][0]
        assert len(ring) == 65
        assert ring[0] == [polygon.points[0][1], polygon.points[0][0]]
        assert ring[0] == ring[-1]

    def test_feature_wraps_geometry(self) -> None:
        polygon = GeofenceSpec(id="g", center_lat=46.05, center_lng=14.5, radius=500).to_polygon()
        feature = polygon.to_feature({"name": "Office"})
        assert feature["type"] == "Feature"
        assert feature["properties"] == {"name": "Office"}
        assert feature["geometry"] == polygon.to_geojson()


# ------------------------------------------------------------------
# TripTrack
# ------------------------------------------------------------------


class TestTripTrack:
    def test_empty_trip_statistics(self) -> None:
        trip = TripTrack(id="t", vehicle_id="1")
        assert trip.status == TripStatus.IN_PROGRESS
        assert trip.total_distance == 0.0
        assert trip.max_speed == 0.0
        assert trip.avg_speed == 0.0
        assert trip.duration_minutes == 0.0

    def test_statistics_from_coordinates(self) -> None:
        start = datetime(2026, 1, 1, 8, tzinfo=UTC)
        coords = (
            TripCoordinate(lat=46.0, lng=14.5, timestamp=start, speed=0),
            TripCoordinate(lat=46.5, lng=14.5, timestamp=start + timedelta(minutes=20), speed=90),
            TripCoordinate(lat=47.0, lng=14.5, timestamp=start + timedelta(minutes=40), speed=30),
        )
        trip = TripTrack(id="t", vehicle_id="1", coordinates=coords)
        assert trip.total_distance == pytest.approx(111.19, abs=0.01)
        assert trip.max_speed == 90
        assert trip.avg_speed == pytest.approx(40.0)
        assert trip.duration_minutes == pytest.approx(40.0)

    def test_statistics_are_serialized(self) -> None:
        dumped = TripTrack(id="t", vehicle_id="1").model_dump()
        assert {"total_distance", "max_speed", "avg_speed", "duration_minutes"} <= dumped.keys()

    def test_coordinate_speed_clamped(self) -> None:
        assert TripCoordinate(lat=0, lng=0, speed=-4).speed == 0.0


# ------------------------------------------------------------------
# Helpers and sample data
# ------------------------------------------------------------------


class TestParseTimestamp:
    def test_epoch_seconds_and_milliseconds(self) -> None:
        expected = datetime(2026, 1, 1, tzinfo=UTC)
        assert parse_timestamp(expected.timestamp()) == expected
        assert parse_timestamp(int(expected.timestamp() * 1000)) == expected

    def test_naive_datetime_assumed_utc(self) -> None:
        assert parse_timestamp(datetime(2026, 1, 1)) == datetime(2026, 1, 1, tzinfo=UTC)

    def test_iso_string(self) -> None:
        assert parse_timestamp("2026-01-01T00:00:00Z") == datetime(2026, 1, 1, tzinfo=UTC)

    def test_none(self) -> None:
        assert parse_timestamp(None) is None


def test_sample_data_is_fresh_and_valid() -> None:
    vehicles = sample_vehicles()
    assert [v.id for v in vehicles] == ["1", "2", "3", "4", "5"]
    assert sum(1 for v in vehicles if v.is_moving) == 3
    assert sample_vehicles() is not vehicles

    geofences = sample_geofences()
    assert [len(g.to_polygon()) for g in geofences] == [65, 65]

    now = datetime(2026, 1, 1, 12, tzinfo=UTC)
    trips = sample_trips(now)
    assert trips[0].max_speed == 92
    assert trips[0].duration_minutes == pytest.approx(60.0)
    assert trips[1].end_time == now - timedelta(days=1)
