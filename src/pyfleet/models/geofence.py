"""Geofence models."""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from pyfleet import geometry
from pyfleet._constants import DEFAULT_POINT_COUNT, MAX_ABS_LATITUDE, MIN_POINT_COUNT
from pyfleet.exceptions import InvalidGeometryError
from pyfleet.geometry import LatLng
from pyfleet.models._base import FleetBaseModel, FleetTimestamp, utcnow


class GeofenceType(StrEnum):
    CIRCLE = "circle"
    POLYGON = "polygon"


def _coerce_point(value: Any) -> LatLng:
    if isinstance(value, dict):
        return (float(value["lat"]), float(value.get("lng", value.get("lon"))))
    lat, lng = value
    return (float(lat), float(lng))


class GeofencePolygon(BaseModel):
    """Closed polygon ring derived from a :class:`GeofenceSpec`.

    Read-only. A new instance is produced whenever the originating
    geofence's geometry changes.
    """

    model_config = ConfigDict(frozen=True)

    geofence_id: str
    points: tuple[LatLng, ...]

    @field_validator("points")
    @classmethod
    def _require_closed(cls, value: tuple[LatLng, ...]) -> tuple[LatLng, ...]:
        if len(value) < 4:
            raise ValueError(f"ring needs at least 4 points including the closing point, got {len(value)}")
        if value[0] != value[-1]:
            raise ValueError("ring is not closed (first point != last point)")
        return value

    def __len__(self) -> int:
        return len(self.points)

    def to_geojson(self) -> dict[str, Any]:
        """GeoJSON ``Polygon`` geometry (``[lng, lat]`` order)."""
        return {"type": "Polygon", "coordinates": [geometry.to_geojson_ring(self.points)]}

    def to_feature(self, properties: dict[str, Any] | None = None) -> dict[str, Any]:
        return {"type": "Feature", "properties": dict(properties or {}), "geometry": self.to_geojson()}


class GeofenceSpec(FleetBaseModel):
    """A virtual boundary that raises enter/exit alerts.

    Circle fences carry ``center_lat``/``center_lng``/``radius`` (meters);
    polygon fences carry an explicit ``polygon`` ring.
    """

    id: str
    name: str = ""
    description: str | None = None
    type: GeofenceType = GeofenceType.CIRCLE
    center_lat: float | None = None
    center_lng: float | None = None
    radius: float | None = None
    """Radius in meters (circle fences only)."""
    point_count: int = DEFAULT_POINT_COUNT
    """Sample points used when rasterizing a circle."""
    polygon: tuple[LatLng, ...] | None = None
    color: str = "#00D4FF"
    is_active: bool = True
    alert_on_enter: bool = True
    alert_on_exit: bool = True
    created_at: FleetTimestamp = Field(default_factory=utcnow)
    updated_at: FleetTimestamp = Field(default_factory=utcnow)

    @field_validator("polygon", mode="before")
    @classmethod
    def _coerce_polygon(cls, value: Any) -> Any:
        if value is None:
            return None
        return tuple(_coerce_point(point) for point in value)

    @model_validator(mode="after")
    def _check_shape_fields(self) -> GeofenceSpec:
        if self.type == GeofenceType.CIRCLE:
            missing = [name for name in ("center_lat", "center_lng", "radius") if getattr(self, name) is None]
            if missing:
                raise ValueError(f"circle geofence requires {', '.join(missing)}")
        elif not self.polygon:
            raise ValueError("polygon geofence requires polygon points")
        return self

    @property
    def geometry_key(self) -> tuple[Any, ...]:
        """Fields that determine the rendered shape."""
        return (self.type, self.center_lat, self.center_lng, self.radius, self.point_count, self.polygon)

    def to_polygon(self, *, max_abs_latitude: float = MAX_ABS_LATITUDE) -> GeofencePolygon:
        """Build the ring for map rendering.

        Raises
        ------
        InvalidGeometryError
            For a non-positive radius, too few points or a polar center.
        """
        if self.type == GeofenceType.CIRCLE:
            assert self.center_lat is not None and self.center_lng is not None and self.radius is not None  # noqa: S101
            points = geometry.rasterize(
                self.center_lat,
                self.center_lng,
                self.radius,
                self.point_count,
                max_abs_latitude=max_abs_latitude,
            )
        else:
            assert self.polygon is not None  # noqa: S101
            points = geometry.close_ring(self.polygon)
            if len(set(points)) < MIN_POINT_COUNT:
                raise InvalidGeometryError(
                    f"polygon needs at least {MIN_POINT_COUNT} distinct points, got {len(set(points))}",
                    field="polygon",
                )
        return GeofencePolygon(geofence_id=self.id, points=points)

    def contains(self, lat: float, lng: float, *, max_abs_latitude: float = MAX_ABS_LATITUDE) -> bool:
        if self.type == GeofenceType.CIRCLE:
            assert self.center_lat is not None and self.center_lng is not None and self.radius is not None  # noqa: S101
            return geometry.contains(
                self.center_lat, self.center_lng, self.radius, lat, lng, max_abs_latitude=max_abs_latitude
            )
        assert self.polygon is not None  # noqa: S101
        return geometry.point_in_polygon(self.polygon, lat, lng)
