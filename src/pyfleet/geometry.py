"""Geofence geometry helpers.

Circular geofences are drawn as closed polygon rings using a flat
equirectangular approximation: one degree of latitude is taken as
``111 km`` and longitude distances are scaled by ``cos(latitude)``.
This is only accurate for small radii at mid latitudes, but rendered
geofences depend on this exact math, so it is reproduced as-is rather
than replaced with a geodesic circle.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from pyfleet._constants import (
    DEFAULT_POINT_COUNT,
    EARTH_RADIUS_KM,
    KM_PER_DEGREE,
    MAX_ABS_LATITUDE,
    MIN_POINT_COUNT,
)
from pyfleet.exceptions import InvalidGeometryError, PolarLatitudeUnsupportedError

LatLng = tuple[float, float]
"""A ``(lat, lng)`` pair in decimal degrees."""


def _check_latitude(center_lat: float, max_abs_latitude: float) -> None:
    if not abs(center_lat) <= max_abs_latitude:
        raise PolarLatitudeUnsupportedError(center_lat, max_abs_latitude)


def rasterize(
    center_lat: float,
    center_lng: float,
    radius_meters: float,
    point_count: int = DEFAULT_POINT_COUNT,
    *,
    max_abs_latitude: float = MAX_ABS_LATITUDE,
) -> tuple[LatLng, ...]:
    """Approximate a circle as a closed ring of ``point_count + 1`` points.

    Point ``i`` sits at compass angle ``i * 360 / point_count`` degrees
    from north, so point 0 is due north of the center. The first point
    is repeated at the end to close the ring.

    Raises
    ------
    InvalidGeometryError
        If *radius_meters* is not positive or *point_count* is below 3.
    PolarLatitudeUnsupportedError
        If ``abs(center_lat)`` exceeds *max_abs_latitude*.
    """
    if not radius_meters > 0:
        raise InvalidGeometryError(f"radius must be positive, got {radius_meters}", field="radius")
    if point_count < MIN_POINT_COUNT:
        raise InvalidGeometryError(
            f"point_count must be at least {MIN_POINT_COUNT}, got {point_count}",
            field="point_count",
        )
    _check_latitude(center_lat, max_abs_latitude)

    radius_km = radius_meters / 1000
    lat_span = radius_km / KM_PER_DEGREE
    lng_span = radius_km / (KM_PER_DEGREE * math.cos(math.radians(center_lat)))

    points: list[LatLng] = []
    for i in range(point_count):
        angle = math.radians(i * 360 / point_count)
        points.append((center_lat + lat_span * math.cos(angle), center_lng + lng_span * math.sin(angle)))
    points.append(points[0])
    return tuple(points)


def contains(
    center_lat: float,
    center_lng: float,
    radius_meters: float,
    lat: float,
    lng: float,
    *,
    max_abs_latitude: float = MAX_ABS_LATITUDE,
) -> bool:
    """Return ``True`` when (*lat*, *lng*) lies inside the drawn circle.

    Uses the same projection as :func:`rasterize`, so the answer agrees
    with what the map shows rather than with true geodesic distance.
    Centers are checked against *max_abs_latitude* exactly as
    :func:`rasterize` checks them.
    """
    if not radius_meters > 0:
        raise InvalidGeometryError(f"radius must be positive, got {radius_meters}", field="radius")
    _check_latitude(center_lat, max_abs_latitude)
    dy_km = (lat - center_lat) * KM_PER_DEGREE
    dx_km = (lng - center_lng) * KM_PER_DEGREE * math.cos(math.radians(center_lat))
    return math.hypot(dx_km, dy_km) <= radius_meters / 1000


def point_in_polygon(ring: Sequence[LatLng], lat: float, lng: float) -> bool:
    """Ray-casting test for an explicit polygon ring.

    The ring may be open or closed; a repeated closing point is harmless.
    """
    if len(ring) < MIN_POINT_COUNT:
        raise InvalidGeometryError(f"polygon needs at least {MIN_POINT_COUNT} points, got {len(ring)}", field="polygon")
    inside = False
    j = len(ring) - 1
    for i in range(len(ring)):
        lat_i, lng_i = ring[i]
        lat_j, lng_j = ring[j]
        if (lat_i > lat) != (lat_j > lat):
            crossing = lng_i + (lat - lat_i) * (lng_j - lng_i) / (lat_j - lat_i)
            if lng < crossing:
                inside = not inside
        j = i
    return inside


def close_ring(points: Sequence[LatLng]) -> tuple[LatLng, ...]:
    """Return *points* as a tuple whose last element equals the first."""
    ring = tuple((float(lat), float(lng)) for lat, lng in points)
    if not ring:
        return ring
    if ring[0] != ring[-1]:
        ring = (*ring, ring[0])
    return ring


def to_geojson_ring(points: Sequence[LatLng]) -> list[list[float]]:
    """Swap ``(lat, lng)`` pairs to GeoJSON's ``[lng, lat]`` order."""
    return [[lng, lat] for lat, lng in points]


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometers."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = phi2 - phi1
    dlmb = math.radians(lng2 - lng1)
    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlmb / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(h))
