"""Custom exception hierarchy for pyfleet."""

from __future__ import annotations


class FleetError(Exception):
    """Base exception for all pyfleet errors."""


class FleetConfigError(FleetError):
    """Invalid or missing configuration."""


class FleetStateError(FleetError):
    """A store mutation would break a snapshot invariant."""


class InvalidGeometryError(FleetError, ValueError):
    """Geofence geometry cannot be rasterized.

    Raised for a non-positive radius or fewer than three sample points.
    """

    def __init__(self, message: str, *, field: str = "") -> None:
        self.field = field
        super().__init__(message)


class PolarLatitudeUnsupportedError(InvalidGeometryError):
    """Geofence center is too close to a pole.

    Longitude scaling divides by ``cos(latitude)``, which vanishes at
    ±90°.  Polar geofences are rejected rather than clamped.
    """

    def __init__(self, latitude: float, limit: float) -> None:
        self.latitude = latitude
        self.limit = limit
        super().__init__(
            f"center latitude {latitude} is outside the supported range ±{limit}",
            field="center_lat",
        )
