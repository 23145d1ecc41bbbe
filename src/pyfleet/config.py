"""Simulator configuration for pyfleet."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Mapping
from typing import Any

from pyfleet._constants import (
    DEFAULT_POINT_COUNT,
    DEFAULT_TICK_INTERVAL,
    HEADING_DELTA_RANGE,
    LAT_LNG_DELTA_RANGE,
    MAX_ABS_LATITUDE,
    MIN_POINT_COUNT,
    SPEED_DELTA_RANGE,
)
from pyfleet.exceptions import FleetConfigError


def _env_float(env: Mapping[str, str], key: str) -> float | None:
    value = env.get(key)
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError as exc:
        raise FleetConfigError(f"{key} must be a number, got {value!r}") from exc


def _env_int(env: Mapping[str, str], key: str) -> int | None:
    value = env.get(key)
    if value is None or not value.strip():
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise FleetConfigError(f"{key} must be an integer, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class FleetConfig:
    """Simulator and geometry configuration.

    Parameters
    ----------
    tick_interval : float
        Seconds between motion ticks. Defaults to 3 seconds.
    lat_lng_range : float
        Full width of the uniform latitude/longitude delta in degrees.
    heading_range : float
        Full width of the uniform heading delta in degrees.
    speed_range : float
        Full width of the uniform speed delta in km/h.
    geofence_point_count : int
        Number of sample points used for circular geofence polygons.
    max_abs_latitude : float
        Geofence centers beyond this absolute latitude are rejected.
    seed : int or None
        Seed for the simulator's random source. ``None`` means unseeded.
    """

    tick_interval: float = DEFAULT_TICK_INTERVAL
    lat_lng_range: float = LAT_LNG_DELTA_RANGE
    heading_range: float = HEADING_DELTA_RANGE
    speed_range: float = SPEED_DELTA_RANGE
    geofence_point_count: int = DEFAULT_POINT_COUNT
    max_abs_latitude: float = MAX_ABS_LATITUDE
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.tick_interval <= 0:
            raise FleetConfigError(f"tick_interval must be positive, got {self.tick_interval}")
        for name in ("lat_lng_range", "heading_range", "speed_range"):
            if getattr(self, name) < 0:
                raise FleetConfigError(f"{name} must not be negative, got {getattr(self, name)}")
        if self.geofence_point_count < MIN_POINT_COUNT:
            raise FleetConfigError(
                f"geofence_point_count must be at least {MIN_POINT_COUNT}, got {self.geofence_point_count}"
            )
        if not 0 < self.max_abs_latitude < 90:
            raise FleetConfigError(f"max_abs_latitude must be in (0, 90), got {self.max_abs_latitude}")

    @classmethod
    def from_env(cls, **overrides: Any) -> FleetConfig:
        """Create configuration from environment variables.

        Reads ``FLEET_TICK_INTERVAL``, ``FLEET_LAT_LNG_RANGE``,
        ``FLEET_HEADING_RANGE``, ``FLEET_SPEED_RANGE``,
        ``FLEET_GEOFENCE_POINT_COUNT``, ``FLEET_MAX_ABS_LATITUDE`` and
        ``FLEET_SEED``. Explicit keyword arguments override environment
        values.

        Raises
        ------
        FleetConfigError
            If a variable cannot be parsed or a value is out of range.
        """
        env = os.environ

        _ENV_FLOAT_MAP = {
            "FLEET_TICK_INTERVAL": "tick_interval",
            "FLEET_LAT_LNG_RANGE": "lat_lng_range",
            "FLEET_HEADING_RANGE": "heading_range",
            "FLEET_SPEED_RANGE": "speed_range",
            "FLEET_MAX_ABS_LATITUDE": "max_abs_latitude",
        }
        _ENV_INT_MAP = {
            "FLEET_GEOFENCE_POINT_COUNT": "geofence_point_count",
            "FLEET_SEED": "seed",
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            if field_name in overrides:
                continue
            float_value = _env_float(env, env_key)
            if float_value is not None:
                config_kwargs[field_name] = float_value
        for env_key, field_name in _ENV_INT_MAP.items():
            if field_name in overrides:
                continue
            int_value = _env_int(env, env_key)
            if int_value is not None:
                config_kwargs[field_name] = int_value

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
