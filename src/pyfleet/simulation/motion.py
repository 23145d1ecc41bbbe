"""Bounded random-walk motion for demo vehicles.

This is not a physical motion model. Each tick nudges every *moving*
vehicle's position, heading and speed by a small uniform delta so the
map has something to animate. Nothing here tries to keep vehicles on
roads, respect acceleration limits or keep heading consistent with the
direction of travel.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from pyfleet._constants import HEADING_DELTA_RANGE, LAT_LNG_DELTA_RANGE, SPEED_DELTA_RANGE
from pyfleet._normalize import normalize_heading
from pyfleet.config import FleetConfig
from pyfleet.models.vehicle import MotionStatus, VehiclePosition

_logger = logging.getLogger(__name__)

RandomSource = Callable[[], float]
"""Zero-argument callable returning a float in ``[0, 1)``."""

_default_random = random.Random()


@dataclass(frozen=True, slots=True)
class MotionRanges:
    """Full width of each uniform delta (``delta = (rand() - 0.5) * range``)."""

    lat_lng: float = LAT_LNG_DELTA_RANGE
    heading: float = HEADING_DELTA_RANGE
    speed: float = SPEED_DELTA_RANGE

    @classmethod
    def from_config(cls, config: FleetConfig) -> MotionRanges:
        return cls(lat_lng=config.lat_lng_range, heading=config.heading_range, speed=config.speed_range)


DEFAULT_RANGES = MotionRanges()


def step(vehicle: VehiclePosition, rand: RandomSource, ranges: MotionRanges = DEFAULT_RANGES) -> VehiclePosition:
    """Advance a single moving vehicle by one random step.

    Draw order is latitude, longitude, heading, speed.
    """
    lat = vehicle.lat + (rand() - 0.5) * ranges.lat_lng
    lng = vehicle.lng + (rand() - 0.5) * ranges.lat_lng
    heading = normalize_heading(vehicle.heading + (rand() - 0.5) * ranges.heading + 360)
    speed = max(0.0, vehicle.speed + (rand() - 0.5) * ranges.speed)
    return vehicle.model_copy(update={"lat": lat, "lng": lng, "heading": heading, "speed": speed})


def tick(
    vehicles: Sequence[VehiclePosition],
    *,
    rand: RandomSource | None = None,
    ranges: MotionRanges = DEFAULT_RANGES,
) -> list[VehiclePosition]:
    """Return a new snapshot with every moving vehicle advanced one step.

    Non-moving vehicles are passed through as the same objects. Order,
    length and ids are preserved. No input validation is done; NaN
    coordinates simply propagate.
    """
    draw = rand if rand is not None else _default_random.random
    result = [step(v, draw, ranges) if v.status == MotionStatus.MOVING else v for v in vehicles]
    _logger.debug("Motion tick advanced %d of %d vehicles", sum(1 for v in vehicles if v.is_moving), len(vehicles))
    return result


class MotionSimulator:
    """Seedable wrapper around :func:`tick`.

    Usage::

        sim = MotionSimulator(seed=42)
        vehicles = sim.tick(vehicles)
    """

    def __init__(
        self,
        *,
        seed: int | None = None,
        rng: random.Random | None = None,
        ranges: MotionRanges = DEFAULT_RANGES,
    ) -> None:
        self._rng = rng if rng is not None else random.Random(seed)
        self._ranges = ranges

    @classmethod
    def from_config(cls, config: FleetConfig) -> MotionSimulator:
        return cls(seed=config.seed, ranges=MotionRanges.from_config(config))

    @property
    def ranges(self) -> MotionRanges:
        return self._ranges

    def tick(self, vehicles: Sequence[VehiclePosition]) -> list[VehiclePosition]:
        return tick(vehicles, rand=self._rng.random, ranges=self._ranges)
