"""Demo motion simulation."""

from pyfleet.simulation.motion import MotionRanges, MotionSimulator, tick
from pyfleet.simulation.runner import SimulationRunner

__all__ = [
    "MotionRanges",
    "MotionSimulator",
    "SimulationRunner",
    "tick",
]
