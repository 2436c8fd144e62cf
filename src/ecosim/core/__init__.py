"""Core simulation engine module."""

from ecosim.core.simulation import Simulator
from ecosim.core.random_source import (
    RandomSource,
    GeneratedRandomSource,
    ReplayedRandomSource,
)
from ecosim.core.time_manager import TimeManager, TimeState
from ecosim.core.view import FieldSnapshot, FieldStats, SimulationView

__all__ = [
    "Simulator",
    "RandomSource",
    "GeneratedRandomSource",
    "ReplayedRandomSource",
    "TimeManager",
    "TimeState",
    "FieldSnapshot",
    "FieldStats",
    "SimulationView",
]
