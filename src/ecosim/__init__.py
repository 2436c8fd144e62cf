"""
ECOSIM - Predator/prey ecosystem on a 2D grid

A discrete-time, agent-based simulation of foxes, rabbits, megalodons,
whales and jellyfish sharing a bounded rectangular field with a
regrowing krill resource, weather, day/night cycles and disease.
"""

__version__ = "0.1.0"

from ecosim.core.simulation import Simulator
from ecosim.core.random_source import GeneratedRandomSource, ReplayedRandomSource
from ecosim.core.view import FieldSnapshot, FieldStats, SimulationView
from ecosim.landscape.field import Field, OutOfBoundsError
from ecosim.landscape.location import Location
from ecosim.parameters.simulation_params import SimulationParameters
from ecosim.parameters.constants import SimulationConstants
from ecosim.parameters.species import Species

__all__ = [
    "Simulator",
    "GeneratedRandomSource",
    "ReplayedRandomSource",
    "FieldSnapshot",
    "FieldStats",
    "SimulationView",
    "Field",
    "OutOfBoundsError",
    "Location",
    "SimulationParameters",
    "SimulationConstants",
    "Species",
]
