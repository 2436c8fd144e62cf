"""Parameters configuration module."""

from ecosim.parameters.simulation_params import SimulationParameters
from ecosim.parameters.constants import SimulationConstants
from ecosim.parameters.species import (
    Species,
    SpeciesTraits,
    TrophicRole,
    DEFAULT_SPECIES_TRAITS,
    default_species_traits,
)

__all__ = [
    "SimulationParameters",
    "SimulationConstants",
    "Species",
    "SpeciesTraits",
    "TrophicRole",
    "DEFAULT_SPECIES_TRAITS",
    "default_species_traits",
]
