"""
Simulation parameters configuration.

All configurable model parameters with their defaults and validation.
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional

from ecosim.parameters.constants import SimulationConstants
from ecosim.parameters.species import Species, SpeciesTraits, TrophicRole, default_species_traits

logger = logging.getLogger(__name__)


@dataclass
class SimulationParameters:
    """
    All simulation parameters with their defaults.

    Field dimensions that are not positive are replaced by the defaults
    (130 x 200) with a warning; every other out-of-range value raises
    ValueError.
    """

    # === Simulation Setup ===
    random_seed: Optional[int] = None
    depth: int = SimulationConstants.DEFAULT_DEPTH
    width: int = SimulationConstants.DEFAULT_WIDTH

    # === Initial Population (rolled per cell in this order) ===
    fox_creation_probability: float = 0.07
    rabbit_creation_probability: float = 0.35
    megalodon_creation_probability: float = 0.03
    whale_creation_probability: float = 0.055
    jellyfish_creation_probability: float = 0.001

    # === Krill ===
    max_krill: int = 40
    starting_krill: int = 20
    krill_growth_rate: int = 2                 # Added to a cell on a successful growth roll
    krill_growth_probability: float = 0.80     # Normal weather
    rain_krill_growth_probability: float = 0.99
    drought_krill_growth_probability: float = 0.10

    # === Weather ===
    rain_probability: float = 0.02
    drought_probability: float = 0.007
    max_weather_steps: int = 36                # Durations drawn from [1, max_weather_steps]

    # === Disease ===
    disease_spread_rate: float = 0.01          # Per-neighbour exposure chance
    rain_disease_spread_rate: float = 0.025    # Same, while raining

    # === Clock ===
    hours_per_day: int = 24
    start_hour: int = 6
    night_start_hour: int = 21                 # Night is [night_start_hour, hours_per_day]
    night_end_hour: int = 5                    # ... and [0, night_end_hour]

    # === Species ===
    species: Dict[Species, SpeciesTraits] = field(default_factory=default_species_traits)

    def __post_init__(self):
        """Validate parameters."""
        self._apply_dimension_defaults()
        self.species = _species_table(self.species)
        self._validate()

    def _apply_dimension_defaults(self) -> None:
        if self.depth <= 0 or self.width <= 0:
            logger.warning(
                "Field dimensions must be greater than zero (got %dx%d); using defaults %dx%d",
                self.depth, self.width,
                SimulationConstants.DEFAULT_DEPTH, SimulationConstants.DEFAULT_WIDTH,
            )
            self.depth = SimulationConstants.DEFAULT_DEPTH
            self.width = SimulationConstants.DEFAULT_WIDTH

    def _validate(self) -> None:
        """Validate parameter ranges."""
        for f in fields(self):
            if f.name.endswith("_probability") or f.name.endswith("_spread_rate"):
                value = getattr(self, f.name)
                if not 0.0 <= value <= 1.0:
                    raise ValueError(f"{f.name} must be between 0 and 1")
        if self.max_krill < 0:
            raise ValueError("max_krill must be non-negative")
        if not 0 <= self.starting_krill <= self.max_krill:
            raise ValueError("starting_krill must be between 0 and max_krill")
        if self.krill_growth_rate < 0:
            raise ValueError("krill_growth_rate must be non-negative")
        if self.max_weather_steps < 1:
            raise ValueError("max_weather_steps must be at least 1")
        if self.hours_per_day < 1:
            raise ValueError("hours_per_day must be at least 1")
        missing = [s.label for s in Species if s not in self.species]
        if missing:
            raise ValueError(f"missing species traits for: {', '.join(missing)}")
        for species, traits in self.species.items():
            if not isinstance(traits, SpeciesTraits):
                raise ValueError(f"traits for {species.label} must be SpeciesTraits, got {type(traits).__name__}")
            if traits.species is not species:
                raise ValueError(f"traits filed under {species.label} belong to {traits.species.label}")

    @classmethod
    def from_dict(cls, params: dict) -> SimulationParameters:
        """Create parameters from dictionary."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in params.items() if k in known})

    def to_dict(self) -> dict:
        """Convert parameters to dictionary."""
        return asdict(self)

    def traits(self, species: Species) -> SpeciesTraits:
        """Traits for one species."""
        return self.species[species]

    def with_traits(self, species: Species, **changes) -> SimulationParameters:
        """
        Copy of these parameters with some traits of one species replaced.

        Example:
            params.with_traits(Species.RABBIT, disease_death_probability=0.0)
        """
        table = dict(self.species)
        table[species] = replace(table[species], **changes)
        return replace(self, species=table)

    @property
    def creation_probabilities(self) -> Dict[Species, float]:
        """Initial-population roll order: first success wins a cell."""
        return {
            Species.FOX: self.fox_creation_probability,
            Species.RABBIT: self.rabbit_creation_probability,
            Species.MEGALODON: self.megalodon_creation_probability,
            Species.WHALE: self.whale_creation_probability,
            Species.JELLYFISH: self.jellyfish_creation_probability,
        }


def _traits_from_dict(species: Species, data: Mapping[str, Any]) -> SpeciesTraits:
    """Rebuild SpeciesTraits from the plain mapping produced by to_dict()."""
    values = dict(data)
    values["species"] = Species(values.get("species", species))
    role = values["role"]
    values["role"] = TrophicRole[role] if isinstance(role, str) else TrophicRole(role)
    values["food_values"] = {
        Species(prey): value for prey, value in values.get("food_values", {}).items()
    }
    return SpeciesTraits(**values)


def _species_table(table: Mapping) -> Dict[Species, SpeciesTraits]:
    """Normalise keys to Species and nested mappings to SpeciesTraits."""
    normalised = {}
    for key, traits in table.items():
        if isinstance(key, str):
            if key.upper() not in Species.__members__:
                raise ValueError(f"unknown species: {key}")
            species = Species[key.upper()]
        else:
            species = Species(key)
        if isinstance(traits, Mapping):
            traits = _traits_from_dict(species, traits)
        normalised[species] = traits
    return normalised
