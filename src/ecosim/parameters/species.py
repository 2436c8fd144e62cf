"""
Species definitions and per-species life-history traits.

Every behavioural constant that differs between species lives in a
SpeciesTraits record. Behaviour strategies read their numbers from here, so
a run can override any of them through SimulationParameters.species.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Dict, Mapping, Optional


class Species(IntEnum):
    """
    Species tag stored in the agent arena.

    Values are the codes written into numpy arrays and occupancy snapshots.
    """
    FOX = 0
    RABBIT = 1
    MEGALODON = 2
    WHALE = 3
    JELLYFISH = 4

    @property
    def label(self) -> str:
        return self.name.capitalize()


class TrophicRole(Enum):
    """Which behaviour strategy drives a species."""
    PREDATOR = auto()   # Hunts other agents
    PREY = auto()       # Forages krill
    AMBIENT = auto()    # Neither hunts nor forages


@dataclass(frozen=True)
class SpeciesTraits:
    """
    Life-history and behaviour constants for one species.

    Attributes:
        species: Species tag these traits belong to
        role: Behaviour strategy to use
        breeding_age: Minimum age to reproduce
        max_age: Age beyond which the agent dies
        breeding_probability: Chance a mating (or asexual attempt) yields young
        max_litter_size: Upper bound of the uniform litter draw [1, max]
        hunger_cap: Maximum food level (None for species without hunger)
        newborn_food_level: Food level given to newborns
        night_activity_probability: Chance a sated predator hunts at night
        night_hunt_threshold: Predators below this food level always hunt at night
        night_food_gain: Passive food gained by prey resting at night
        food_values: Prey species a predator recognises and what each is worth
        requires_mate: False for asexual breeders
        infection_probability: Spontaneous infection chance per step
        disease_death_probability: Chance an infected agent dies per step
        mating_infection_probability: Chance an infected agent infects its mate
        prey_infection_probability: Chance a predator is infected by infected prey
    """
    species: Species
    role: TrophicRole
    breeding_age: int
    max_age: int
    breeding_probability: float
    max_litter_size: int
    hunger_cap: Optional[int] = None
    newborn_food_level: int = 0
    night_activity_probability: float = 0.0
    night_hunt_threshold: float = 0.0
    night_food_gain: int = 0
    food_values: Mapping[Species, int] = field(default_factory=dict)
    requires_mate: bool = True
    infection_probability: float = 0.001
    disease_death_probability: float = 0.01
    mating_infection_probability: float = 0.15
    prey_infection_probability: float = 0.60

    def __post_init__(self):
        self._validate()

    def _validate(self) -> None:
        """Validate trait ranges."""
        if self.max_age <= 0:
            raise ValueError(f"{self.species.label}: max_age must be positive")
        if self.breeding_age < 0:
            raise ValueError(f"{self.species.label}: breeding_age must be non-negative")
        if self.max_litter_size < 1:
            raise ValueError(f"{self.species.label}: max_litter_size must be at least 1")
        if self.role is not TrophicRole.AMBIENT and (self.hunger_cap is None or self.hunger_cap <= 0):
            raise ValueError(f"{self.species.label}: hunger_cap must be positive")
        for name in (
            "breeding_probability",
            "night_activity_probability",
            "infection_probability",
            "disease_death_probability",
            "mating_infection_probability",
            "prey_infection_probability",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{self.species.label}: {name} must be between 0 and 1")
        if self.role is TrophicRole.PREDATOR and not self.food_values:
            raise ValueError(f"{self.species.label}: a predator needs at least one prey species")

    def food_value_of(self, species: Species) -> Optional[int]:
        """Food value of eating the given species, or None if it is not prey."""
        return self.food_values.get(species)


# Fox only recognises rabbits; its night threshold is three quarters of a rabbit
FOX_RABBIT_FOOD_VALUE = 18
MEGALODON_WHALE_FOOD_VALUE = 100


def default_species_traits() -> Dict[Species, SpeciesTraits]:
    """Build the default trait table for all five species."""
    return {
        Species.FOX: SpeciesTraits(
            species=Species.FOX,
            role=TrophicRole.PREDATOR,
            breeding_age=12,
            max_age=300,
            breeding_probability=0.21,
            max_litter_size=3,
            hunger_cap=60,
            newborn_food_level=60 // 3,
            night_activity_probability=0.50,
            night_hunt_threshold=0.75 * FOX_RABBIT_FOOD_VALUE,
            food_values={Species.RABBIT: FOX_RABBIT_FOOD_VALUE},
        ),
        Species.MEGALODON: SpeciesTraits(
            species=Species.MEGALODON,
            role=TrophicRole.PREDATOR,
            breeding_age=15,
            max_age=500,
            breeding_probability=0.10,
            max_litter_size=2,
            hunger_cap=200,
            newborn_food_level=10,
            night_activity_probability=0.10,
            night_hunt_threshold=MEGALODON_WHALE_FOOD_VALUE / 2,
            food_values={
                Species.RABBIT: 10,
                Species.FOX: 25,
                Species.WHALE: MEGALODON_WHALE_FOOD_VALUE,
            },
        ),
        Species.RABBIT: SpeciesTraits(
            species=Species.RABBIT,
            role=TrophicRole.PREY,
            breeding_age=5,
            max_age=30,
            breeding_probability=0.35,
            max_litter_size=4,
            hunger_cap=8,
            newborn_food_level=8 // 2,
            night_food_gain=1,
        ),
        Species.WHALE: SpeciesTraits(
            species=Species.WHALE,
            role=TrophicRole.PREY,
            breeding_age=50,
            max_age=1000,
            breeding_probability=0.15,
            max_litter_size=2,
            hunger_cap=75,
            newborn_food_level=75 // 2,
            night_food_gain=1,
        ),
        Species.JELLYFISH: SpeciesTraits(
            species=Species.JELLYFISH,
            role=TrophicRole.AMBIENT,
            breeding_age=1000,
            max_age=10_000_000,
            breeding_probability=0.001,
            max_litter_size=1,
            requires_mate=False,
        ),
    }


DEFAULT_SPECIES_TRAITS: Mapping[Species, SpeciesTraits] = default_species_traits()
