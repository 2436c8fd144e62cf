"""
Abstract base class for species behaviours.

This module defines the interface every behaviour strategy must follow.
A strategy holds one species' traits and drives that species' agents; the
simulator resolves the strategy from an agent's species tag, so adding a
species means adding traits and (at most) a strategy, not a subclass of an
agent type.

The behaviour architecture supports:
- Predators: hunt neighbouring agents, idle or hunt at night
- Prey: forage krill from their own cell, rest at night
- Ambient species: neither hunt nor forage
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Tuple

from ecosim.parameters.species import Species, SpeciesTraits

if TYPE_CHECKING:
    from ecosim.agents.population import Population
    from ecosim.behavior.context import StepContext
    from ecosim.core.random_source import RandomSource
    from ecosim.landscape.field import Field
    from ecosim.landscape.location import Location


class SpeciesBehavior(ABC):
    """
    Abstract base class for species behaviour strategies.

    act() is the core of the model: it runs one step of one agent's life,
    reading and writing the field and arena through the StepContext and
    appending any young to ctx.newborns.
    """

    def __init__(self, traits: SpeciesTraits):
        self.traits = traits

    @property
    def species(self) -> Species:
        return self.traits.species

    @abstractmethod
    def act(self, ctx: StepContext, idx: int) -> None:
        """Run one step for the agent at arena index idx."""
        pass

    @abstractmethod
    def initial_state(self, rng: RandomSource, random_age: bool) -> Tuple[int, int]:
        """
        Starting (age, food_level) for a new agent.

        Args:
            rng: Random source
            random_age: True for initial-population members, False for newborns
        """
        pass

    def spawn(
        self,
        population: Population,
        field: Field,
        rng: RandomSource,
        location: Location,
        random_age: bool = False,
    ) -> int:
        """
        Create an agent of this species at a location.

        Sex is drawn first, then the starting age and food level.

        Returns:
            Arena index of the new agent
        """
        is_male = rng.next_bool()
        age, food_level = self.initial_state(rng, random_age)
        return population.create(
            self.species, location, field,
            is_male=is_male, age=age, food_level=food_level,
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.species.label})"
