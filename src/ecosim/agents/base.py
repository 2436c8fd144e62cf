"""
Agent handle.

Agents have no objects of their own: their state lives in the Population
arena. An Agent is a light view onto one arena slot, exposing the agent
capability set (act, is_alive, is_male, is_infected) for callers that want
to work with individuals rather than indices.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ecosim.landscape.location import Location
from ecosim.parameters.species import Species

if TYPE_CHECKING:
    from ecosim.agents.population import Population
    from ecosim.behavior.context import StepContext


class Agent:
    """
    View onto one slot of a Population.

    A handle stays meaningful while its agent is alive. Once the agent has
    died and the step has been committed, the slot may be recycled for a
    newborn and the handle then describes that newborn.
    """

    __slots__ = ("_population", "index")

    def __init__(self, population: Population, index: int):
        self._population = population
        self.index = index

    @property
    def species(self) -> Species:
        return self._population.species_of(self.index)

    @property
    def is_alive(self) -> bool:
        return self._population.is_alive(self.index)

    @property
    def is_male(self) -> bool:
        return bool(self._population.is_male[self.index])

    @is_male.setter
    def is_male(self, value: bool) -> None:
        self._population.is_male[self.index] = value

    @property
    def is_infected(self) -> bool:
        return bool(self._population.infected[self.index])

    @is_infected.setter
    def is_infected(self, value: bool) -> None:
        self._population.infected[self.index] = value

    @property
    def age(self) -> int:
        return int(self._population.age[self.index])

    @age.setter
    def age(self, value: int) -> None:
        self._population.age[self.index] = value

    @property
    def food_level(self) -> int:
        """Food level (always 0 for species without hunger)."""
        return int(self._population.food_level[self.index])

    @food_level.setter
    def food_level(self, value: int) -> None:
        self._population.food_level[self.index] = value

    @property
    def location(self) -> Optional[Location]:
        """Current cell, or None once dead."""
        return self._population.location_of(self.index)

    def act(self, ctx: StepContext) -> None:
        """Run this agent's species behaviour for one step."""
        ctx.behaviors[self.species].act(ctx, self.index)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Agent):
            return NotImplemented
        return self._population is other._population and self.index == other.index

    def __hash__(self) -> int:
        return hash((id(self._population), self.index))

    def __repr__(self) -> str:
        state = "alive" if self.is_alive else "dead"
        return f"Agent({self.index}, {self.species.label}, {state}, at={self.location})"
