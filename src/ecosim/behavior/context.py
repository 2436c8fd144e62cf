"""Per-step context handed to every behaviour call."""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from typing import TYPE_CHECKING, List, Mapping, Optional

from ecosim.landscape.location import Location
from ecosim.parameters.species import Species

if TYPE_CHECKING:
    from ecosim.agents.population import Population
    from ecosim.behavior.base import SpeciesBehavior
    from ecosim.core.random_source import RandomSource
    from ecosim.landscape.field import Field


@dataclass
class StepContext:
    """
    Everything an agent may read or change while it acts.

    Attributes:
        field: The shared field
        population: The agent arena
        rng: The run's single random source
        behaviors: Behaviour strategy per species
        step: Current step number (used to limit mating to once per step)
        disease_spread_rate: Per-neighbour exposure chance for this step
        newborns: Arena indices of agents born during this step
    """
    field: Field
    population: Population
    rng: RandomSource
    behaviors: Mapping[Species, SpeciesBehavior]
    step: int
    disease_spread_rate: float
    newborns: List[int] = dataclass_field(default_factory=list)

    def agent_at(self, location: Location) -> Optional[int]:
        """Arena index of the live agent at a location, or None."""
        idx = self.field.object_at(location)
        if idx is None or not self.population.alive[idx]:
            return None
        return idx

    def location_of(self, idx: int) -> Location:
        """Cell of an agent that is expected to be alive."""
        location = self.population.location_of(idx)
        if location is None:
            raise RuntimeError(f"Agent {idx} has no location (already dead)")
        return location
