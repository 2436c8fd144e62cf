"""
Predator behaviour (Fox, Megalodon).

By day a predator may catch or spread disease, mate, and then hunts: it
eats the first live recognised prey among its shuffled neighbours and moves
into that cell, otherwise it moves to any free neighbour, otherwise it dies
of overcrowding. By night it only hunts when hungry, or now and then at
random; otherwise it stays put.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Tuple

from ecosim.agents.population import DeathCause
from ecosim.behavior import lifecycle
from ecosim.behavior.base import SpeciesBehavior
from ecosim.landscape.location import Location

if TYPE_CHECKING:
    from ecosim.behavior.context import StepContext
    from ecosim.core.random_source import RandomSource


class PredatorBehavior(SpeciesBehavior):
    """Hunting strategy driven by a predator's SpeciesTraits."""

    def initial_state(self, rng: RandomSource, random_age: bool) -> Tuple[int, int]:
        if random_age:
            age = rng.next_int(0, self.traits.max_age)
            food_level = rng.next_int(0, self.traits.hunger_cap)
            return age, food_level
        return 0, self.traits.newborn_food_level

    def act(self, ctx: StepContext, idx: int) -> None:
        traits = self.traits
        if not lifecycle.increment_age(ctx, idx, traits):
            return
        if not lifecycle.increment_hunger(ctx, idx):
            return

        if ctx.field.is_day:
            lifecycle.disease_cycle(ctx, idx, traits)
            if lifecycle.death_by_disease(ctx, idx, traits):
                return
            lifecycle.mate(ctx, idx, traits)
            self.hunt(ctx, idx)
        else:
            self.act_night(ctx, idx)

    def act_night(self, ctx: StepContext, idx: int) -> None:
        """Hunt if hungry, or with the night-activity probability; else rest."""
        traits = self.traits
        if ctx.population.food_level[idx] < traits.night_hunt_threshold:
            self.hunt(ctx, idx)
        elif ctx.rng.roll(traits.night_activity_probability):
            self.hunt(ctx, idx)

    def hunt(self, ctx: StepContext, idx: int) -> None:
        """Eat and move onto the prey's cell, else wander, else die."""
        target = self.find_food(ctx, idx)
        if target is None:
            target = ctx.field.free_adjacent_location(ctx.location_of(idx))
        if target is None:
            ctx.population.kill(idx, ctx.field, DeathCause.OVERCROWDING)
            return
        ctx.population.move(idx, target, ctx.field)

    def find_food(self, ctx: StepContext, idx: int) -> Optional[Location]:
        """
        Eat the first live recognised prey among the shuffled neighbours.

        Eating infected prey may infect the predator.

        Returns:
            Where the prey was, or None if nothing edible is adjacent
        """
        population = ctx.population
        traits = self.traits
        for where in ctx.field.adjacent_locations(ctx.location_of(idx)):
            prey = ctx.agent_at(where)
            if prey is None:
                continue
            food_value = traits.food_value_of(population.species_of(prey))
            if food_value is None:
                continue
            population.kill(prey, ctx.field, DeathCause.PREDATION)
            if population.infected[prey] and ctx.rng.roll(traits.prey_infection_probability):
                population.infected[idx] = True
            lifecycle.feed(ctx, idx, food_value, traits)
            return where
        return None
