"""
Prey behaviour (Rabbit, Whale).

By day prey may catch or spread disease, mate, eat krill from their own
cell and then must move to a free neighbour (or die of overcrowding). By
night they stay where they are and gain a little food passively; disease is
still evaluated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from ecosim.behavior import lifecycle
from ecosim.behavior.base import SpeciesBehavior

if TYPE_CHECKING:
    from ecosim.behavior.context import StepContext
    from ecosim.core.random_source import RandomSource


class PreyBehavior(SpeciesBehavior):
    """Foraging strategy driven by a prey species' SpeciesTraits."""

    def initial_state(self, rng: RandomSource, random_age: bool) -> Tuple[int, int]:
        if random_age:
            age = rng.next_int(0, self.traits.max_age)
            food_level = rng.next_int(0, self.traits.hunger_cap + 1)
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
            self.find_food(ctx, idx)
            lifecycle.move_to_free_cell(ctx, idx)
        else:
            self.act_night(ctx, idx)

    def act_night(self, ctx: StepContext, idx: int) -> None:
        """Rest in place; disease still spreads and kills."""
        traits = self.traits
        lifecycle.feed(ctx, idx, traits.night_food_gain, traits)
        lifecycle.disease_cycle(ctx, idx, traits)
        lifecycle.death_by_disease(ctx, idx, traits)

    def find_food(self, ctx: StepContext, idx: int) -> int:
        """
        Eat krill from the current cell, up to what the hunger cap allows.

        Returns:
            Krill eaten
        """
        population = ctx.population
        appetite = self.traits.hunger_cap - int(population.food_level[idx])
        eaten = ctx.field.eat_krill(appetite, ctx.location_of(idx))
        population.food_level[idx] += eaten
        return eaten
