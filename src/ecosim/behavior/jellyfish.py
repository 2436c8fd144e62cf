"""
Ambient behaviour (Jellyfish).

Jellyfish never eat and never hunt. They live very long, can breed without
a partner (rarely, and only when very old) and drift to a free neighbour
every step, dying if boxed in. Day and night make no difference to them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Tuple

from ecosim.behavior import lifecycle
from ecosim.behavior.base import SpeciesBehavior

if TYPE_CHECKING:
    from ecosim.behavior.context import StepContext
    from ecosim.core.random_source import RandomSource


class JellyfishBehavior(SpeciesBehavior):
    """Drifting strategy for species without hunger."""

    def initial_state(self, rng: RandomSource, random_age: bool) -> Tuple[int, int]:
        age = rng.next_int(0, self.traits.max_age) if random_age else 0
        return age, 0

    def act(self, ctx: StepContext, idx: int) -> None:
        traits = self.traits
        if not lifecycle.increment_age(ctx, idx, traits):
            return
        lifecycle.disease_cycle(ctx, idx, traits)
        if lifecycle.death_by_disease(ctx, idx, traits):
            return
        if traits.requires_mate:
            lifecycle.mate(ctx, idx, traits)
        else:
            lifecycle.give_birth(ctx, idx, traits)
        lifecycle.move_to_free_cell(ctx, idx)
