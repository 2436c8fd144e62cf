"""
Behaviour module for the ecosystem simulation.

This package provides the shared life-cycle rules and one behaviour
strategy per trophic role. Agents carry no behaviour themselves; the
simulator looks the strategy up by species tag.

Module Structure:
    context.py    - StepContext handed to every act() call
    lifecycle.py  - Shared rules: aging, hunger, disease, mating, relocation
    base.py       - Abstract SpeciesBehavior interface
    predator.py   - Hunting strategy (Fox, Megalodon)
    prey.py       - Foraging strategy (Rabbit, Whale)
    jellyfish.py  - Drifting strategy (Jellyfish)

Quick Start:
    from ecosim.behavior import create_behaviors

    behaviors = create_behaviors(params)
    behaviors[species].act(ctx, idx)
"""

from typing import Dict

from ecosim.behavior.base import SpeciesBehavior
from ecosim.behavior.context import StepContext
from ecosim.behavior.predator import PredatorBehavior
from ecosim.behavior.prey import PreyBehavior
from ecosim.behavior.jellyfish import JellyfishBehavior
from ecosim.parameters.simulation_params import SimulationParameters
from ecosim.parameters.species import Species, SpeciesTraits, TrophicRole


_STRATEGIES = {
    TrophicRole.PREDATOR: PredatorBehavior,
    TrophicRole.PREY: PreyBehavior,
    TrophicRole.AMBIENT: JellyfishBehavior,
}


def create_behavior(traits: SpeciesTraits) -> SpeciesBehavior:
    """Create the behaviour strategy matching a species' trophic role."""
    return _STRATEGIES[traits.role](traits)


def create_behaviors(params: SimulationParameters) -> Dict[Species, SpeciesBehavior]:
    """One behaviour strategy per species, keyed by species tag."""
    return {species: create_behavior(params.traits(species)) for species in Species}


__all__ = [
    "SpeciesBehavior",
    "StepContext",
    "PredatorBehavior",
    "PreyBehavior",
    "JellyfishBehavior",
    "create_behavior",
    "create_behaviors",
]
