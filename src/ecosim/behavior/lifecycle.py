"""
Shared life-cycle rules.

Free functions operating on one agent (an arena index) through a
StepContext. Species strategies compose their act() from these: aging,
hunger, disease acquisition and spread, disease death, mating, breeding and
forced relocation.

Functions that can kill return whether the agent is still alive, so callers
stop acting as soon as it is not.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ecosim.agents.population import DeathCause

if TYPE_CHECKING:
    from ecosim.behavior.context import StepContext
    from ecosim.parameters.species import SpeciesTraits


# =============================================================================
# Aging and hunger
# =============================================================================

def increment_age(ctx: StepContext, idx: int, traits: SpeciesTraits) -> bool:
    """Age by one step; dies of old age past max_age."""
    population = ctx.population
    population.age[idx] += 1
    if population.age[idx] > traits.max_age:
        population.kill(idx, ctx.field, DeathCause.OLD_AGE)
        return False
    return True


def increment_hunger(ctx: StepContext, idx: int) -> bool:
    """Lose one unit of food; starves at zero."""
    population = ctx.population
    population.food_level[idx] -= 1
    if population.food_level[idx] <= 0:
        population.kill(idx, ctx.field, DeathCause.STARVATION)
        return False
    return True


def feed(ctx: StepContext, idx: int, amount: int, traits: SpeciesTraits) -> None:
    """Raise the food level by amount, up to the hunger cap."""
    population = ctx.population
    population.food_level[idx] = min(int(population.food_level[idx]) + amount, traits.hunger_cap)


# =============================================================================
# Disease
# =============================================================================

def catch_disease(ctx: StepContext, idx: int, traits: SpeciesTraits) -> None:
    """Spontaneous infection of a healthy agent."""
    if ctx.rng.roll(traits.infection_probability):
        ctx.population.infected[idx] = True


def spread_disease(ctx: StepContext, idx: int) -> None:
    """Expose every healthy neighbour, independently, at the step's spread rate."""
    population = ctx.population
    for where in ctx.field.adjacent_locations(ctx.location_of(idx)):
        other = ctx.agent_at(where)
        if other is None or population.infected[other]:
            continue
        if ctx.rng.roll(ctx.disease_spread_rate):
            population.infected[other] = True


def disease_cycle(ctx: StepContext, idx: int, traits: SpeciesTraits) -> None:
    """Infected agents spread the disease; healthy ones may catch it."""
    if ctx.population.infected[idx]:
        spread_disease(ctx, idx)
    else:
        catch_disease(ctx, idx, traits)


def death_by_disease(ctx: StepContext, idx: int, traits: SpeciesTraits) -> bool:
    """
    Roll disease death for an infected agent.

    Returns:
        True if the agent died (the caller must stop acting)
    """
    population = ctx.population
    if population.infected[idx] and ctx.rng.roll(traits.disease_death_probability):
        population.kill(idx, ctx.field, DeathCause.DISEASE)
        return True
    return False


def mating_infection(ctx: StepContext, idx: int, partner: int, traits: SpeciesTraits) -> None:
    """An infected agent may pass the disease to its mate."""
    if ctx.population.infected[idx] and ctx.rng.roll(traits.mating_infection_probability):
        ctx.population.infected[partner] = True


# =============================================================================
# Reproduction
# =============================================================================

def can_breed(ctx: StepContext, idx: int, traits: SpeciesTraits) -> bool:
    return ctx.population.age[idx] >= traits.breeding_age


def breed(ctx: StepContext, idx: int, traits: SpeciesTraits) -> int:
    """
    Number of births for this breeding attempt (may be zero).

    Old enough agents succeed with breeding_probability and then produce a
    litter drawn uniformly from [1, max_litter_size].
    """
    if can_breed(ctx, idx, traits) and ctx.rng.roll(traits.breeding_probability):
        return ctx.rng.next_int(0, traits.max_litter_size) + 1
    return 0


def give_birth(ctx: StepContext, idx: int, traits: SpeciesTraits) -> int:
    """
    Breed and place the young in free neighbouring cells.

    Birth sites are popped from one shuffled free list, so two young never
    share a cell; a litter larger than the free space is cut short.

    Returns:
        Number of young placed
    """
    field = ctx.field
    free = field.free_adjacent_locations(ctx.location_of(idx))
    births = breed(ctx, idx, traits)
    behavior = ctx.behaviors[traits.species]
    placed = 0
    while placed < births and free:
        young = behavior.spawn(ctx.population, field, ctx.rng, free.pop(0))
        ctx.newborns.append(young)
        placed += 1
    return placed


def find_mate(ctx: StepContext, idx: int) -> Optional[int]:
    """
    First neighbour of the same species and opposite sex that has not mated
    this step, or None.
    """
    population = ctx.population
    if population.last_mated[idx] == ctx.step:
        return None
    species = population.species[idx]
    is_male = population.is_male[idx]
    for where in ctx.field.adjacent_locations(ctx.location_of(idx)):
        other = ctx.agent_at(where)
        if other is None or population.species[other] != species:
            continue
        if population.is_male[other] != is_male and population.last_mated[other] != ctx.step:
            return other
    return None


def mate(ctx: StepContext, idx: int, traits: SpeciesTraits) -> int:
    """
    Mate with an adjacent partner if one is available.

    Both partners are spent for the rest of the step; the acting agent
    breeds and may infect its partner.

    Returns:
        Number of young placed
    """
    partner = find_mate(ctx, idx)
    if partner is None:
        return 0
    ctx.population.last_mated[idx] = ctx.step
    ctx.population.last_mated[partner] = ctx.step
    placed = give_birth(ctx, idx, traits)
    mating_infection(ctx, idx, partner, traits)
    return placed


# =============================================================================
# Movement
# =============================================================================

def move_to_free_cell(ctx: StepContext, idx: int) -> bool:
    """
    Move into a random free neighbouring cell, or die of overcrowding.

    Returns:
        True if the agent moved (and is alive)
    """
    target = ctx.field.free_adjacent_location(ctx.location_of(idx))
    if target is None:
        ctx.population.kill(idx, ctx.field, DeathCause.OVERCROWDING)
        return False
    ctx.population.move(idx, target, ctx.field)
    return True
