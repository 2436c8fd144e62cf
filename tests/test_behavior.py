"""
Tests for species behaviours.

Scenarios run on small empty fields with a FixedRandomSource: every
uniform draw is 0.5 (so only probabilities above 0.5 fire) and adjacency
lists come back in neighbour-offset order, starting top-left.
"""

import pytest

from ecosim.agents import DeathCause
from ecosim.landscape.location import Location
from ecosim.parameters import Species


def act(sim, agent, ctx=None):
    """Let one agent act in a fresh step context."""
    ctx = ctx or sim.make_context()
    sim.behaviors[agent.species].act(ctx, agent.index)
    return ctx


class TestLifecycle:
    """Test aging, hunger and death causes shared by all species."""

    def test_old_age(self, make_simulator, no_disease):
        """Agents past max_age die and leave the field."""
        sim = make_simulator(traits=no_disease)
        rabbit = sim.spawn(Species.RABBIT, Location(1, 1), age=30, food_level=5)
        act(sim, rabbit)
        assert not rabbit.is_alive
        assert sim.field.is_free(Location(1, 1))
        assert sim.population.deaths[DeathCause.OLD_AGE] == 1

    def test_starvation(self, make_simulator, no_disease):
        """Agents whose food runs out starve."""
        sim = make_simulator(traits=no_disease)
        fox = sim.spawn(Species.FOX, Location(1, 1), age=20, food_level=1)
        act(sim, fox)
        assert not fox.is_alive
        assert sim.population.deaths[DeathCause.STARVATION] == 1


class TestDisease:
    """Test infection, spread and disease death."""

    def test_disease_death_preempts_everything(self, make_simulator):
        """An infected agent that dies of disease does not mate, feed or move."""
        sim = make_simulator(traits={
            Species.RABBIT: {
                "disease_death_probability": 1.0,
                "breeding_probability": 1.0,
                "infection_probability": 0.0,
            },
        })
        male = sim.spawn(Species.RABBIT, Location(1, 1), is_male=True, age=10, food_level=5, infected=True)
        female = sim.spawn(Species.RABBIT, Location(0, 0), is_male=False, age=10, food_level=5)
        ctx = act(sim, male)

        assert not male.is_alive
        assert sim.field.is_free(Location(1, 1))
        assert sim.population.deaths[DeathCause.DISEASE] == 1
        assert ctx.newborns == []
        assert sim.population.last_mated[female.index] == -1
        assert sim.field.krill_at(Location(1, 1)) == 20
        assert sim.population.food_level[male.index] == 4

    def test_spread_uses_step_rate(self, make_simulator, no_disease):
        """Infected agents expose their neighbours at the context's rate."""
        sim = make_simulator(traits=no_disease)
        rabbit = sim.spawn(Species.RABBIT, Location(1, 1), age=10, food_level=5, infected=True)
        whale = sim.spawn(Species.WHALE, Location(0, 0), age=10, food_level=50)
        ctx = sim.make_context()
        ctx.disease_spread_rate = 1.0
        act(sim, rabbit, ctx)
        assert whale.is_infected

    def test_no_spread_at_default_rate(self, make_simulator, no_disease):
        """With a 0.01 rate and draws of 0.5, nobody is exposed."""
        sim = make_simulator(traits=no_disease)
        rabbit = sim.spawn(Species.RABBIT, Location(1, 1), age=10, food_level=5, infected=True)
        whale = sim.spawn(Species.WHALE, Location(0, 0), age=10, food_level=50)
        act(sim, rabbit)
        assert not whale.is_infected

    def test_mating_infects_partner(self, make_simulator, no_disease):
        """An infected agent may pass the disease to its mate."""
        traits = dict(no_disease)
        traits[Species.RABBIT] = dict(no_disease[Species.RABBIT], mating_infection_probability=1.0)
        sim = make_simulator(traits=traits)
        male = sim.spawn(Species.RABBIT, Location(1, 1), is_male=True, age=10, food_level=5, infected=True)
        female = sim.spawn(Species.RABBIT, Location(0, 0), is_male=False, age=10, food_level=5)
        ctx = sim.make_context()
        ctx.disease_spread_rate = 0.0
        act(sim, male, ctx)
        assert female.is_infected

    def test_predator_infected_by_prey(self, make_simulator, no_disease):
        """Eating infected prey with a forced infection roll infects the predator."""
        traits = dict(no_disease)
        traits[Species.FOX] = dict(no_disease[Species.FOX], prey_infection_probability=1.0)
        sim = make_simulator(traits=traits)
        fox = sim.spawn(Species.FOX, Location(1, 1), age=20, food_level=10)
        rabbit = sim.spawn(Species.RABBIT, Location(0, 0), age=10, food_level=5, infected=True)
        act(sim, fox)

        assert not rabbit.is_alive
        assert fox.is_infected
        assert fox.location == Location(0, 0)
        assert fox.food_level == 9 + 18
        assert sim.field.is_free(Location(1, 1))

    def test_healthy_prey_does_not_infect(self, make_simulator, no_disease):
        """Healthy prey never infects the predator."""
        traits = dict(no_disease)
        traits[Species.FOX] = dict(no_disease[Species.FOX], prey_infection_probability=1.0)
        sim = make_simulator(traits=traits)
        fox = sim.spawn(Species.FOX, Location(1, 1), age=20, food_level=10)
        sim.spawn(Species.RABBIT, Location(0, 0), age=10, food_level=5)
        act(sim, fox)
        assert not fox.is_infected


class TestPredator:
    """Test hunting, night rest and overcrowding."""

    @pytest.mark.parametrize("prey,value", [
        (Species.RABBIT, 10),
        (Species.FOX, 25),
        (Species.WHALE, 100),
    ])
    def test_megalodon_diet(self, make_simulator, no_disease, prey, value):
        """Megalodons eat rabbits, foxes and whales for their own food values."""
        sim = make_simulator(traits=no_disease)
        shark = sim.spawn(Species.MEGALODON, Location(1, 1), age=20, food_level=50)
        victim = sim.spawn(prey, Location(0, 0), age=20, food_level=30)
        act(sim, shark)
        assert not victim.is_alive
        assert shark.location == Location(0, 0)
        assert shark.food_level == 49 + value
        assert sim.population.deaths[DeathCause.PREDATION] == 1

    def test_fox_ignores_whales(self, make_simulator, no_disease):
        """Foxes only eat rabbits; otherwise they wander."""
        sim = make_simulator(traits=no_disease)
        fox = sim.spawn(Species.FOX, Location(1, 1), age=20, food_level=10)
        whale = sim.spawn(Species.WHALE, Location(0, 0), age=60, food_level=50)
        act(sim, fox)
        assert whale.is_alive
        assert fox.location == Location(0, 1)

    def test_feeding_capped(self, make_simulator, no_disease):
        """Food level never exceeds the hunger cap."""
        sim = make_simulator(traits=no_disease)
        fox = sim.spawn(Species.FOX, Location(1, 1), age=20, food_level=60)
        sim.spawn(Species.RABBIT, Location(0, 0), age=10, food_level=5)
        act(sim, fox)
        assert fox.food_level == 60

    def test_overcrowding(self, make_simulator, no_disease):
        """A boxed-in predator with nothing to eat dies and its cell is cleared."""
        sim = make_simulator(traits=no_disease)
        fox = sim.spawn(Species.FOX, Location(1, 1), age=20, food_level=30)
        for row in range(3):
            for col in range(3):
                if (row, col) != (1, 1):
                    sim.spawn(Species.WHALE, Location(row, col), age=60, food_level=50)
        act(sim, fox)
        assert not fox.is_alive
        assert sim.field.is_free(Location(1, 1))
        assert sim.population.deaths[DeathCause.OVERCROWDING] == 1

    def test_sated_predator_rests_at_night(self, make_simulator, no_disease):
        """At night a well-fed predator stays put unless the activity roll fires."""
        sim = make_simulator(traits=no_disease)
        sim.field.set_day(False)
        fox = sim.spawn(Species.FOX, Location(1, 1), age=20, food_level=30)
        rabbit = sim.spawn(Species.RABBIT, Location(0, 0), age=10, food_level=5)
        act(sim, fox)
        assert fox.location == Location(1, 1)
        assert rabbit.is_alive

    def test_hungry_predator_hunts_at_night(self, make_simulator, no_disease):
        """At night a predator below its threshold hunts."""
        sim = make_simulator(traits=no_disease)
        sim.field.set_day(False)
        fox = sim.spawn(Species.FOX, Location(1, 1), age=20, food_level=5)
        rabbit = sim.spawn(Species.RABBIT, Location(0, 0), age=10, food_level=5)
        act(sim, fox)
        assert not rabbit.is_alive
        assert fox.location == Location(0, 0)
        assert fox.food_level == 4 + 18

    @pytest.mark.parametrize("species,food,hunts", [
        (Species.FOX, 14, True),         # 13 after hunger, below 13.5
        (Species.FOX, 15, False),        # 14
        (Species.MEGALODON, 50, True),   # 49, below 50
        (Species.MEGALODON, 51, False),  # 50
    ])
    def test_night_hunt_threshold(self, make_simulator, no_disease, species, food, hunts):
        """At night a predator hunts only below its own threshold."""
        sim = make_simulator(traits=no_disease)
        sim.field.set_day(False)
        hunter = sim.spawn(species, Location(1, 1), age=20, food_level=food)
        rabbit = sim.spawn(Species.RABBIT, Location(0, 0), age=10, food_level=5)
        act(sim, hunter)
        assert rabbit.is_alive is not hunts
        assert hunter.location == (Location(0, 0) if hunts else Location(1, 1))


class TestPrey:
    """Test foraging and night rest."""

    def test_eats_krill_and_moves(self, make_simulator, no_disease):
        """By day prey eat up to their cap from their own cell, then move."""
        sim = make_simulator(traits=no_disease)
        rabbit = sim.spawn(Species.RABBIT, Location(1, 1), age=10, food_level=5)
        act(sim, rabbit)
        assert sim.field.krill_at(Location(1, 1)) == 20 - 4
        assert rabbit.food_level == 8
        assert rabbit.location == Location(0, 0)

    def test_boxed_in_prey_dies(self, make_simulator, no_disease):
        """Prey with no free neighbour die of overcrowding."""
        sim = make_simulator(traits=no_disease)
        rabbit = sim.spawn(Species.RABBIT, Location(1, 1), age=10, food_level=5)
        for row in range(3):
            for col in range(3):
                if (row, col) != (1, 1):
                    sim.spawn(Species.JELLYFISH, Location(row, col), age=5)
        act(sim, rabbit)
        assert not rabbit.is_alive
        assert sim.field.is_free(Location(1, 1))

    def test_rests_at_night(self, make_simulator, no_disease):
        """At night prey stay put, do not eat krill and gain a little food."""
        sim = make_simulator(traits=no_disease)
        sim.field.set_day(False)
        rabbit = sim.spawn(Species.RABBIT, Location(1, 1), age=10, food_level=3)
        act(sim, rabbit)
        assert rabbit.location == Location(1, 1)
        assert rabbit.food_level == 3
        assert sim.field.krill_at(Location(1, 1)) == 20

    def test_night_gain_capped(self, make_simulator, no_disease):
        """Night food gain never exceeds the hunger cap."""
        sim = make_simulator(traits=no_disease)
        sim.field.set_day(False)
        whale = sim.spawn(Species.WHALE, Location(1, 1), age=60, food_level=75)
        act(sim, whale)
        assert whale.food_level == 75


class TestJellyfish:
    """Test the drifting, asexual species."""

    def test_asexual_birth_and_drift(self, make_simulator, no_disease):
        """Jellyfish breed without a partner and then drift."""
        traits = dict(no_disease)
        traits[Species.JELLYFISH] = dict(
            no_disease[Species.JELLYFISH], breeding_probability=1.0, breeding_age=0,
        )
        sim = make_simulator(traits=traits)
        jelly = sim.spawn(Species.JELLYFISH, Location(1, 1), age=5)
        ctx = act(sim, jelly)

        assert len(ctx.newborns) == 1
        young = sim.agent(ctx.newborns[0])
        assert young.species is Species.JELLYFISH
        assert young.age == 0
        assert young.location == Location(0, 0)
        assert jelly.location == Location(0, 1)

    def test_no_hunger(self, make_simulator, no_disease):
        """Jellyfish never starve."""
        sim = make_simulator(traits=no_disease)
        jelly = sim.spawn(Species.JELLYFISH, Location(1, 1), age=5)
        for _ in range(3):
            act(sim, jelly)
        assert jelly.is_alive
        assert jelly.food_level == 0


class TestMating:
    """Test partner search and litters."""

    def test_pair_mates_once_per_step(self, make_simulator, no_disease):
        """Once a pair has mated, neither partner mates again that step."""
        traits = dict(no_disease)
        traits[Species.RABBIT] = dict(
            no_disease[Species.RABBIT], breeding_probability=1.0, max_litter_size=2,
        )
        sim = make_simulator(traits=traits)
        male = sim.spawn(Species.RABBIT, Location(1, 1), is_male=True, age=10, food_level=8)
        female = sim.spawn(Species.RABBIT, Location(0, 0), is_male=False, age=10, food_level=8)
        ctx = sim.make_context()
        act(sim, male, ctx)
        assert len(ctx.newborns) == 2
        act(sim, female, ctx)
        assert len(ctx.newborns) == 2

    def test_same_sex_do_not_mate(self, make_simulator, no_disease):
        """Partners must be of opposite sex."""
        traits = dict(no_disease)
        traits[Species.RABBIT] = dict(no_disease[Species.RABBIT], breeding_probability=1.0)
        sim = make_simulator(traits=traits)
        a = sim.spawn(Species.RABBIT, Location(1, 1), is_male=True, age=10, food_level=8)
        sim.spawn(Species.RABBIT, Location(0, 0), is_male=True, age=10, food_level=8)
        ctx = act(sim, a)
        assert ctx.newborns == []

    def test_too_young_to_breed(self, make_simulator, no_disease):
        """Agents below breeding age produce no young."""
        traits = dict(no_disease)
        traits[Species.RABBIT] = dict(no_disease[Species.RABBIT], breeding_probability=1.0)
        sim = make_simulator(traits=traits)
        a = sim.spawn(Species.RABBIT, Location(1, 1), is_male=True, age=1, food_level=8)
        sim.spawn(Species.RABBIT, Location(0, 0), is_male=False, age=1, food_level=8)
        ctx = act(sim, a)
        assert ctx.newborns == []

    @pytest.mark.parametrize("species,food", [
        (Species.FOX, 20),
        (Species.MEGALODON, 10),
        (Species.RABBIT, 4),
        (Species.WHALE, 37),
    ])
    def test_newborn_food_level(self, make_simulator, species, food):
        """Newborns start at their species' newborn food level."""
        sim = make_simulator()
        young = sim.spawn(species, Location(1, 1))
        assert young.age == 0
        assert young.food_level == food
