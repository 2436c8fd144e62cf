"""Shared fixtures for the ecosim test suite."""

import pytest

from ecosim.core.random_source import RandomSource
from ecosim.core.simulation import Simulator
from ecosim.parameters import SimulationParameters, Species


class FixedRandomSource(RandomSource):
    """
    Deterministic random source for scripted scenarios.

    Every uniform draw returns the same value, so roll(p) succeeds exactly
    when p > uniform. Integer draws return high - 1, which makes the
    Fisher-Yates shuffle the identity: adjacency lists come back in
    neighbour-offset order.
    """

    def __init__(self, uniform: float = 0.5, coin: bool = True):
        self.uniform = uniform
        self.coin = coin

    def next_uniform(self) -> float:
        return self.uniform

    def next_int(self, low: int, high: int) -> int:
        return high - 1

    def next_bool(self) -> bool:
        return self.coin


@pytest.fixture
def fixed_rng():
    """Random source returning 0.5 for every uniform draw."""
    return FixedRandomSource(0.5)


@pytest.fixture
def make_simulator(fixed_rng):
    """
    Factory for small, empty simulators with calm weather.

    Trait overrides are given per species:
        make_simulator(3, 3, traits={Species.RABBIT: {"breeding_probability": 1.0}})
    """
    def _make(depth=3, width=3, rng=None, traits=None, **overrides):
        settings = dict(
            depth=depth,
            width=width,
            rain_probability=0.0,
            drought_probability=0.0,
        )
        settings.update(overrides)
        params = SimulationParameters(**settings)
        for species, changes in (traits or {}).items():
            params = params.with_traits(species, **changes)
        return Simulator(params, rng=rng or fixed_rng, populate=False)

    return _make


@pytest.fixture
def no_disease():
    """Trait overrides switching disease off for every species."""
    return {
        species: {
            "infection_probability": 0.0,
            "disease_death_probability": 0.0,
            "mating_infection_probability": 0.0,
        }
        for species in Species
    }
