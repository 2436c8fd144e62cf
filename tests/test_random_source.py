"""Tests for seeded and replayed random sources."""

import numpy as np
import pytest

from ecosim.core.random_source import GeneratedRandomSource, ReplayedRandomSource


class TestGeneratedRandomSource:
    """Test the numpy-backed random source."""

    def test_same_seed_same_sequence(self):
        """Two sources with the same seed produce identical draws."""
        a = GeneratedRandomSource(123)
        b = GeneratedRandomSource(123)
        assert [a.next_uniform() for _ in range(20)] == [b.next_uniform() for _ in range(20)]
        assert [a.next_int(0, 50) for _ in range(20)] == [b.next_int(0, 50) for _ in range(20)]

    def test_next_int_range(self):
        """Integers fall in [low, high)."""
        rng = GeneratedRandomSource(1)
        values = [rng.next_int(3, 7) for _ in range(500)]
        assert min(values) >= 3
        assert max(values) <= 6

    def test_roll_extremes(self):
        """Probability 0 never fires and probability 1 always does."""
        rng = GeneratedRandomSource(5)
        assert not any(rng.roll(0.0) for _ in range(200))
        assert all(rng.roll(1.0) for _ in range(200))

    def test_shuffle_is_permutation(self):
        """Shuffling keeps every element exactly once."""
        rng = GeneratedRandomSource(9)
        items = list(range(10))
        rng.shuffle(items)
        assert sorted(items) == list(range(10))

    def test_uniform_array_shape(self):
        """Uniform arrays have the requested shape and range."""
        rng = GeneratedRandomSource(2)
        draws = rng.next_uniform_array((4, 5))
        assert draws.shape == (4, 5)
        assert np.all((draws >= 0.0) & (draws < 1.0))


class TestReplayedRandomSource:
    """Test the replaying random source."""

    def test_replays_values_in_order(self):
        """Uniform draws come back in recorded order."""
        rng = ReplayedRandomSource([0.1, 0.2, 0.3])
        assert [rng.next_uniform() for _ in range(3)] == [0.1, 0.2, 0.3]
        assert rng.consumed == 3

    def test_next_int_scales_uniform(self):
        """Integers are scaled from the next recorded value."""
        rng = ReplayedRandomSource([0.0, 0.5, 0.999])
        assert rng.next_int(0, 36) == 0
        assert rng.next_int(0, 36) == 18
        assert rng.next_int(0, 36) == 35

    def test_exhausted_raises(self):
        """Running out of values is an error unless cycling."""
        rng = ReplayedRandomSource([0.4])
        rng.next_uniform()
        with pytest.raises(RuntimeError):
            rng.next_uniform()

    def test_cycle_and_rewind(self):
        """Cycling sources start over; rewind replays from the start."""
        rng = ReplayedRandomSource([0.1, 0.9], cycle=True)
        assert [rng.next_uniform() for _ in range(4)] == [0.1, 0.9, 0.1, 0.9]
        rng.rewind()
        assert rng.next_uniform() == 0.1

    def test_bool_and_roll_from_values(self):
        """Coin flips and rolls compare the recorded value."""
        rng = ReplayedRandomSource([0.2, 0.7, 0.3, 0.3])
        assert rng.next_bool() is True
        assert rng.next_bool() is False
        assert rng.roll(0.5)
        assert not rng.roll(0.3)
