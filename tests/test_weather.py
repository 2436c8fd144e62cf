"""Tests for the weather state machine."""

from ecosim.core.random_source import ReplayedRandomSource
from ecosim.landscape.weather import Weather, WeatherMode
from ecosim.parameters import SimulationParameters


class TestWeather:
    """Test weather transitions and durations."""

    def test_starts_normal(self):
        """A new weather process is Normal with no spell."""
        weather = Weather(SimulationParameters(), ReplayedRandomSource([]))
        assert weather.mode is WeatherMode.NORMAL
        assert weather.label == "Normal"
        assert weather.duration == 0

    def test_stays_normal_when_rolls_fail(self):
        """Failed rain and drought rolls leave the weather Normal."""
        weather = Weather(SimulationParameters(), ReplayedRandomSource([0.5, 0.5]))
        weather.tick()
        assert weather.is_normal

    def test_rain_lasts_its_duration(self):
        """Forced rain lasts 1..36 steps, then returns to Normal."""
        # Rain roll succeeds, duration draw 0.5 -> 18 + 1
        weather = Weather(SimulationParameters(), ReplayedRandomSource([0.0, 0.5]))
        weather.tick()
        assert weather.is_raining
        assert weather.label == "Rain"
        assert 0 < weather.duration <= 36
        assert weather.duration == 19

        for _ in range(weather.duration - 1):
            weather.tick()
            assert weather.is_raining
        weather.tick()
        assert weather.is_normal
        assert weather.elapsed == 0

    def test_drought_only_when_rain_fails(self):
        """Drought is rolled only after the rain roll fails."""
        weather = Weather(SimulationParameters(), ReplayedRandomSource([0.9, 0.0, 0.0]))
        weather.tick()
        assert weather.is_drought
        assert weather.label == "Drought"
        assert weather.duration == 1
        weather.tick()
        assert weather.is_normal

    def test_reset(self):
        """reset() returns to Normal."""
        weather = Weather(SimulationParameters(), ReplayedRandomSource([0.0, 0.5]))
        weather.tick()
        weather.reset()
        assert weather.is_normal
        assert weather.duration == 0
