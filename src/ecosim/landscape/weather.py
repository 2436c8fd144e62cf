"""
Weather process.

A three-state machine (Normal, Raining, Drought) advanced once per
simulation step. Raining and Drought last a random number of steps and then
fall back to Normal; new spells only start from Normal.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ecosim.core.random_source import RandomSource
    from ecosim.parameters.simulation_params import SimulationParameters


class WeatherMode(Enum):
    """Weather states; values are the labels shown to views."""
    NORMAL = "Normal"
    RAINING = "Rain"
    DROUGHT = "Drought"


class Weather:
    """
    Weather state machine.

    Invariant: while not NORMAL, 0 <= elapsed < duration; while NORMAL,
    elapsed == duration == 0.
    """

    def __init__(self, params: SimulationParameters, rng: RandomSource):
        self._rain_probability = params.rain_probability
        self._drought_probability = params.drought_probability
        self._max_steps = params.max_weather_steps
        self._rng = rng
        self.reset()

    def reset(self) -> None:
        """Return to normal conditions."""
        self._mode = WeatherMode.NORMAL
        self._elapsed = 0
        self._duration = 0

    def tick(self) -> None:
        """
        Advance the weather by one step.

        From NORMAL, roll for rain and, only if that fails, for drought. A
        new spell lasts between 1 and max_weather_steps steps. Otherwise count
        the current spell down and reset once it has run its full duration.
        """
        if self._mode is WeatherMode.NORMAL:
            if self._rng.roll(self._rain_probability):
                self._start(WeatherMode.RAINING)
            elif self._rng.roll(self._drought_probability):
                self._start(WeatherMode.DROUGHT)
            return

        self._elapsed += 1
        if self._elapsed >= self._duration:
            self.reset()

    def _start(self, mode: WeatherMode) -> None:
        self._mode = mode
        self._elapsed = 0
        # Zero-length spells would never end
        self._duration = self._rng.next_int(0, self._max_steps) + 1

    @property
    def mode(self) -> WeatherMode:
        return self._mode

    @property
    def elapsed(self) -> int:
        """Steps the current spell has lasted so far."""
        return self._elapsed

    @property
    def duration(self) -> int:
        """Total length of the current spell (0 when normal)."""
        return self._duration

    @property
    def is_raining(self) -> bool:
        return self._mode is WeatherMode.RAINING

    @property
    def is_drought(self) -> bool:
        return self._mode is WeatherMode.DROUGHT

    @property
    def is_normal(self) -> bool:
        return self._mode is WeatherMode.NORMAL

    @property
    def label(self) -> str:
        """Display label: "Normal", "Rain" or "Drought"."""
        return self._mode.value

    def __repr__(self) -> str:
        return f"Weather({self.label}, {self._elapsed}/{self._duration})"
