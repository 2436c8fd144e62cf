"""
Simulation clock.

The TimeManager counts steps and hours, derives the day number and decides
whether it is day or night. One step is one hour. The day/night split is a
fixed window: hours-of-day night_start_hour..hours_per_day and
0..night_end_hour are night, everything in between is day.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ecosim.parameters.simulation_params import SimulationParameters


@dataclass(frozen=True)
class TimeState:
    """
    Immutable snapshot of current simulation time.

    Attributes:
        step: Steps taken since the last reset
        hour: Hours elapsed (never wraps; the hour of day is hour % hours_per_day)
        day: Day counter (starts at 1)
        is_day: Day flag for this hour
    """
    step: int = 0
    hour: int = 6
    day: int = 1
    is_day: bool = True


class TimeManager:
    """
    Step, hour and day bookkeeping with a day/night window.

    Example:
        tm = TimeManager(params)
        state = tm.advance()
        field.set_day(state.is_day)
    """

    def __init__(self, params: SimulationParameters):
        self._hours_per_day = params.hours_per_day
        self._start_hour = params.start_hour
        self._night_start = params.night_start_hour
        self._night_end = params.night_end_hour
        self.reset()

    def reset(self) -> TimeState:
        """Back to step 0, day 1, at the start hour."""
        self._state = TimeState(
            step=0,
            hour=self._start_hour,
            day=1,
            is_day=self.is_daytime_hour(self._start_hour),
        )
        return self._state

    def is_daytime_hour(self, hour: int) -> bool:
        """True unless the hour of day falls in the night window."""
        time = hour % self._hours_per_day
        return not (time >= self._night_start or time <= self._night_end)

    def advance(self) -> TimeState:
        """Advance one step (one hour); a new day starts every hours_per_day."""
        step = self._state.step + 1
        hour = self._state.hour + 1
        day = self._state.day
        if hour % self._hours_per_day == 0:
            day += 1
        self._state = TimeState(
            step=step,
            hour=hour,
            day=day,
            is_day=self.is_daytime_hour(hour),
        )
        return self._state

    def is_day_boundary(self) -> bool:
        """True if the last advance started a new day."""
        return self._state.step > 0 and self._state.hour % self._hours_per_day == 0

    @property
    def state(self) -> TimeState:
        return self._state

    @property
    def step(self) -> int:
        return self._state.step

    @property
    def hour(self) -> int:
        return self._state.hour

    @property
    def hour_of_day(self) -> int:
        return self._state.hour % self._hours_per_day

    @property
    def day(self) -> int:
        return self._state.day

    @property
    def is_daytime(self) -> bool:
        return self._state.is_day
