"""
Field: the rectangular grid the agents live on.

The field owns three layers:
- occupancy: at most one agent per cell, stored as an arena index
- krill: the renewable resource prey feed on, one integer stock per cell
- environment: the Weather process and the day/night flag

Agents are never stored here directly. The grid holds indices into the
population arena (see ecosim.agents.population), with
SimulationConstants.EMPTY_CELL marking a free cell.
"""

from __future__ import annotations

import numpy as np
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from ecosim.landscape.location import Location
from ecosim.landscape.weather import Weather, WeatherMode
from ecosim.parameters.constants import SimulationConstants

if TYPE_CHECKING:
    from ecosim.core.random_source import RandomSource
    from ecosim.parameters.simulation_params import SimulationParameters


EMPTY = SimulationConstants.EMPTY_CELL


class OutOfBoundsError(IndexError):
    """A location outside the field reached a field operation."""


class Field:
    """
    Grid of agent slots and krill stocks, plus weather and time of day.

    Adjacency queries return neighbours in a freshly shuffled order on every
    call, so "take the first match" picks an unbiased random neighbour.
    """

    def __init__(self, params: SimulationParameters, rng: RandomSource):
        """
        Create an empty field with krill at its starting stock.

        Args:
            params: Simulation parameters (dimensions, krill and weather settings)
            rng: Shared random source used for shuffling and krill growth
        """
        self.params = params
        self._rng = rng
        self._depth = params.depth
        self._width = params.width

        self._grid = np.full((self._depth, self._width), EMPTY, dtype=np.int64)
        self._krill = np.zeros((self._depth, self._width), dtype=np.int64)

        self._weather = Weather(params, rng)
        self._is_day = True

        # Unshuffled neighbour lists, built on first use per cell
        self._neighbours: Dict[Location, Tuple[Location, ...]] = {}

        self.reset_krill()

    # =========================================================================
    # Dimensions and bounds
    # =========================================================================

    @property
    def depth(self) -> int:
        """Number of rows."""
        return self._depth

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def shape(self) -> Tuple[int, int]:
        return (self._depth, self._width)

    def is_valid(self, location: Location) -> bool:
        """Check if location is within grid bounds."""
        return 0 <= location.row < self._depth and 0 <= location.col < self._width

    def _check(self, location: Location) -> None:
        if not self.is_valid(location):
            raise OutOfBoundsError(
                f"Location {location} outside field of {self._depth}x{self._width}"
            )

    # =========================================================================
    # Occupancy
    # =========================================================================

    def place(self, agent_id: int, location: Location) -> None:
        """
        Put an agent (by arena index) at a location.

        An agent already at that location is silently lost from the grid.
        """
        self._check(location)
        self._grid[location.row, location.col] = agent_id

    def clear(self, location: Location) -> None:
        """Empty one cell."""
        self._check(location)
        self._grid[location.row, location.col] = EMPTY

    def clear_all(self) -> None:
        """Empty every cell."""
        self._grid.fill(EMPTY)

    def object_at(self, location: Location) -> Optional[int]:
        """Arena index of the agent at a location, or None if the cell is free."""
        self._check(location)
        agent_id = int(self._grid[location.row, location.col])
        return None if agent_id == EMPTY else agent_id

    def object_at_cell(self, row: int, col: int) -> Optional[int]:
        """Same as object_at, addressed by row and column."""
        return self.object_at(Location(row, col))

    def is_free(self, location: Location) -> bool:
        self._check(location)
        return self._grid[location.row, location.col] == EMPTY

    @property
    def occupancy(self) -> np.ndarray:
        """Read-only view of the arena-index grid (EMPTY_CELL where free)."""
        view = self._grid.view()
        view.flags.writeable = False
        return view

    # =========================================================================
    # Adjacency
    # =========================================================================

    def _neighbours_of(self, location: Location) -> Tuple[Location, ...]:
        cached = self._neighbours.get(location)
        if cached is None:
            self._check(location)
            row, col = location
            cached = tuple(
                Location(row + dr, col + dc)
                for dr, dc in SimulationConstants.NEIGHBOUR_OFFSETS
                if 0 <= row + dr < self._depth and 0 <= col + dc < self._width
            )
            self._neighbours[location] = cached
        return cached

    def adjacent_locations(self, location: Location) -> List[Location]:
        """
        In-bounds neighbours of a location, in random order.

        The centre is never included. Corners have 3 neighbours, edges 5
        and interior cells 8 (fewer on fields narrower than 3 cells).
        """
        locations = list(self._neighbours_of(location))
        self._rng.shuffle(locations)
        return locations

    def free_adjacent_locations(self, location: Location) -> List[Location]:
        """Unoccupied neighbours of a location, in random order."""
        return [loc for loc in self.adjacent_locations(location)
                if self._grid[loc.row, loc.col] == EMPTY]

    def free_adjacent_location(self, location: Location) -> Optional[Location]:
        """One unoccupied neighbour, or None if the location is boxed in."""
        free = self.free_adjacent_locations(location)
        return free[0] if free else None

    def random_adjacent_location(self, location: Location) -> Location:
        """A random in-bounds neighbour, occupied or not."""
        return self.adjacent_locations(location)[0]

    # =========================================================================
    # Krill
    # =========================================================================

    def reset_krill(self) -> None:
        """Set every cell back to the starting krill stock."""
        self._krill.fill(self.params.starting_krill)

    def krill_at(self, location: Location) -> int:
        """Krill stock at a location."""
        self._check(location)
        return int(self._krill[location.row, location.col])

    def set_krill(self, location: Location, amount: int) -> None:
        """Overwrite the stock at one cell, clamped to [0, max_krill]."""
        self._check(location)
        self._krill[location.row, location.col] = min(max(amount, 0), self.params.max_krill)

    def eat_krill(self, appetite: int, location: Location) -> int:
        """
        Take up to `appetite` krill from a cell.

        Returns:
            The amount actually eaten, min(appetite, stock). The stock never
            goes negative and a non-positive appetite eats nothing.
        """
        self._check(location)
        available = int(self._krill[location.row, location.col])
        eaten = min(max(appetite, 0), available)
        self._krill[location.row, location.col] = available - eaten
        return eaten

    def krill_growth_probability(self) -> float:
        """Per-cell growth chance under the current weather."""
        mode = self._weather.mode
        if mode is WeatherMode.RAINING:
            return self.params.rain_krill_growth_probability
        if mode is WeatherMode.DROUGHT:
            return self.params.drought_krill_growth_probability
        return self.params.krill_growth_probability

    def grow_krill(self) -> None:
        """
        Regrow krill field-wide.

        Each cell below the cap independently gains krill_growth_rate with
        the weather's growth probability; the result is capped at max_krill.
        """
        max_krill = self.params.max_krill
        draws = self._rng.next_uniform_array(self._krill.shape)
        grow = (draws < self.krill_growth_probability()) & (self._krill < max_krill)
        self._krill[grow] += self.params.krill_growth_rate
        np.minimum(self._krill, max_krill, out=self._krill)

    @property
    def krill(self) -> np.ndarray:
        """Copy of the krill grid."""
        return self._krill.copy()

    @property
    def total_krill(self) -> int:
        return int(self._krill.sum())

    # =========================================================================
    # Environment
    # =========================================================================

    @property
    def weather(self) -> Weather:
        return self._weather

    def update_weather(self) -> None:
        """Advance the weather by one step."""
        self._weather.tick()

    @property
    def disease_spread_rate(self) -> float:
        """Per-neighbour exposure chance under the current weather."""
        if self._weather.is_raining:
            return self.params.rain_disease_spread_rate
        return self.params.disease_spread_rate

    @property
    def is_day(self) -> bool:
        return self._is_day

    def set_day(self, is_day: bool) -> None:
        self._is_day = is_day

    def toggle_day(self) -> None:
        """Switch between day and night."""
        self._is_day = not self._is_day
