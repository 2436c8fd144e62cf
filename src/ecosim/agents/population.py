"""
Agent arena and population order.

This module implements a Structure-of-Arrays (SoA) store for every agent in
a run. An agent is an index into the arrays; the field grid stores those
indices, never objects, so there is no reference cycle between agents and
the field.

Two collections are kept apart:
- the arena: every slot ever allocated, live or dead, addressed by index
- the order: the live population in action order (insertion order)

Agents created during a step get an arena slot (and a cell) immediately but
only join the order when the step is committed. Slots of dead agents are
recycled only after the order has been compacted, so an index never changes
identity in the middle of a step.
"""

from __future__ import annotations

import logging
from collections import Counter
from enum import Enum, auto
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from ecosim.landscape.location import Location
from ecosim.parameters.constants import SimulationConstants
from ecosim.parameters.species import Species

if TYPE_CHECKING:
    from ecosim.landscape.field import Field

logger = logging.getLogger(__name__)


class DeathCause(Enum):
    """Why an agent died."""
    OLD_AGE = auto()
    STARVATION = auto()
    DISEASE = auto()
    OVERCROWDING = auto()
    PREDATION = auto()


def _grow(array: np.ndarray, capacity: int, fill) -> np.ndarray:
    grown = np.full(capacity, fill, dtype=array.dtype)
    grown[:array.size] = array
    return grown


class Population:
    """
    Manages every agent of a run using numpy arrays indexed by arena slot.
    """

    def __init__(self, capacity: int = 1024):
        self._capacity = max(int(capacity), 1)

        # === Arrays (Structure of Arrays) ===
        self.species = np.zeros(self._capacity, dtype=np.int8)
        self.alive = np.zeros(self._capacity, dtype=bool)
        self.is_male = np.zeros(self._capacity, dtype=bool)
        self.infected = np.zeros(self._capacity, dtype=bool)
        self.age = np.zeros(self._capacity, dtype=np.int64)
        self.food_level = np.zeros(self._capacity, dtype=np.int64)
        self.row = np.full(self._capacity, -1, dtype=np.int32)
        self.col = np.full(self._capacity, -1, dtype=np.int32)
        # Step number of the last mating, so a pair mates once per step
        self.last_mated = np.full(self._capacity, -1, dtype=np.int64)

        self._size = 0                 # High-water mark of allocated slots
        self._free: List[int] = []     # Recyclable slots (released at commit)
        self._order: List[int] = []    # Live agents in action order

        # Statistics
        self.births = 0
        self.deaths: Counter = Counter()

    # =========================================================================
    # Allocation
    # =========================================================================

    def _ensure_capacity(self) -> None:
        if self._size < self._capacity:
            return
        capacity = self._capacity * 2
        self.species = _grow(self.species, capacity, 0)
        self.alive = _grow(self.alive, capacity, False)
        self.is_male = _grow(self.is_male, capacity, False)
        self.infected = _grow(self.infected, capacity, False)
        self.age = _grow(self.age, capacity, 0)
        self.food_level = _grow(self.food_level, capacity, 0)
        self.row = _grow(self.row, capacity, -1)
        self.col = _grow(self.col, capacity, -1)
        self.last_mated = _grow(self.last_mated, capacity, -1)
        logger.debug("Population arena grown from %d to %d slots", self._capacity, capacity)
        self._capacity = capacity

    def _allocate(self) -> int:
        if self._free:
            return self._free.pop()
        self._ensure_capacity()
        idx = self._size
        self._size += 1
        return idx

    def create(
        self,
        species: Species,
        location: Location,
        field: Field,
        is_male: bool,
        age: int = 0,
        food_level: int = 0,
        infected: bool = False,
    ) -> int:
        """
        Allocate a live agent and place it on the field.

        The agent is not part of the action order until add() or commit().

        Returns:
            Arena index of the new agent
        """
        idx = self._allocate()
        self.species[idx] = int(species)
        self.alive[idx] = True
        self.is_male[idx] = is_male
        self.infected[idx] = infected
        self.age[idx] = age
        self.food_level[idx] = food_level
        self.last_mated[idx] = -1
        self.row[idx] = location.row
        self.col[idx] = location.col
        field.place(idx, location)
        return idx

    def add(self, idx: int) -> None:
        """Append an agent to the action order."""
        self._order.append(idx)

    # =========================================================================
    # Per-agent state
    # =========================================================================

    def species_of(self, idx: int) -> Species:
        return Species(int(self.species[idx]))

    def is_alive(self, idx: int) -> bool:
        return bool(self.alive[idx])

    def location_of(self, idx: int) -> Optional[Location]:
        """Cell of a live agent, or None once it has died."""
        if not self.alive[idx]:
            return None
        return Location(int(self.row[idx]), int(self.col[idx]))

    def move(self, idx: int, location: Location, field: Field) -> None:
        """Relocate an agent, keeping grid and arena in agreement."""
        old = self.location_of(idx)
        if old is not None and field.object_at(old) == idx:
            field.clear(old)
        self.row[idx] = location.row
        self.col[idx] = location.col
        field.place(idx, location)

    def kill(self, idx: int, field: Field, cause: DeathCause) -> None:
        """
        Mark an agent dead and remove it from the grid at once.

        It stays in the action order until the next compaction.
        """
        location = self.location_of(idx)
        if location is None:
            return
        if field.object_at(location) == idx:
            field.clear(location)
        self.alive[idx] = False
        self.row[idx] = -1
        self.col[idx] = -1
        self.deaths[cause] += 1

    # =========================================================================
    # Step commit
    # =========================================================================

    def compact(self) -> int:
        """
        Drop dead agents from the action order and recycle their slots.

        Returns:
            Number of agents removed
        """
        kept = [idx for idx in self._order if self.alive[idx]]
        removed = len(self._order) - len(kept)
        if removed:
            dead = set(self._order) - set(kept)
            self._free.extend(sorted(dead, reverse=True))
            self._order = kept
        return removed

    def commit(self, newborns: Iterable[int]) -> int:
        """
        End-of-step bookkeeping: compact, then append surviving newborns.

        Newborns that died before the step ended (eaten, for instance) never
        join the order; their slots are recycled.

        Returns:
            Number of newborns admitted
        """
        self.compact()
        admitted = 0
        for idx in newborns:
            if self.alive[idx]:
                self._order.append(idx)
                admitted += 1
            else:
                self._free.append(idx)
        self.births += admitted
        return admitted

    def clear(self) -> None:
        """Forget every agent and reset statistics."""
        self.alive[:] = False
        self.row[:] = -1
        self.col[:] = -1
        self.last_mated[:] = -1
        self._size = 0
        self._free.clear()
        self._order.clear()
        self.births = 0
        self.deaths.clear()

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def order(self) -> List[int]:
        """Copy of the action order."""
        return list(self._order)

    def __len__(self) -> int:
        return len(self._order)

    @property
    def population_size(self) -> int:
        """Number of live agents in the action order."""
        return int(np.count_nonzero(self.alive[self._order])) if self._order else 0

    def live_indices(self) -> np.ndarray:
        order = np.asarray(self._order, dtype=np.int64)
        if order.size == 0:
            return order
        return order[self.alive[order]]

    def count_by_species(self) -> Dict[Species, int]:
        """Live agent count for every species (zeros included)."""
        live = self.live_indices()
        counts = np.bincount(self.species[live], minlength=len(Species))
        return {species: int(counts[species]) for species in Species}

    def infected_count(self) -> int:
        live = self.live_indices()
        return int(np.count_nonzero(self.infected[live])) if live.size else 0

    def occupancy_species(self, field: Field) -> np.ndarray:
        """Grid of species codes, EMPTY_CELL where a cell is free."""
        grid = field.occupancy
        out = np.full(grid.shape, SimulationConstants.EMPTY_CELL, dtype=np.int8)
        occupied = grid != SimulationConstants.EMPTY_CELL
        out[occupied] = self.species[grid[occupied]]
        return out

    def to_dataframe(self) -> pd.DataFrame:
        """Export live agents to a pandas DataFrame (action order)."""
        live = self.live_indices()
        return pd.DataFrame({
            "id": live,
            "species": [Species(int(code)).label for code in self.species[live]],
            "row": self.row[live],
            "col": self.col[live],
            "age": self.age[live],
            "food_level": self.food_level[live],
            "is_male": self.is_male[live],
            "infected": self.infected[live],
        })
