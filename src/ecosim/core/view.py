"""
View / viability collaborators.

The simulator publishes a FieldSnapshot after every step and asks its view
whether the run is still worth continuing. Rendering is not part of this
package; FieldStats is a headless view that keeps per-step statistics.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping

import numpy as np
import pandas as pd

from ecosim.parameters.species import Species

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldSnapshot:
    """
    State of the field at the end of a step.

    Attributes:
        step: Step number
        day: Day counter
        hour: Hours elapsed
        is_day: Day flag
        weather: Weather label ("Normal", "Rain", "Drought")
        occupancy: Species code per cell, EMPTY_CELL where free
        krill: Krill stock per cell
        counts: Live agents per species
        infected: Live infected agents
    """
    step: int
    day: int
    hour: int
    is_day: bool
    weather: str
    occupancy: np.ndarray
    krill: np.ndarray
    counts: Mapping[Species, int]
    infected: int

    @property
    def population(self) -> int:
        return sum(self.counts.values())

    def count(self, species: Species) -> int:
        return self.counts.get(species, 0)


class SimulationView(ABC):
    """Interface for anything the simulator reports to."""

    @abstractmethod
    def report(self, snapshot: FieldSnapshot) -> None:
        """Receive the state published after a step (and after a reset)."""
        pass

    @abstractmethod
    def is_viable(self, snapshot: FieldSnapshot) -> bool:
        """Whether the run should continue from this state."""
        pass

    def reset(self) -> None:
        """Called when the simulator returns to its starting state."""
        pass


class FieldStats(SimulationView):
    """
    Headless view recording one statistics row per published snapshot.

    A run is viable while more than one species is present.
    """

    def __init__(self, min_species: int = 2):
        self.min_species = min_species
        self._history: List[Dict[str, Any]] = []

    def report(self, snapshot: FieldSnapshot) -> None:
        row: Dict[str, Any] = {
            "step": snapshot.step,
            "day": snapshot.day,
            "hour": snapshot.hour,
            "is_day": snapshot.is_day,
            "weather": snapshot.weather,
            "population": snapshot.population,
            "infected": snapshot.infected,
            "krill": int(snapshot.krill.sum()),
        }
        for species in Species:
            row[species.label.lower()] = snapshot.count(species)
        self._history.append(row)

    def is_viable(self, snapshot: FieldSnapshot) -> bool:
        present = sum(1 for count in snapshot.counts.values() if count > 0)
        return present >= self.min_species

    def reset(self) -> None:
        self._history.clear()

    @property
    def history(self) -> List[Dict[str, Any]]:
        return list(self._history)

    def to_dataframe(self) -> pd.DataFrame:
        """History as a DataFrame, one row per step."""
        return pd.DataFrame(self._history)
