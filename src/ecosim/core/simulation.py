"""
Main simulation controller.

This module contains the Simulator class which orchestrates the ecosystem
model: it owns the field and the agent population, advances the clock and
the weather, lets every live agent act, admits newborns, regrows krill and
publishes the resulting state to a view.

A step runs in two phases. First every agent that is alive when its turn
comes acts, in population order; deaths take effect on the grid at once but
the population order is only compacted afterwards. Then the step is
committed: dead agents leave the order and newborns join it, so they first
act on the next step.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from tqdm import tqdm

from ecosim.agents.base import Agent
from ecosim.agents.population import DeathCause, Population
from ecosim.behavior import create_behaviors
from ecosim.behavior.context import StepContext
from ecosim.core.random_source import GeneratedRandomSource, RandomSource
from ecosim.core.time_manager import TimeManager, TimeState
from ecosim.core.view import FieldSnapshot, FieldStats, SimulationView
from ecosim.landscape.field import Field
from ecosim.landscape.location import Location
from ecosim.parameters.constants import SimulationConstants
from ecosim.parameters.simulation_params import SimulationParameters
from ecosim.parameters.species import Species

logger = logging.getLogger(__name__)


class Simulator:
    """
    Main simulation controller.

    Orchestrates the ecosystem model, managing:
    - Agent lifecycle (bootstrap, stepping, births, removal)
    - Clock, day/night and weather
    - Krill regrowth
    - Publishing state to the view and stopping when it is no longer viable
    """

    def __init__(
        self,
        params: Optional[SimulationParameters] = None,
        rng: Optional[RandomSource] = None,
        view: Optional[SimulationView] = None,
        populate: bool = True,
    ):
        """
        Initialize the simulation.

        Args:
            params: Simulation parameters configuration
            rng: Random source; a seeded GeneratedRandomSource if omitted
            view: Collaborator receiving snapshots (FieldStats if omitted)
            populate: Fill the field with a random initial population
        """
        self.params = params if params is not None else SimulationParameters()

        if rng is None:
            seed = self.params.random_seed
            if seed is None:
                seed = 42  # Default seed for reproducibility
            rng = GeneratedRandomSource(seed)
        self.rng = rng

        self.field = Field(self.params, self.rng)
        self.population = Population(capacity=max(self.params.depth * self.params.width // 2, 16))
        self.behaviors = create_behaviors(self.params)
        self.time_manager = TimeManager(self.params)
        self.view = view if view is not None else FieldStats()

        self._snapshot: Optional[FieldSnapshot] = None
        self._history: List[Dict[str, Any]] = []
        self._is_running = False

        self.reset(populate=populate)

    # =========================================================================
    # Setup
    # =========================================================================

    def reset(self, populate: bool = True) -> None:
        """
        Reset the simulation to a starting position.

        Clears the field, restores krill and weather, rewinds the clock to
        step 0 / day 1 / hour 6, optionally repopulates, and publishes the
        starting state.
        """
        state = self.time_manager.reset()
        self.population.clear()
        self.field.clear_all()
        self.field.reset_krill()
        self.field.weather.reset()
        self.field.set_day(state.is_day)
        self._history.clear()
        self.view.reset()

        if populate:
            self.populate()

        self._publish()

    def populate(self) -> None:
        """
        Randomly fill the field with an initial population.

        Each cell, in row-major order, rolls the creation probabilities in
        fixed order (Fox, Rabbit, Megalodon, Whale, Jellyfish) with a fresh
        draw per candidate; the first success places that species, otherwise
        the cell stays empty. Krill is reset to the starting stock.
        """
        self.field.clear_all()
        self.field.reset_krill()
        probabilities = self.params.creation_probabilities
        for row in range(self.field.depth):
            for col in range(self.field.width):
                for species, probability in probabilities.items():
                    if self.rng.roll(probability):
                        idx = self.behaviors[species].spawn(
                            self.population, self.field, self.rng,
                            Location(row, col), random_age=True,
                        )
                        self.population.add(idx)
                        break

        counts = self.population.count_by_species()
        logger.info(
            "Populated %dx%d field with %d agents (%s)",
            self.field.depth, self.field.width, len(self.population),
            ", ".join(f"{s.label}={n}" for s, n in counts.items()),
        )

    def spawn(
        self,
        species: Species,
        location: Location,
        random_age: bool = False,
        is_male: Optional[bool] = None,
        age: Optional[int] = None,
        food_level: Optional[int] = None,
        infected: bool = False,
    ) -> Agent:
        """
        Place one agent on a free cell between steps.

        The agent joins the end of the population order. Unset attributes
        come from the species' usual newborn (or random initial) state.
        """
        if not self.field.is_free(location):
            raise ValueError(f"Cannot spawn at {location}: cell is occupied")
        idx = self.behaviors[species].spawn(
            self.population, self.field, self.rng, location, random_age=random_age,
        )
        if is_male is not None:
            self.population.is_male[idx] = is_male
        if age is not None:
            self.population.age[idx] = age
        if food_level is not None:
            self.population.food_level[idx] = food_level
        self.population.infected[idx] = infected
        self.population.add(idx)
        return Agent(self.population, idx)

    # =========================================================================
    # Stepping
    # =========================================================================

    def make_context(self) -> StepContext:
        """Step context for the current step and weather."""
        return StepContext(
            field=self.field,
            population=self.population,
            rng=self.rng,
            behaviors=self.behaviors,
            step=self.time_manager.step,
            disease_spread_rate=self.field.disease_spread_rate,
        )

    def simulate_one_step(self) -> FieldSnapshot:
        """
        Run the simulation for a single step.

        Order: clock and day/night, weather, every live agent acts,
        commit (drop dead, admit newborns), krill regrowth, publish.
        """
        # 1-2. Clock and day/night flag
        state = self.time_manager.advance()
        self.field.set_day(state.is_day)

        # 3. Weather (fixes this step's disease spread rate)
        self.field.update_weather()

        # 4. Let all live agents act
        ctx = self.make_context()
        population = self.population
        for idx in population.order:
            if population.alive[idx]:
                self.behaviors[population.species_of(idx)].act(ctx, idx)

        # 5. Remove the dead, admit the newborns
        acted = len(population)
        admitted = population.commit(ctx.newborns)
        removed = acted + admitted - len(population)

        # 6. Krill regrowth
        self.field.grow_krill()

        # 7. Publish
        snapshot = self._publish()
        logger.debug(
            "step=%d day=%d hour=%d weather=%s pop=%d removed=%d born=%d",
            state.step, state.day, state.hour, snapshot.weather,
            snapshot.population, removed, admitted,
        )
        return snapshot

    def simulate(self, num_steps: int, progress: bool = False) -> int:
        """
        Run the simulation from its current state for the given number of steps.

        Stops early as soon as the view reports the state as not viable.

        Args:
            num_steps: Maximum number of steps to run
            progress: Show progress bar

        Returns:
            Number of steps actually run
        """
        self._is_running = True
        logger.info(f"Running up to {num_steps} steps from step {self.time_manager.step}")

        iterator = range(num_steps)
        if progress:
            iterator = tqdm(iterator, desc="Simulating", unit="steps")

        steps_run = 0
        for _ in iterator:
            if not self._is_running:
                break
            if not self.view.is_viable(self._snapshot):
                logger.info(
                    "Population no longer viable at step %d (day %d)",
                    self.time_manager.step, self.time_manager.day,
                )
                break
            self.simulate_one_step()
            steps_run += 1

        self._is_running = False
        logger.info(f"Run finished after {steps_run} steps, population {len(self.population)}")
        return steps_run

    def run_long_simulation(self, progress: bool = False) -> int:
        """Run for a reasonably long period (4000 steps)."""
        return self.simulate(SimulationConstants.LONG_RUN_STEPS, progress=progress)

    def stop(self) -> None:
        """Stop the simulation before its next step."""
        self._is_running = False

    # =========================================================================
    # Publishing and statistics
    # =========================================================================

    def _publish(self) -> FieldSnapshot:
        state = self.time_manager.state
        snapshot = FieldSnapshot(
            step=state.step,
            day=state.day,
            hour=state.hour,
            is_day=state.is_day,
            weather=self.field.weather.label,
            occupancy=self.population.occupancy_species(self.field),
            krill=self.field.krill,
            counts=self.population.count_by_species(),
            infected=self.population.infected_count(),
        )
        self._snapshot = snapshot
        self.view.report(snapshot)
        self._record_history(snapshot)
        return snapshot

    def _record_history(self, snapshot: FieldSnapshot) -> None:
        """Record current state to history."""
        deaths = self.population.deaths
        self._history.append({
            "step": snapshot.step,
            "day": snapshot.day,
            "weather": snapshot.weather,
            "population": snapshot.population,
            "births": self.population.births,
            "deaths": sum(deaths.values()),
        })

    def get_population_history(self) -> Dict[str, List]:
        """Get population history as dictionary of lists."""
        keys = ("step", "day", "weather", "population", "births", "deaths")
        return {key: [h[key] for h in self._history] for key in keys}

    def get_statistics(self) -> Dict[str, Any]:
        """Get current simulation statistics."""
        deaths = self.population.deaths
        stats: Dict[str, Any] = {
            "step": self.time_manager.step,
            "day": self.time_manager.day,
            "weather": self.field.weather.label,
            "population": len(self.population),
            "births_total": self.population.births,
            "deaths_total": sum(deaths.values()),
        }
        for cause in DeathCause:
            stats[f"deaths_{cause.name.lower()}"] = deaths[cause]
        return stats

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def snapshot(self) -> Optional[FieldSnapshot]:
        """State published after the last step (or reset)."""
        return self._snapshot

    @property
    def time(self) -> TimeState:
        return self.time_manager.state

    @property
    def step(self) -> int:
        return self.time_manager.step

    @property
    def day(self) -> int:
        return self.time_manager.day

    def agent(self, idx: int) -> Agent:
        """Handle for one arena index."""
        return Agent(self.population, idx)

    @property
    def agents(self) -> List[Agent]:
        """Handles for the population, in action order."""
        return [Agent(self.population, idx) for idx in self.population.order]

    def agent_at(self, location: Location) -> Optional[Agent]:
        idx = self.field.object_at(location)
        return None if idx is None else Agent(self.population, idx)

    @property
    def population_size(self) -> int:
        return len(self.population)
