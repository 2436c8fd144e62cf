"""
Simulation constants.

Fixed values that should not be changed during a simulation run.
"""

from __future__ import annotations


class SimulationConstants:
    """
    Fixed simulation constants.

    Tunable values (probabilities, krill rates, clock settings) live in
    SimulationParameters; this class only holds values the model relies on
    structurally.
    """

    # Field size used when the configured dimensions are not positive
    DEFAULT_DEPTH: int = 130
    DEFAULT_WIDTH: int = 200

    # Grid slot value meaning "no occupant"
    EMPTY_CELL: int = -1

    # Moore neighbourhood offsets (row, col), centre excluded
    NEIGHBOUR_OFFSETS = (
        (-1, -1), (-1, 0), (-1, 1),
        (0, -1),           (0, 1),
        (1, -1),  (1, 0),  (1, 1),
    )

    # Steps for run_long_simulation()
    LONG_RUN_STEPS: int = 4000
