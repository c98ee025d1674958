import logging
import random
from typing import List, Optional

from puzzle_logic.grid import Grid
from puzzle_logic.grid_state import EMPTY, GridState
from puzzle_logic.solvers.region_solver import RegionSolver

logger = logging.getLogger(__name__)


class RegionGenerator:
    """
    Builds a puzzle in two steps:
    1. Seed one random value at one random cell and let the solver complete
       the grid around it.
    2. Empty a random sample of the solved cells until only the requested
       fraction of the board stays filled.

    The seed can make the grid unsolvable; UnsolvableError then propagates
    and the caller retries with a new seed.
    """
    def __init__(self, size: int, rng: Optional[random.Random] = None, max_value: Optional[int] = None,
                 timeout: Optional[float] = None, max_states: Optional[int] = None):
        Grid(size)  # validates the size up front
        self.size = size
        self.rng = rng or random.Random()
        self.max_value = max_value
        self.timeout = timeout
        self.max_states = max_states
        self.solution: Optional[List[List[int]]] = None
        self.last_stats = {}

    def generate(self, filled_fraction: float) -> List[List[int]]:
        if not 0.0 <= filled_fraction <= 1.0:
            raise ValueError(f"filled_fraction must be within [0, 1], got {filled_fraction}")

        state = self._solve_seeded_state()
        self.solution = state.to_matrix()

        total_cells = self.size * self.size
        # Half-up, so 4.5 cells keeps 5.
        keep = int(total_cells * filled_fraction + 0.5)
        filled_cells = [cell for cell in state.grid.all_cells() if state.get(cell) != EMPTY]
        to_reset = max(0, len(filled_cells) - keep)

        for cell in self.rng.sample(filled_cells, to_reset):
            state.set(cell, EMPTY)

        logger.info("Generated %dx%d puzzle keeping %d of %d cells", self.size, self.size,
                    len(filled_cells) - to_reset, total_cells)
        return state.to_matrix()

    def solve_seeded(self) -> List[List[int]]:
        """Step 1 alone: a fully solved grid grown from one random seed."""
        self.solution = self._solve_seeded_state().to_matrix()
        return self.solution

    def _solve_seeded_state(self) -> GridState:
        state = GridState.empty(self.size)
        cell = (self.rng.randrange(self.size), self.rng.randrange(self.size))
        value = self.rng.randint(1, self.size)
        state.set(cell, value)
        logger.debug("Seeding %s with %d", cell, value)

        solver = RegionSolver(state, max_value=self.max_value, timeout=self.timeout,
                              max_states=self.max_states)
        try:
            solver.solve()
        finally:
            self.last_stats = solver.stats()
            self.last_stats.update({"seed_cell": cell, "seed_value": value})
        return state
