"""
Puzzle API
==========
Pure-function boundary consumed by transport and persistence layers.
Both functions take and return plain size x size lists of ints (0 = empty)
and raise the errors from puzzle_logic.solvers.solver_errors.
"""

import logging
import random
from typing import List, Optional, Sequence

from puzzle_logic.grid_state import GridState
from puzzle_logic.generators.region_generator import RegionGenerator
from puzzle_logic.solvers.region_solver import RegionSolver
from puzzle_logic.solvers.solver_errors import ControlledStateExplosionError, UnsolvableError

logger = logging.getLogger(__name__)


def solve(matrix: Sequence[Sequence[int]], *, max_value: Optional[int] = None,
          timeout: Optional[float] = None, max_states: Optional[int] = None) -> List[List[int]]:
    """
    Return the fully resolved copy of `matrix`. The input is never mutated.
    """
    state = GridState.from_matrix(matrix)
    solver = RegionSolver(state, max_value=max_value, timeout=timeout, max_states=max_states)
    return solver.solve()


def generate(size: int, filled_fraction: float, *, rng: Optional[random.Random] = None,
             max_attempts: int = 1, max_value: Optional[int] = None,
             timeout: Optional[float] = None, max_states: Optional[int] = None) -> List[List[int]]:
    """
    Generate a puzzle of `size` x `size` keeping `filled_fraction` of the cells.

    A random seed can make the grid unsolvable; up to `max_attempts` seeds are
    drawn from `rng` before the last error is raised.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")

    generator = RegionGenerator(size, rng=rng, max_value=max_value, timeout=timeout,
                                max_states=max_states)
    for attempt in range(1, max_attempts + 1):
        try:
            return generator.generate(filled_fraction)
        except (UnsolvableError, ControlledStateExplosionError) as exc:
            if attempt == max_attempts:
                raise
            logger.warning("Seed %s rejected on attempt %d/%d: %s",
                           generator.last_stats.get("seed_cell"), attempt, max_attempts, exc)
