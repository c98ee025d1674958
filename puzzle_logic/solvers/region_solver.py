"""
Region Solver
=============
Constraint propagation followed by an iterative backtracking search.

Phases:
- Propagating: split the filled cells into regions and compute, for every
  empty cell, the values it could legally take
- Searching: depth-first assignment of the empty cells using an explicit
  choice-point stack, pruned by region-size consistency

Limits:
- max_states explored nodes (env PUZZLE_SAFE_LIMIT)
- timeout in wall-clock seconds (env PUZZLE_SOLVER_TIMEOUT)
- stop_event to request a clean stop from outside
"""

import logging
import threading
import time
from collections import deque
from typing import Any, Dict, List, Optional, Set

from puzzle_logic.grid import Cell
from puzzle_logic.grid_state import EMPTY, GridState
from puzzle_logic.region import Region
from puzzle_logic.validators import (
    check_adjacent_values,
    check_win_condition,
    is_valid_placement,
    iter_components,
)
from puzzle_logic.solvers.solver_errors import (
    ControlledStateExplosionError,
    ImpossibleStateError,
    PuzzleError,
    UnsolvableError,
    resolve_max_value,
    resolve_safe_limit,
    resolve_timeout,
)

logger = logging.getLogger(__name__)

READY = "Ready"
PROPAGATING = "Propagating"
SEARCHING = "Searching"
SOLVED = "Solved"
UNSOLVABLE = "Unsolvable"


class RegionSolver:
    """
    Solves one GridState in place.

    A solver runs once: build a new one for every grid.
    """

    YIELD_CHECK_INTERVAL = 200     # check timeout every N nodes

    def __init__(self, state: GridState, max_value: Optional[int] = None,
                 timeout: Optional[float] = None, max_states: Optional[int] = None,
                 stop_event: Optional[threading.Event] = None):
        self.state = state
        self.grid = state.grid
        self.max_value = resolve_max_value(max_value)
        self.timeout = resolve_timeout(timeout)
        self.max_states = resolve_safe_limit(max_states)
        self.stop_event = stop_event or threading.Event()

        self.status = READY
        self.regions: List[Region] = []
        self.open_regions: Dict[Cell, Region] = {}
        self.possible_values: Dict[Cell, List[int]] = {}

        self.nodes_visited = 0
        self.backtracks = 0
        self.time_taken = 0.0
        self._start_time = 0.0

    # ── Public API ─────────────────────────────────────────────

    def solve(self) -> List[List[int]]:
        """
        Fill every empty cell. Returns the solved matrix.

        Raises ImpossibleStateError when the input already breaks the rules,
        UnsolvableError when no assignment exists and
        ControlledStateExplosionError when a search limit is crossed.
        """
        if self.status != READY:
            raise RuntimeError("RegionSolver.solve() runs once; build a new solver")

        self._start_time = time.perf_counter()
        try:
            self.status = PROPAGATING
            self.refresh_state()
            self.status = SEARCHING
            solved = self._search()
        except PuzzleError:
            self.status = UNSOLVABLE
            raise
        finally:
            self.time_taken = time.perf_counter() - self._start_time

        if not solved:
            self.status = UNSOLVABLE
            logger.info("Grid %dx%d unsolvable after %d nodes", self.grid.size,
                        self.grid.size, self.nodes_visited)
            raise UnsolvableError("Puzzle is unsolvable")

        self.status = SOLVED
        logger.info("Solved %dx%d grid: %d nodes, %d backtracks, %.4fs", self.grid.size,
                    self.grid.size, self.nodes_visited, self.backtracks, self.time_taken)
        return self.state.to_matrix()

    def stats(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "nodes_visited": self.nodes_visited,
            "backtracks": self.backtracks,
            "time_taken": self.time_taken,
            "open_regions": len(self.regions),
        }

    # ── Propagation ────────────────────────────────────────────

    def refresh_state(self) -> Dict[Cell, List[int]]:
        """Rebuild the regions and the candidate-value table from scratch."""
        self._find_unfilled_regions()

        ok, reason = check_adjacent_values(self.state)
        if not ok:
            raise ImpossibleStateError(reason)

        empty_cells = self.state.empty_cells()

        # A fresh 1 is always a complete region of its own.
        for cell in empty_cells:
            if all(self.state.get(n) != 1 for n in self.grid.neighbors(cell)):
                self._add_possible_value(cell, 1)

        for region in self.regions:
            self._find_possible_values(region)

        checked: Set[Cell] = set()
        for cell in empty_cells:
            if cell in checked:
                continue
            empty_group = self.state.involved(cell)
            checked.update(empty_group)
            self._find_additional_values(empty_group)

        logger.debug("Propagation: %d open regions, %d empty cells, %d without candidates",
                     len(self.regions), len(empty_cells),
                     sum(1 for c in empty_cells if not self.possible_values.get(c)))
        return self.possible_values

    def _find_unfilled_regions(self):
        self.regions = []
        self.open_regions = {}
        self.possible_values = {}

        for value, component in iter_components(self.state):
            if len(component) > value:
                raise ImpossibleStateError(
                    f"Region of {value} at {component[0]} already has {len(component)} cells",
                    cell=component[0], value=value,
                )
            if len(component) < value:
                region = Region(value, component)
                self.regions.append(region)
                for cell in component:
                    self.open_regions[cell] = region

    def _find_possible_values(self, region: Region):
        """
        Breadth-first trace from the committed cells through empty cells.
        Every step spends one unit of the region's missing count. Crossing an
        accepted connector merges the group behind it into the trace, and the
        budget restarts from the merged group's own shortfall.
        """
        value = region.value
        members = set(region.initial_cells)
        budget: Dict[Cell, int] = {cell: region.missing() for cell in region.initial_cells}
        queue = deque(region.initial_cells)

        while queue:
            current = queue.popleft()
            remaining = budget[current]
            if remaining <= 0:
                continue
            for neighbor in sorted(self.grid.neighbors(current)):
                if self.state.get(neighbor) != EMPTY:
                    continue

                if self._touches_other_group(neighbor, value, members):
                    merged = self._try_connection(neighbor, region)
                    if merged is None:
                        continue
                    members.update(merged)
                    reached = merged
                    next_budget = value - len(merged)
                elif self._add_possible_value(neighbor, value):
                    region.add_candidate(neighbor)
                    reached = [neighbor]
                    next_budget = remaining - 1
                else:
                    continue

                for cell in reached:
                    if next_budget > budget.get(cell, -1):
                        budget[cell] = next_budget
                        queue.append(cell)

    def _try_connection(self, cell: Cell, region: Region) -> Optional[List[Cell]]:
        """
        Record `cell` as a connector when bridging keeps the merge within size.
        Returns the merged component (`cell` included) or None.
        """
        value = region.value
        self.state.set(cell, value)
        merged = self.state.involved(cell)
        self.state.set(cell, EMPTY)

        if len(merged) <= value and self._add_possible_value(cell, value):
            region.add_connector(cell)
            return merged
        return None

    def _find_additional_values(self, empty_group: List[Cell]):
        """Values for brand-new regions formed inside one empty area."""
        upper = min(len(empty_group) + 1, self.max_value)
        for value in range(2, upper + 1):
            allowed = [
                cell for cell in empty_group
                if all(self.state.get(n) != value for n in self.grid.neighbors(cell))
            ]
            if len(allowed) >= value:
                for cell in allowed:
                    self._add_possible_value(cell, value)

    def _add_possible_value(self, cell: Cell, value: int) -> bool:
        if not is_valid_placement(self.state, cell, value):
            return False
        values = self.possible_values.setdefault(cell, [])
        if value not in values:
            values.append(value)
        return True

    def _touches_other_group(self, cell: Cell, value: int, members: Set[Cell]) -> bool:
        for neighbor in self.grid.neighbors(cell):
            if neighbor not in members and self.state.get(neighbor) == value:
                return True
        return False

    # ── Search ─────────────────────────────────────────────────

    def _search(self) -> bool:
        free_cells = self.state.empty_cells()
        choices = [0] * len(free_cells)
        index = 0
        solved = False

        try:
            while True:
                if index == len(free_cells):
                    ok, reason = check_win_condition(self.state)
                    if ok:
                        solved = True
                        return True
                    logger.debug("Complete assignment rejected: %s", reason)
                    if index == 0:
                        return False
                    index -= 1
                    continue

                cell = free_cells[index]
                candidates = self.possible_values.get(cell, ())
                placed = False
                while choices[index] < len(candidates):
                    value = candidates[choices[index]]
                    choices[index] += 1
                    self._count_node()
                    self.state.set(cell, value)
                    if self._is_consistent(cell):
                        placed = True
                        break

                if placed:
                    index += 1
                    continue

                # Exhausted: undo and resume the previous choice point.
                choices[index] = 0
                self.state.set(cell, EMPTY)
                self.backtracks += 1
                if index == 0:
                    return False
                index -= 1
        finally:
            if not solved:
                for cell in free_cells:
                    self.state.set(cell, EMPTY)

    def _count_node(self):
        self.nodes_visited += 1

        if self.stop_event.is_set():
            raise ControlledStateExplosionError(
                "Search stopped on request",
                observed=self.nodes_visited, context="stop_event",
            )

        if self.nodes_visited > self.max_states:
            raise ControlledStateExplosionError(
                safe_limit=self.max_states, observed=self.nodes_visited, context="max_states",
            )

        if self.nodes_visited % self.YIELD_CHECK_INTERVAL == 0:
            elapsed = time.perf_counter() - self._start_time
            if elapsed >= self.timeout:
                raise ControlledStateExplosionError(
                    f"Search timed out after {elapsed:.2f}s",
                    safe_limit=self.timeout, observed=elapsed, context="timeout",
                )

    def _is_consistent(self, cell: Cell) -> bool:
        value = self.state.get(cell)
        if not is_valid_placement(self.state, cell, value):
            return False
        if len(self.state.involved(cell)) > value:
            return False
        return self._regions_viable()

    def _regions_viable(self) -> bool:
        """Every region below its value must still be able to grow to it."""
        for value, component in iter_components(self.state):
            if len(component) > value:
                return False
            if len(component) < value:
                region = self._collect_growth(Region(value, component))
                if not region.is_viable():
                    return False
        return True

    def _collect_growth(self, region: Region) -> Region:
        """
        Gather the empty cells the region could still absorb: cells that list
        its value as a candidate and have no neighbour one away.
        Stops as soon as the region is known to be viable.
        """
        value = region.value
        members = set(region.initial_cells)
        visited = set(members)
        stack = list(region.initial_cells)

        while stack and not region.is_viable():
            current = stack.pop()
            for neighbor in self.grid.neighbors(current):
                if neighbor in visited or self.state.get(neighbor) != EMPTY:
                    continue
                visited.add(neighbor)

                if value not in self.possible_values.get(neighbor, ()):
                    continue
                if not is_valid_placement(self.state, neighbor, value):
                    continue

                if self._touches_other_group(neighbor, value, members):
                    region.add_connector(neighbor)
                    continue
                region.add_candidate(neighbor)
                stack.append(neighbor)
        return region
