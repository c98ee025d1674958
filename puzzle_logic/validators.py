"""
Grid Validators
===============
Functions to check the puzzle rules on a GridState.
Each check returns (bool, reason) so callers can surface why a grid fails.
"""

from typing import Iterator, List, Tuple

from puzzle_logic.grid import Cell
from puzzle_logic.grid_state import EMPTY, GridState


def iter_components(state: GridState) -> Iterator[Tuple[int, List[Cell]]]:
    """
    Yield (value, cells) for every maximal same-value group of filled cells,
    in row-major order of each group's first cell.
    """
    visited = set()
    for cell in state.grid.all_cells():
        value = state.get(cell)
        if value == EMPTY or cell in visited:
            continue
        component = state.involved(cell)
        visited.update(component)
        yield value, component


def check_region_sizes(state: GridState, allow_incomplete: bool = False) -> Tuple[bool, str]:
    """
    Every filled group must hold exactly as many cells as its value.
    With allow_incomplete, groups below their value pass.
    """
    for value, component in iter_components(state):
        if len(component) > value:
            return False, f"Region of {value} at {component[0]} has {len(component)} cells"
        if len(component) < value and not allow_incomplete:
            return False, f"Region of {value} at {component[0]} has only {len(component)} cells"
    return True, "OK"


def check_adjacent_values(state: GridState) -> Tuple[bool, str]:
    """No two neighbouring filled cells may differ by exactly one."""
    for cell in state.grid.all_cells():
        value = state.get(cell)
        if value == EMPTY:
            continue
        for neighbor in state.grid.neighbors(cell):
            other = state.get(neighbor)
            if other != EMPTY and abs(other - value) == 1:
                return False, f"Cells {cell} and {neighbor} differ by one"
    return True, "OK"


def is_valid_placement(state: GridState, cell: Cell, value: int) -> bool:
    """True when `value` at `cell` does not sit next to a value one away."""
    for neighbor in state.grid.neighbors(cell):
        other = state.get(neighbor)
        if other != EMPTY and abs(other - value) == 1:
            return False
    return True


def check_win_condition(state: GridState) -> Tuple[bool, str]:
    """
    Check if the grid is a finished solution.
    Conditions:
    1. No empty cell, every value within [1, size^2].
    2. Every region holds exactly its value.
    3. No neighbours differ by exactly one.
    """
    limit = state.size * state.size
    for cell in state.grid.all_cells():
        value = state.get(cell)
        if value == EMPTY:
            return False, f"Cell {cell} is empty"
        if value > limit:
            return False, f"Cell {cell} holds {value}, above {limit}"

    ok, reason = check_region_sizes(state)
    if not ok:
        return False, reason

    ok, reason = check_adjacent_values(state)
    if not ok:
        return False, reason

    return True, "Solved"
