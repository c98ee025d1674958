"""
Grid State
==========
Mutable value assignment over a Grid. 0 marks an empty cell.
"""

from typing import Dict, List, Sequence

from puzzle_logic.grid import Cell, Grid
from puzzle_logic.solvers.solver_errors import InvalidSizeError

EMPTY = 0


class GridState:
    def __init__(self, grid: Grid):
        self.grid = grid
        self._values: Dict[Cell, int] = {}

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[int]]) -> "GridState":
        """
        Build a state from a size x size matrix of non-negative ints.
        Raises InvalidSizeError for anything that is not such a matrix.
        """
        try:
            rows = [list(row) for row in matrix]
        except TypeError:
            raise InvalidSizeError("Matrix must be a sequence of rows") from None

        size = len(rows)
        state = cls(Grid(size))
        for x, row in enumerate(rows):
            if len(row) != size:
                raise InvalidSizeError(
                    f"Matrix must be square: row {x} has {len(row)} cells, expected {size}"
                )
            for y, value in enumerate(row):
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise InvalidSizeError(
                        f"Cell ({x}, {y}) holds {value!r}; values must be non-negative integers"
                    )
                if value != EMPTY:
                    state._values[(x, y)] = value
        return state

    @classmethod
    def empty(cls, size: int) -> "GridState":
        return cls(Grid(size))

    @property
    def size(self) -> int:
        return self.grid.size

    def get(self, cell: Cell) -> int:
        return self._values.get(cell, EMPTY)

    def set(self, cell: Cell, value: int) -> None:
        if value == EMPTY:
            self._values.pop(cell, None)
        else:
            self._values[cell] = value

    def to_matrix(self) -> List[List[int]]:
        size = self.grid.size
        return [[self.get((x, y)) for y in range(size)] for x in range(size)]

    def empty_cells(self) -> List[Cell]:
        return [cell for cell in self.grid.all_cells() if self.get(cell) == EMPTY]

    def is_complete(self) -> bool:
        return len(self._values) == self.grid.size * self.grid.size

    def involved(self, cell: Cell) -> List[Cell]:
        """
        Flood fill from `cell` over 4-connected cells holding the same value.
        Returns the whole component, `cell` included. Empty cells give the
        surrounding empty area.
        """
        value = self.get(cell)
        involved = [cell]
        checked = {cell}
        not_checked = [cell]

        while not_checked:
            current = not_checked.pop()
            for neighbor in self.grid.neighbors(current):
                if neighbor not in checked and self.get(neighbor) == value:
                    checked.add(neighbor)
                    involved.append(neighbor)
                    not_checked.append(neighbor)
        return involved

    def __repr__(self) -> str:
        rows = "\n".join(" ".join(str(v) for v in row) for row in self.to_matrix())
        return f"GridState(size={self.grid.size})\n{rows}"
