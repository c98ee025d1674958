"""
Grid
====
Immutable square geometry shared by every state of one solve.
Cells are plain (x, y) tuples: x indexes the matrix row, y the column.
"""

from typing import Dict, FrozenSet, Iterator, Tuple

from puzzle_logic.solvers.solver_errors import InvalidSizeError

Cell = Tuple[int, int]

MIN_SIZE = 2
DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class Grid:
    """Square board of `size` x `size` cells with 4-directional adjacency."""

    def __init__(self, size: int):
        if isinstance(size, bool) or not isinstance(size, int):
            raise InvalidSizeError(f"Grid size must be an integer, got {size!r}")
        if size < MIN_SIZE:
            raise InvalidSizeError(f"Minimum grid size is {MIN_SIZE}, got {size}")
        self.size = size
        self._neighbor_cache: Dict[Cell, FrozenSet[Cell]] = {}

    def contains(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.size and 0 <= y < self.size

    def all_cells(self) -> Iterator[Cell]:
        """Yield every cell in row-major order."""
        for x in range(self.size):
            for y in range(self.size):
                yield (x, y)

    def neighbors(self, cell: Cell) -> FrozenSet[Cell]:
        cached = self._neighbor_cache.get(cell)
        if cached is not None:
            return cached

        x, y = cell
        found = []
        for dx, dy in DIRECTIONS:
            neighbor = (x + dx, y + dy)
            if self.contains(neighbor):
                found.append(neighbor)
        neighbors = frozenset(found)
        self._neighbor_cache[cell] = neighbors
        return neighbors

    def __repr__(self) -> str:
        return f"Grid(size={self.size})"
