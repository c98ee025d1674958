"""
Region
======
A connected group of equal-valued cells that has not reached its value yet,
together with the empty cells that could still complete it.
"""

from typing import List, Sequence

from puzzle_logic.grid import Cell


class Region:
    def __init__(self, value: int, initial_cells: Sequence[Cell]):
        self._value = value
        self.initial_cells: List[Cell] = list(initial_cells)
        self.candidates: List[Cell] = []
        self.connectors: List[Cell] = []

    @property
    def value(self) -> int:
        return self._value

    def add_candidate(self, cell: Cell) -> None:
        if cell not in self.candidates:
            self.candidates.append(cell)

    def add_connector(self, cell: Cell) -> None:
        if cell not in self.connectors:
            self.connectors.append(cell)

    def missing(self) -> int:
        """Cells still needed to reach the target size."""
        return self._value - len(self.initial_cells)

    def potential_size(self) -> int:
        return len(self.initial_cells) + len(self.candidates) + len(self.connectors)

    def is_viable(self) -> bool:
        # A connector merges in cells that are not counted here.
        return self.potential_size() >= self._value or bool(self.connectors)

    def __repr__(self) -> str:
        return (
            f"Region(value={self._value}, size={len(self.initial_cells)}, "
            f"potential={self.potential_size()})"
        )
