"""
Demo Puzzles
============
Handcrafted solved grids, checked by hand against both rules:
- every region holds exactly as many cells as its value
- no neighbours differ by exactly one

Puzzles are derived by emptying a fixed set of cells, so the result is the
same on every run.
"""

from typing import Iterable, List, Tuple

from puzzle_logic.grid import Cell

Matrix = List[List[int]]


SOLVED_2X2 = [
    [1, 3],
    [3, 3],
]

SOLVED_2X2_SINGLE_REGION = [
    [4, 4],
    [4, 4],
]

SOLVED_3X3 = [
    [3, 3, 1],
    [3, 1, 3],
    [1, 3, 3],
]

SOLVED_4X4 = [
    [3, 3, 1, 3],
    [3, 1, 3, 3],
    [1, 6, 6, 6],
    [6, 6, 6, 1],
]

# A 6 region split in two by the hole at (2, 2); the hole is a connector.
HOLES_4X4 = ((0, 0), (0, 2), (1, 1), (2, 2), (3, 3))


def punch_holes(solution: Matrix, cells: Iterable[Cell]) -> Matrix:
    """Copy of `solution` with the given cells emptied."""
    puzzle = [list(row) for row in solution]
    for x, y in cells:
        puzzle[x][y] = 0
    return puzzle


def get_demo_puzzle_3x3() -> Tuple[Matrix, Matrix]:
    """Corners and centre of the 3x3 solution removed."""
    holes = ((0, 0), (0, 2), (1, 1), (2, 0), (2, 2))
    return punch_holes(SOLVED_3X3, holes), [list(row) for row in SOLVED_3X3]


def get_demo_puzzle_4x4() -> Tuple[Matrix, Matrix]:
    return punch_holes(SOLVED_4X4, HOLES_4X4), [list(row) for row in SOLVED_4X4]
