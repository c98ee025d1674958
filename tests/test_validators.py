import unittest
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from puzzle_logic.grid_state import GridState
from puzzle_logic.generators import demo_puzzle
from puzzle_logic.validators import (
    check_adjacent_values,
    check_region_sizes,
    check_win_condition,
    is_valid_placement,
    iter_components,
)


class TestValidators(unittest.TestCase):
    def test_demo_solutions_are_wins(self):
        for matrix in (demo_puzzle.SOLVED_2X2, demo_puzzle.SOLVED_2X2_SINGLE_REGION,
                       demo_puzzle.SOLVED_3X3, demo_puzzle.SOLVED_4X4):
            ok, reason = check_win_condition(GridState.from_matrix(matrix))
            self.assertTrue(ok, f"{matrix}: {reason}")

    def test_empty_cell_is_not_a_win(self):
        ok, reason = check_win_condition(GridState.from_matrix([[1, 3], [3, 0]]))
        self.assertFalse(ok)
        self.assertIn("empty", reason)

    def test_value_above_cell_count(self):
        ok, _ = check_win_condition(GridState.from_matrix([[5, 5], [5, 5]]))
        self.assertFalse(ok)

    def test_oversized_region(self):
        state = GridState.from_matrix([[2, 2], [2, 0]])
        ok, _ = check_region_sizes(state, allow_incomplete=True)
        self.assertFalse(ok)

    def test_incomplete_region(self):
        state = GridState.from_matrix([[3, 0], [0, 0]])
        self.assertFalse(check_region_sizes(state)[0])
        self.assertTrue(check_region_sizes(state, allow_incomplete=True)[0])

    def test_adjacent_values_differing_by_one(self):
        ok, reason = check_adjacent_values(GridState.from_matrix([[1, 2], [0, 0]]))
        self.assertFalse(ok)
        self.assertIn("differ by one", reason)
        self.assertTrue(check_adjacent_values(GridState.from_matrix([[1, 3], [0, 0]]))[0])

    def test_diagonal_cells_do_not_interact(self):
        state = GridState.from_matrix([[1, 3], [3, 3]])
        self.assertTrue(check_adjacent_values(state)[0])
        state = GridState.from_matrix([[2, 0], [0, 1]])
        self.assertTrue(check_adjacent_values(state)[0])

    def test_is_valid_placement(self):
        state = GridState.from_matrix([[0, 3], [0, 0]])
        self.assertFalse(is_valid_placement(state, (0, 0), 2))
        self.assertFalse(is_valid_placement(state, (0, 0), 4))
        self.assertTrue(is_valid_placement(state, (0, 0), 3))
        self.assertTrue(is_valid_placement(state, (1, 0), 2))

    def test_iter_components(self):
        state = GridState.from_matrix(demo_puzzle.SOLVED_4X4)
        components = list(iter_components(state))
        self.assertEqual(sorted(value for value, _ in components), [1, 1, 1, 1, 3, 3, 6])
        self.assertEqual(sum(len(cells) for _, cells in components), 16)
        self.assertEqual(components[0][0], 3)
        self.assertEqual(set(components[0][1]), {(0, 0), (0, 1), (1, 0)})


if __name__ == '__main__':
    unittest.main()
