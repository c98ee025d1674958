import copy
import random
import unittest
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from benchmark_solvers import run_single_game
from puzzle_logic import api
from puzzle_logic.generators import demo_puzzle
from puzzle_logic.solvers.solver_errors import (
    ImpossibleStateError,
    InvalidSizeError,
    PuzzleError,
    UnsolvableError,
)


class TestApiSolve(unittest.TestCase):
    def test_returns_new_matrix(self):
        puzzle, _ = demo_puzzle.get_demo_puzzle_3x3()
        before = copy.deepcopy(puzzle)
        solution = api.solve(puzzle)
        self.assertEqual(puzzle, before)
        self.assertIsNot(solution, puzzle)
        self.assertEqual(solution, [[1, 3, 3], [3, 1, 3], [3, 3, 1]])

    def test_malformed_input(self):
        for matrix in ([[0]], [], [[0, 0], [0, 0, 0]], [[0, 0, 0], [0, 0, 0]], [[0, -1], [0, 0]]):
            with self.assertRaises(InvalidSizeError):
                api.solve(matrix)

    def test_errors_share_a_base(self):
        with self.assertRaises(PuzzleError):
            api.solve([[1, 1], [0, 0]])
        with self.assertRaises(ImpossibleStateError):
            api.solve([[1, 1], [0, 0]])
        with self.assertRaises(UnsolvableError):
            api.solve([[2, 2], [0, 0]])

    def test_limits_are_forwarded(self):
        with self.assertRaises(UnsolvableError):
            api.solve([[0, 0], [0, 0]], max_value=2)


class TestBenchmark(unittest.TestCase):
    def test_run_single_game_reports_fields(self):
        result = run_single_game(1, 3, 0.5, random.Random(3), timeout=10.0)
        for key in ("game_id", "size", "filled", "generated", "generate_time",
                    "generate_nodes", "solved", "solve_time", "solve_nodes", "error"):
            self.assertIn(key, result)
        self.assertEqual(result["size"], "3x3")
        if result["generated"]:
            self.assertTrue(result["solved"], result["error"])
        else:
            self.assertTrue(result["error"].startswith("generate:"))


if __name__ == '__main__':
    unittest.main()
