import unittest
import random
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from puzzle_logic import api
from puzzle_logic.grid_state import GridState
from puzzle_logic.generators.region_generator import RegionGenerator
from puzzle_logic.solvers.solver_errors import InvalidSizeError, UnsolvableError
from puzzle_logic.validators import check_win_condition


class SeededCellRandom(random.Random):
    """Random whose seed cell and seed value are fixed up front."""

    def randrange(self, *args, **kwargs):
        return self.coords.pop(0)

    def randint(self, a, b):
        return self.values.pop(0)


def seeded_rng(coords, values):
    rng = SeededCellRandom(0)
    rng.coords = list(coords)
    rng.values = list(values)
    return rng


def count_filled(matrix):
    return sum(1 for row in matrix for value in row if value)


class TestRegionGenerator(unittest.TestCase):
    def test_size_validated_up_front(self):
        with self.assertRaises(InvalidSizeError):
            RegionGenerator(1)

    def test_fraction_out_of_range(self):
        generator = RegionGenerator(3, rng=random.Random(1))
        for fraction in (1.5, -0.1):
            with self.assertRaises(ValueError):
                generator.generate(fraction)

    def test_seed_one_in_corner_2x2(self):
        generator = RegionGenerator(2, rng=seeded_rng([0, 0], [1]))
        self.assertEqual(generator.solve_seeded(), [[1, 3], [3, 3]])
        self.assertEqual(generator.last_stats["seed_cell"], (0, 0))
        self.assertEqual(generator.last_stats["seed_value"], 1)
        self.assertEqual(generator.last_stats["status"], "Solved")

    def test_unsolvable_seed_propagates(self):
        generator = RegionGenerator(2, rng=seeded_rng([0, 0], [2]))
        with self.assertRaises(UnsolvableError):
            generator.generate(1.0)
        self.assertEqual(generator.last_stats["status"], "Unsolvable")
        self.assertIsNone(generator.solution)

    def test_keeps_requested_fraction(self):
        generator = RegionGenerator(2, rng=seeded_rng([0, 0], [1]))
        puzzle = generator.generate(0.5)
        self.assertEqual(count_filled(puzzle), 2)
        self.assertEqual(generator.solution, [[1, 3], [3, 3]])
        for row_in, row_out in zip(puzzle, generator.solution):
            for given, solved in zip(row_in, row_out):
                if given:
                    self.assertEqual(given, solved)

    def test_half_cell_rounds_up(self):
        # 9 cells at 0.5 is 4.5 clues.
        puzzle = RegionGenerator(3, rng=seeded_rng([1, 1], [1])).generate(0.5)
        self.assertEqual(count_filled(puzzle), 5)

    def test_full_and_empty_fractions(self):
        full = RegionGenerator(3, rng=seeded_rng([1, 1], [1])).generate(1.0)
        ok, reason = check_win_condition(GridState.from_matrix(full))
        self.assertTrue(ok, reason)
        self.assertEqual(full[1][1], 1)

        generator = RegionGenerator(3, rng=seeded_rng([1, 1], [1]))
        self.assertEqual(generator.generate(0.0), [[0] * 3 for _ in range(3)])
        self.assertEqual(generator.solution, full)

    def test_generated_puzzle_resolves(self):
        puzzle = RegionGenerator(4, rng=seeded_rng([0, 0], [1])).generate(0.5)
        self.assertEqual(count_filled(puzzle), 8)

        solution = api.solve(puzzle)
        ok, reason = check_win_condition(GridState.from_matrix(solution))
        self.assertTrue(ok, reason)


class TestApiGenerate(unittest.TestCase):
    def test_retries_rejected_seed(self):
        rng = seeded_rng([0, 0, 0, 0], [2, 1])
        with self.assertLogs("puzzle_logic.api", level="WARNING") as logs:
            puzzle = api.generate(2, 1.0, rng=rng, max_attempts=2)
        self.assertEqual(puzzle, [[1, 3], [3, 3]])
        self.assertIn("attempt 1/2", logs.output[0])

    def test_last_error_raised(self):
        rng = seeded_rng([0, 0, 0, 0], [2, 2])
        with self.assertRaises(UnsolvableError):
            api.generate(2, 1.0, rng=rng, max_attempts=2)

    def test_single_attempt_by_default(self):
        rng = seeded_rng([0, 0, 0, 0], [2, 1])
        with self.assertRaises(UnsolvableError):
            api.generate(2, 1.0, rng=rng)

    def test_attempts_must_be_positive(self):
        with self.assertRaises(ValueError):
            api.generate(3, 0.5, max_attempts=0)


if __name__ == '__main__':
    unittest.main()
