import sys
import os
import time
import csv
import random
import logging
import argparse
from typing import Dict, Any

# Add project root to path
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from puzzle_logic.grid_state import GridState
from puzzle_logic.generators.region_generator import RegionGenerator
from puzzle_logic.solvers.region_solver import RegionSolver
from puzzle_logic.solvers.solver_errors import PuzzleError
from puzzle_logic.validators import check_win_condition


def run_single_game(game_id: int, size: int, filled: float, rng: random.Random,
                    timeout: float = None) -> Dict[str, Any]:
    """
    Generates one puzzle, then solves it again from its remaining clues.
    """
    result = {
        "game_id": game_id,
        "size": f"{size}x{size}",
        "filled": filled,
        "generated": False, "generate_time": 0.0, "generate_nodes": 0,
        "solved": False, "solve_time": 0.0, "solve_nodes": 0, "solve_backtracks": 0,
        "error": "",
    }

    # 1. Generate
    generator = RegionGenerator(size, rng=rng, timeout=timeout)
    start = time.perf_counter()
    try:
        puzzle = generator.generate(filled)
        result["generated"] = True
    except PuzzleError as e:
        result["error"] = f"generate: {type(e).__name__}"
        return result
    finally:
        result["generate_time"] = time.perf_counter() - start
        result["generate_nodes"] = generator.last_stats.get("nodes_visited", 0)

    # 2. Re-solve from the remaining clues
    state = GridState.from_matrix(puzzle)
    solver = RegionSolver(state, timeout=timeout)
    try:
        solver.solve()
        result["solved"], _ = check_win_condition(state)
    except PuzzleError as e:
        result["error"] = f"solve: {type(e).__name__}"
    stats = solver.stats()
    result["solve_time"] = stats["time_taken"]
    result["solve_nodes"] = stats["nodes_visited"]
    result["solve_backtracks"] = stats["backtracks"]
    return result


def main():
    parser = argparse.ArgumentParser(description="Benchmark the region puzzle solver")
    parser.add_argument("--games", type=int, default=10, help="Number of games to run")
    parser.add_argument("--size", type=int, default=5, help="Grid size")
    parser.add_argument("--filled", type=float, default=0.5, help="Fraction of cells kept as clues")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible runs")
    parser.add_argument("--timeout", type=float, default=None, help="Solver timeout in seconds")
    parser.add_argument("--output", type=str, default="benchmark_results.csv", help="Output CSV file")
    parser.add_argument("--verbose", action="store_true", help="Log solver progress")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    rng = random.Random(args.seed)

    print(f"Starting Benchmark: {args.games} games, {args.size}x{args.size}, filled={args.filled}")

    results = []
    for i in range(args.games):
        print(f"Running Game {i+1}/{args.games}...", end="\r")
        results.append(run_single_game(i + 1, args.size, args.filled, rng, args.timeout))

    print(f"\nBenchmark Complete!")

    # Save to CSV
    keys = results[0].keys()
    with open(args.output, "w", newline="") as f:
        dict_writer = csv.DictWriter(f, fieldnames=keys)
        dict_writer.writeheader()
        dict_writer.writerows(results)

    print(f"Results saved to {args.output}")

    # Print Summary Table
    print("\nSummary Statistics:")
    print(f"{'Phase':<10} | {'Success Rate':<12} | {'Avg Time (s)':<12} | {'Avg Nodes':<10}")
    print("-" * 52)

    for phase, flag in [("generate", "generated"), ("solve", "solved")]:
        ok_count = sum(1 for r in results if r[flag])
        avg_time = sum(r[f"{phase}_time"] for r in results) / len(results)
        avg_nodes = sum(r[f"{phase}_nodes"] for r in results) / len(results)
        success_rate = (ok_count / len(results)) * 100

        print(f"{phase.upper():<10} | {success_rate:>11.1f}% | {avg_time:>12.4f} | {avg_nodes:>10.1f}")

if __name__ == "__main__":
    main()
