"""
Presentation Chart Generator
=============================
Charts puzzle generation and re-solving effort across grid sizes and clue
densities.
Run:  python generate_presentation_charts.py --games 5
Output: presentation_charts/ folder with 4 PNG files.
"""

import sys
import os
import random
import logging
import argparse
import numpy as np
from typing import Dict, Any, List, Tuple
from collections import defaultdict

# Ensure project root is on the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend for file output
import matplotlib.pyplot as plt

from benchmark_solvers import run_single_game

PHASES = ("generate", "solve")
PHASE_STYLE = {
    # phase: (label, success flag in the result row, bar colour)
    "generate": ("Generate", "generated", "#E8590C"),
    "solve": ("Re-solve", "solved", "#1C7ED6"),
}
DEFAULT_CONFIGS = [(3, 0.5), (4, 0.5), (4, 0.3), (5, 0.5), (5, 0.3), (6, 0.5)]
QUICK_CONFIGS = [(3, 0.5), (4, 0.3)]

Results = Dict[str, List[Dict[str, Any]]]


def setup_style():
    plt.rcParams.update({
        "axes.grid": True,
        "axes.spines.top": False,
        "axes.spines.right": False,
        "grid.alpha": 0.3,
        "font.size": 12,
        "axes.titlesize": 15,
        "axes.titleweight": "bold",
        "savefig.dpi": 160,
        "savefig.bbox": "tight",
    })


def run_benchmark(games_per_config: int, configs: List[Tuple[int, float]],
                  seed: int = None, timeout: float = None) -> Results:
    """
    Play `games_per_config` games for every (size, filled_fraction) pair.
    Rows are grouped under keys such as "4x4_50%", in config order.
    """
    results = defaultdict(list)
    rng = random.Random(seed)
    total = len(configs) * games_per_config

    for index, (size, filled) in enumerate(configs):
        key = f"{size}x{size}_{filled:.0%}"
        for game in range(games_per_config):
            done = index * games_per_config + game + 1
            print(f"  [{done}/{total}] {key} game {game + 1}/{games_per_config} ...", end="\r")
            results[key].append(run_single_game(game + 1, size, filled, rng, timeout))

    print()
    return results


def success_rate(rows: List[Dict[str, Any]], phase: str) -> float:
    flag = PHASE_STYLE[phase][1]
    return 100.0 * sum(1 for r in rows if r[flag]) / len(rows) if rows else 0.0


def phase_mean(rows: List[Dict[str, Any]], phase: str, metric: str) -> float:
    return float(np.mean([r[f"{phase}_{metric}"] for r in rows])) if rows else 0.0


def grouped_bar_chart(results: Results, out_path: str, measure, title: str,
                      ylabel: str, label_fmt: str, log_scale: bool = False):
    """One bar per phase for every config; `measure(rows, phase)` gives the height."""
    configs = list(results)
    x = np.arange(len(configs))
    width = 0.38

    fig, ax = plt.subplots(figsize=(10, 6))
    for offset, phase in enumerate(PHASES):
        label, _, colour = PHASE_STYLE[phase]
        heights = [measure(results[cfg], phase) for cfg in configs]
        bars = ax.bar(x + offset * width, heights, width, label=label, color=colour, zorder=3)
        ax.bar_label(bars, labels=[label_fmt.format(h) for h in heights], fontsize=9)

    ax.set_xticks(x + width / 2)
    ax.set_xticklabels([cfg.replace("_", "\n") for cfg in configs])
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    if log_scale:
        ax.set_yscale("symlog")
    ax.legend(loc="upper left")

    fig.savefig(out_path)
    plt.close(fig)
    print(f"  Saved {os.path.basename(out_path)}")


def scalability_chart(results: Results, out_path: str):
    """Mean time per phase against grid size, all clue densities pooled."""
    by_size = defaultdict(list)
    for rows in results.values():
        by_size[rows[0]["size"]].extend(rows)
    sizes = sorted(by_size, key=lambda s: int(s.split("x")[0]))

    fig, ax = plt.subplots(figsize=(10, 6))
    for phase in PHASES:
        label, _, colour = PHASE_STYLE[phase]
        times = [phase_mean(by_size[s], phase, "time") for s in sizes]
        ax.plot(sizes, times, "o-", label=label, color=colour, linewidth=2.5, markersize=8)

    ax.set_xlabel("Grid Size")
    ax.set_ylabel("Average Time (seconds)")
    ax.set_title("Time vs Grid Size")
    ax.legend()

    fig.savefig(out_path)
    plt.close(fig)
    print(f"  Saved {os.path.basename(out_path)}")


def print_summary(results: Results):
    rows = [r for group in results.values() for r in group]

    print("\n" + "=" * 64)
    print(f"  {len(rows)} games over {len(results)} configurations")
    print("-" * 64)
    print(f"  {'Phase':<12} {'Success':>10} {'Avg Time':>12} {'Avg Nodes':>12}")
    for phase in PHASES:
        print(f"  {PHASE_STYLE[phase][0]:<12} {success_rate(rows, phase):>9.1f}% "
              f"{phase_mean(rows, phase, 'time'):>11.3f}s {phase_mean(rows, phase, 'nodes'):>12.1f}")
    print("=" * 64)


def main():
    parser = argparse.ArgumentParser(description="Generate benchmark charts")
    parser.add_argument("--games", type=int, default=5, help="Games per configuration")
    parser.add_argument("--timeout", type=float, default=None,
                        help="Solver timeout in seconds (default: PUZZLE_SOLVER_TIMEOUT or 30)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible charts")
    parser.add_argument("--quick", action="store_true", help="Only two small configurations")
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    out_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "presentation_charts")
    os.makedirs(out_dir, exist_ok=True)
    setup_style()

    configs = QUICK_CONFIGS if args.quick else DEFAULT_CONFIGS
    print(f"Running {args.games} games x {len(configs)} configurations...")
    results = run_benchmark(args.games, configs, args.seed, args.timeout)

    print("Drawing charts...")
    grouped_bar_chart(results, os.path.join(out_dir, "1_success_rate.png"), success_rate,
                      "Success Rate by Configuration", "Success Rate (%)", "{:.0f}%")
    grouped_bar_chart(results, os.path.join(out_dir, "2_timing.png"),
                      lambda rows, phase: phase_mean(rows, phase, "time"),
                      "Average Time per Phase", "Average Time (seconds)", "{:.3f}s")
    grouped_bar_chart(results, os.path.join(out_dir, "3_search_nodes.png"),
                      lambda rows, phase: phase_mean(rows, phase, "nodes"),
                      "Explored Search Nodes", "Average Nodes", "{:.0f}", log_scale=True)
    scalability_chart(results, os.path.join(out_dir, "4_scalability.png"))

    print_summary(results)
    print(f"Charts saved to: {out_dir}")


if __name__ == "__main__":
    main()
