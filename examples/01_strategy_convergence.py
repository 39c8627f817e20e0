#!/usr/bin/env python3
"""
Stay vs. Switch Convergence Demo.

Runs the simulator at increasing game counts and shows both win ratios
closing in on 1/3 (stay) and 2/3 (switch), with the confidence interval
narrowing as 1/sqrt(N).

Usage:
    python examples/01_strategy_convergence.py
    python examples/01_strategy_convergence.py --threads 4 --vectorized
"""

import argparse
import sys
from dataclasses import dataclass

# Add src to path if running as script
sys.path.insert(0, "src")

from monty_hall_sim import SimulationEngine, SimulatorConfig, Strategy
from monty_hall_sim.config.tolerances import STAY_WIN_PROBABILITY, SWITCH_WIN_PROBABILITY


@dataclass
class ConvergencePoint:
    """Win ratios at one game count."""

    n_games: int
    stay_ratio: float
    switch_ratio: float
    switch_half_width: float
    seconds: float


def convergence_table(
    game_counts: list[int],
    threads: int = 1,
    vectorized: bool = False,
) -> list[ConvergencePoint]:
    """Run one simulation per game count."""
    engine = SimulationEngine(config=SimulatorConfig(vectorized=vectorized))
    points = []
    for n_games in game_counts:
        result = engine.run_simulation(n_games, threads)
        low, high = result.confidence_interval(Strategy.SWITCH)
        points.append(
            ConvergencePoint(
                n_games=n_games,
                stay_ratio=result.win_ratio_with_stay,
                switch_ratio=result.win_ratio_with_switch,
                switch_half_width=(high - low) / 2.0,
                seconds=result.duration_seconds,
            )
        )
    return points


def print_table(points: list[ConvergencePoint]) -> None:
    print(f"\n{'Games':>12} {'Stay':>9} {'Switch':>9} {'95% +/-':>9} {'Time (s)':>9}")
    print("-" * 52)
    for p in points:
        print(
            f"{p.n_games:>12,} {p.stay_ratio:>9.5f} {p.switch_ratio:>9.5f} "
            f"{p.switch_half_width:>9.5f} {p.seconds:>9.3f}"
        )
    print("-" * 52)
    print(f"{'Theory':>12} {STAY_WIN_PROBABILITY:>9.5f} {SWITCH_WIN_PROBABILITY:>9.5f}")


def main() -> None:
    """Run convergence demo."""
    parser = argparse.ArgumentParser(description="Stay vs. Switch Convergence Demo")
    parser.add_argument("--threads", type=int, default=1, help="Worker threads (default: 1)")
    parser.add_argument("--vectorized", action="store_true", help="Use the NumPy block kernel")
    args = parser.parse_args()

    print("\n" + "=" * 52)
    print("MONTY HALL CONVERGENCE DEMO")
    print("=" * 52)

    counts = [100, 1_000, 10_000, 100_000, 1_000_000]
    print_table(convergence_table(counts, threads=args.threads, vectorized=args.vectorized))

    print("\n" + "=" * 52)
    print("DEMO COMPLETE")
    print("=" * 52)


if __name__ == "__main__":
    main()
