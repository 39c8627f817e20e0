"""
Command-line front end for the Monty Hall simulator.

Usage:
    monty-hall-sim [--trials N] [--threads T] [--vectorized] [--json]
    python -m monty_hall_sim --trials 1000000 --threads 4 --progress

Exit codes:
    0 = Simulation completed
    1 = Simulation aborted by a worker failure
    2 = Invalid arguments
"""

import argparse
import logging
import sys
from typing import Optional, Sequence

from monty_hall_sim import __version__
from monty_hall_sim.config.settings import (
    DEFAULT_THREAD_COUNT,
    DEFAULT_TRIAL_COUNT,
    MAX_TRIAL_COUNT,
    SimulatorConfig,
)
from monty_hall_sim.errors import InvalidSimulationRequest, SimulationExecutionError
from monty_hall_sim.reporting import ReportConfig, format_header, format_report, to_json, to_markdown
from monty_hall_sim.simulation.aggregator import ProgressEvent
from monty_hall_sim.simulation.engine import SimulationEngine

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="monty-hall-sim",
        description="A simulator for the two main strategies in the Monty Hall problem.",
    )
    parser.add_argument(
        "--trials",
        type=int,
        default=None,
        help=(
            f"Number of games to simulate. The largest value accepted is {MAX_TRIAL_COUNT:,}. "
            f"Default {DEFAULT_TRIAL_COUNT:,}."
        ),
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help=(
            "Number of worker threads. Values above three quarters of the logical cores "
            f"are clamped. Default {DEFAULT_THREAD_COUNT}."
        ),
    )
    parser.add_argument(
        "--vectorized",
        action="store_true",
        help="Play games in NumPy blocks instead of one at a time",
    )
    parser.add_argument("--seed", type=int, default=None, help="Extra entropy for thread seeds")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject non-positive --trials/--threads instead of using defaults",
    )
    parser.add_argument(
        "--confidence",
        type=float,
        default=None,
        help="Show confidence intervals at this level (e.g. 0.95)",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="Print results as JSON")
    output.add_argument("--markdown", action="store_true", help="Print results as Markdown")
    parser.add_argument(
        "--progress", action="store_true", help="Print progress after each chunk"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _print_progress(event: ProgressEvent) -> None:
    print(
        f"  {event.completed_trials:>14,} games  {event.elapsed_seconds:8.3f}s",
        file=sys.stderr,
    )


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.confidence is not None and not 0.0 < args.confidence < 1.0:
        parser.error(f"--confidence must be between 0 and 1, got {args.confidence}")

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = SimulatorConfig(
            vectorized=args.vectorized or None,
            strict=args.strict,
            seed=args.seed,
        )
    except ValueError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 2

    engine = SimulationEngine(config=config)
    if args.progress:
        engine.on_progress(_print_progress)

    structured = args.json or args.markdown
    if not structured:
        print(format_header(__version__))
        print()
        print("Running simulation... ", end="", flush=True)

    try:
        result = engine.run_simulation(args.trials, args.threads)
    except InvalidSimulationRequest as e:
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 2
    except SimulationExecutionError as e:
        logger.error(f"Simulation aborted: {e}")
        return 1

    report_config = ReportConfig(
        include_confidence=args.confidence is not None,
        confidence=args.confidence if args.confidence is not None else 0.95,
    )
    if args.json:
        print(to_json(result, report_config))
    elif args.markdown:
        print(to_markdown(result, report_config))
    else:
        print("complete.")
        print(format_report(result, report_config))
    return 0


if __name__ == "__main__":
    sys.exit(main())
