"""
Simulation reporting.

Renders a SimulationResult as:
- Plain text console report (banner + results trailer)
- Markdown summary table
- JSON structured output for automation
"""

import json
from dataclasses import dataclass
from typing import Optional

from monty_hall_sim.config.tolerances import STAY_WIN_PROBABILITY, SWITCH_WIN_PROBABILITY
from monty_hall_sim.simulation.results import SimulationResult, Strategy

RULE_WIDTH = 50

STRATEGY_LABELS = {
    Strategy.STAY: "Stay with First Door Choice",
    Strategy.SWITCH: "Switch Doors After Shown Goat Door",
}

THEORETICAL_RATIOS = {
    Strategy.STAY: STAY_WIN_PROBABILITY,
    Strategy.SWITCH: SWITCH_WIN_PROBABILITY,
}


@dataclass
class ReportConfig:
    """
    Configuration for report generation.

    Attributes
    ----------
    title : str
        Report title
    include_confidence : bool
        Add confidence intervals for each strategy
    confidence : float
        Confidence level for the intervals
    """

    title: str = "Simulation Results"
    include_confidence: bool = False
    confidence: float = 0.95


def format_header(version: str) -> str:
    """Banner printed before a run."""
    rule = "=" * RULE_WIDTH
    return f"\n{rule}\nMonty Hall Simulator v{version}\n{rule}"


def format_report(result: SimulationResult, config: Optional[ReportConfig] = None) -> str:
    """
    Plain text results block.

    Examples
    --------
    >>> print(format_report(result))  # doctest: +SKIP
    Simulation Results
    ==================================================
    Simulation runtime: 0.412 seconds
    ...
    """
    config = config or ReportConfig()

    lines = [
        "",
        config.title,
        "=" * RULE_WIDTH,
        f"Simulation runtime: {result.duration_seconds:.3f} seconds",
        f"Threads used: {result.total_threads_used}",
        "",
        "Total number of games simulated:",
        f"        {result.total_games_played:>14,}",
    ]

    for strategy in Strategy:
        lines.append(STRATEGY_LABELS[strategy])
        lines.append(
            f"  Wins: {result.wins(strategy):>14,}; "
            f"Ratio W/T: {result.win_ratio(strategy):.5%}"
        )
        if config.include_confidence:
            low, high = result.confidence_interval(strategy, config.confidence)
            lines.append(f"  {config.confidence:.0%} CI: [{low:.5%}, {high:.5%}]")

    lines.append("")
    return "\n".join(lines)


def to_markdown(result: SimulationResult, config: Optional[ReportConfig] = None) -> str:
    """Markdown summary with one row per strategy."""
    config = config or ReportConfig()

    lines = [
        f"# {config.title}",
        "",
        f"- **Games simulated:** {result.total_games_played:,}",
        f"- **Threads used:** {result.total_threads_used}",
        f"- **Runtime:** {result.duration_seconds:.3f}s",
        "",
        "| Strategy | Wins | Win Ratio | Theoretical | Std. Error |",
        "|----------|-----:|----------:|------------:|-----------:|",
    ]
    for strategy in Strategy:
        lines.append(
            f"| {strategy.value} | {result.wins(strategy):,} | "
            f"{result.win_ratio(strategy):.5f} | {THEORETICAL_RATIOS[strategy]:.5f} | "
            f"{result.standard_error(strategy):.5f} |"
        )
    return "\n".join(lines) + "\n"


def to_json(result: SimulationResult, config: Optional[ReportConfig] = None, indent: int = 2) -> str:
    """JSON document with run totals, ratios and confidence intervals."""
    config = config or ReportConfig()

    payload = result.to_dict()
    payload["confidence"] = config.confidence
    payload["strategies"] = {
        strategy.value: {
            "wins": result.wins(strategy),
            "win_ratio": result.win_ratio(strategy),
            "theoretical": THEORETICAL_RATIOS[strategy],
            "standard_error": result.standard_error(strategy),
            "confidence_interval": list(result.confidence_interval(strategy, config.confidence)),
        }
        for strategy in Strategy
    }
    return json.dumps(payload, indent=indent)
