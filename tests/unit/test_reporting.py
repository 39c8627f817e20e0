"""
Tests for simulation reporting - reporting.py.
"""

import json
from datetime import datetime, timedelta, timezone

import pytest

from monty_hall_sim.reporting import (
    ReportConfig,
    format_header,
    format_report,
    to_json,
    to_markdown,
)
from monty_hall_sim.simulation.results import SimulationResult


@pytest.fixture
def sample_result() -> SimulationResult:
    start = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    return SimulationResult(
        total_games_played=1_000_000,
        total_threads_used=4,
        total_wins_with_stay=333_210,
        total_wins_with_switch=666_790,
        start_time=start,
        end_time=start + timedelta(seconds=1.5),
    )


class TestConsoleReport:
    def test_header(self) -> None:
        header = format_header("1.2.3")
        assert "Monty Hall Simulator v1.2.3" in header
        assert "=" * 50 in header

    def test_report_contents(self, sample_result: SimulationResult) -> None:
        report = format_report(sample_result)
        assert "Simulation runtime: 1.500 seconds" in report
        assert "1,000,000" in report
        assert "Stay with First Door Choice" in report
        assert "Switch Doors After Shown Goat Door" in report
        assert "Wins:        333,210; Ratio W/T: 33.32100%" in report
        assert "Wins:        666,790; Ratio W/T: 66.67900%" in report

    def test_confidence_lines_optional(self, sample_result: SimulationResult) -> None:
        assert "CI" not in format_report(sample_result)
        report = format_report(sample_result, ReportConfig(include_confidence=True))
        assert report.count("95% CI") == 2

    def test_empty_result(self) -> None:
        report = format_report(SimulationResult())
        assert "Ratio W/T: 0.00000%" in report


class TestMarkdown:
    def test_table(self, sample_result: SimulationResult) -> None:
        markdown = to_markdown(sample_result, ReportConfig(title="Run 7"))
        assert markdown.startswith("# Run 7")
        assert "| stay | 333,210 | 0.33321 | 0.33333 |" in markdown
        assert "| switch | 666,790 | 0.66679 | 0.66667 |" in markdown


class TestJson:
    def test_round_trip_fields(self, sample_result: SimulationResult) -> None:
        payload = json.loads(to_json(sample_result))
        assert payload["total_games_played"] == 1_000_000
        assert payload["duration_seconds"] == pytest.approx(1.5)
        assert set(payload["strategies"]) == {"stay", "switch"}

        stay = payload["strategies"]["stay"]
        assert stay["wins"] == 333_210
        low, high = stay["confidence_interval"]
        assert low < stay["win_ratio"] < high

    def test_confidence_level_recorded(self, sample_result: SimulationResult) -> None:
        payload = json.loads(to_json(sample_result, ReportConfig(confidence=0.99)))
        assert payload["confidence"] == 0.99
