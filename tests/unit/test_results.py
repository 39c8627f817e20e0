"""
Tests for request normalisation and the result model - simulation/results.py.
"""

from datetime import datetime, timedelta, timezone

import pytest

from monty_hall_sim.config import settings
from monty_hall_sim.config.settings import SimulatorConfig
from monty_hall_sim.config.tolerances import RATIO_ARITHMETIC_TOLERANCE
from monty_hall_sim.errors import InvalidSimulationRequest
from monty_hall_sim.simulation.results import SimulationRequest, SimulationResult, Strategy


@pytest.fixture
def eight_cores(monkeypatch: pytest.MonkeyPatch) -> None:
    """Pin the host to 8 logical cores (thread ceiling 6)."""
    monkeypatch.setattr(settings, "logical_core_count", lambda: 8)


class TestSimulationRequest:
    def test_direct_construction_validates(self) -> None:
        with pytest.raises(ValueError, match="total_trials"):
            SimulationRequest(total_trials=0, thread_count=1)
        with pytest.raises(ValueError, match="thread_count"):
            SimulationRequest(total_trials=1, thread_count=0)

    def test_passthrough(self, default_config: SimulatorConfig, eight_cores) -> None:
        request = SimulationRequest.normalize(500, 4, default_config)
        assert request == SimulationRequest(total_trials=500, thread_count=4)

    @pytest.mark.parametrize("games, threads", [(0, 0), (-5, -1), (None, None)])
    def test_defaults_for_non_positive(
        self, default_config: SimulatorConfig, games, threads
    ) -> None:
        request = SimulationRequest.normalize(games, threads, default_config)
        assert request.total_trials == default_config.default_trial_count
        assert request.thread_count == default_config.default_thread_count

    def test_defaults_logged(self, default_config: SimulatorConfig, caplog) -> None:
        with caplog.at_level("WARNING"):
            SimulationRequest.normalize(0, 1, default_config)
        assert "not positive" in caplog.text

    def test_trials_clamped(self) -> None:
        config = SimulatorConfig(max_trial_count=1_000, max_trials_per_loop=100, vectorized=False)
        assert SimulationRequest.normalize(5_000, 1, config).total_trials == 1_000

    def test_threads_clamped_to_ceiling(self, default_config: SimulatorConfig, eight_cores) -> None:
        assert SimulationRequest.normalize(10, 64, default_config).thread_count == 6

    def test_strict_mode_rejects(self, eight_cores) -> None:
        config = SimulatorConfig(strict=True, default_trial_count=10)
        with pytest.raises(InvalidSimulationRequest, match="number_of_games"):
            SimulationRequest.normalize(0, 1, config)
        with pytest.raises(InvalidSimulationRequest, match="number_of_threads"):
            SimulationRequest.normalize(1, -2, config)

    def test_strict_mode_still_defaults_none(self) -> None:
        config = SimulatorConfig(strict=True, default_trial_count=10)
        assert SimulationRequest.normalize(None, None, config).total_trials == 10

    def test_strict_mode_is_value_error(self) -> None:
        assert issubclass(InvalidSimulationRequest, ValueError)

    def test_clamped_cuts_direct_request(self, eight_cores) -> None:
        config = SimulatorConfig(max_trial_count=50, default_trial_count=10)
        request = SimulationRequest(total_trials=200, thread_count=64).clamped(config)
        assert request == SimulationRequest(total_trials=50, thread_count=6)

    def test_clamped_within_limits_is_identity(self, default_config: SimulatorConfig, eight_cores) -> None:
        request = SimulationRequest(total_trials=500, thread_count=2)
        assert request.clamped(default_config) is request

    def test_clamped_logged(self, eight_cores, caplog) -> None:
        config = SimulatorConfig(max_trial_count=50, default_trial_count=10)
        with caplog.at_level("WARNING"):
            SimulationRequest(total_trials=200, thread_count=64).clamped(config)
        assert "exceeds maximum" in caplog.text
        assert "exceeds core ceiling" in caplog.text


class TestSimulationResult:
    def test_default_initialised(self) -> None:
        result = SimulationResult()
        assert result.total_games_played == 0
        assert result.total_threads_used == 0
        assert result.total_wins_with_stay == 0
        assert result.total_wins_with_switch == 0
        assert result.win_ratio_with_stay == 0
        assert result.win_ratio_with_switch == 0
        assert result.duration_seconds == 0

    def test_ratios_zero_with_games_but_no_wins(self) -> None:
        result = SimulationResult(total_games_played=1)
        assert result.win_ratio_with_stay == 0
        assert result.win_ratio_with_switch == 0

    def test_duration(self) -> None:
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        result = SimulationResult(start_time=start, end_time=start + timedelta(hours=1))
        assert result.duration_seconds == 3600

    def test_ratios(self) -> None:
        result = SimulationResult(
            total_games_played=300, total_wins_with_stay=100, total_wins_with_switch=200
        )
        assert abs(result.win_ratio_with_stay - 1 / 3) < RATIO_ARITHMETIC_TOLERANCE
        assert abs(result.win_ratio_with_switch - 2 / 3) < RATIO_ARITHMETIC_TOLERANCE
        assert result.win_ratio(Strategy.SWITCH) == result.win_ratio_with_switch
        assert result.wins(Strategy.STAY) == 100

    def test_standard_error(self) -> None:
        result = SimulationResult(
            total_games_played=10_000, total_wins_with_stay=2_500, total_wins_with_switch=7_500
        )
        assert result.standard_error(Strategy.STAY) == pytest.approx(0.0043301, rel=1e-4)
        assert SimulationResult().standard_error(Strategy.STAY) == 0.0

    def test_confidence_interval(self) -> None:
        result = SimulationResult(
            total_games_played=10_000, total_wins_with_stay=3_333, total_wins_with_switch=6_667
        )
        low, high = result.confidence_interval(Strategy.STAY, confidence=0.95)
        assert low < result.win_ratio_with_stay < high
        assert (high - low) / 2 == pytest.approx(1.959964 * result.standard_error(Strategy.STAY))

    def test_confidence_interval_clipped(self) -> None:
        result = SimulationResult(total_games_played=5, total_wins_with_switch=5)
        low, high = result.confidence_interval(Strategy.SWITCH)
        assert (low, high) == (1.0, 1.0)

    @pytest.mark.parametrize("level", [0.0, 1.0, 1.5])
    def test_confidence_level_validated(self, level: float) -> None:
        with pytest.raises(ValueError, match="confidence"):
            SimulationResult().confidence_interval(Strategy.STAY, level)

    def test_to_dict(self) -> None:
        result = SimulationResult(
            total_games_played=3, total_threads_used=1, total_wins_with_stay=1,
            total_wins_with_switch=2,
        )
        payload = result.to_dict()
        assert payload["total_games_played"] == 3
        assert payload["win_ratio_with_switch"] == pytest.approx(2 / 3)
        assert payload["duration_seconds"] == 0
        datetime.fromisoformat(payload["start_time"])

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            SimulationResult().total_games_played = 5  # type: ignore[misc]
