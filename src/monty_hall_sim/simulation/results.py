"""
Request and result models for a simulation run.

SimulationRequest.normalize() turns raw caller input into a valid request:
non-positive counts fall back to defaults, oversized counts are clamped.
SimulationResult carries the run totals plus derived ratios and statistics.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

import numpy as np
from scipy import stats

from monty_hall_sim.config.settings import SETTINGS, SimulatorConfig
from monty_hall_sim.errors import InvalidSimulationRequest

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Strategy(Enum):
    """Player strategy after the host opens a goat door."""

    STAY = "stay"
    SWITCH = "switch"


@dataclass(frozen=True)
class SimulationRequest:
    """
    Validated simulation request.

    Attributes
    ----------
    total_trials : int
        Games to play, in [1, max_trial_count]
    thread_count : int
        Worker threads, in [1, max_thread_count]
    """

    total_trials: int
    thread_count: int

    def __post_init__(self) -> None:
        if self.total_trials <= 0:
            raise ValueError(f"CRITICAL: total_trials must be > 0, got {self.total_trials}")
        if self.thread_count <= 0:
            raise ValueError(f"CRITICAL: thread_count must be > 0, got {self.thread_count}")

    @classmethod
    def normalize(
        cls,
        number_of_games: Optional[int] = None,
        number_of_threads: Optional[int] = None,
        config: Optional[SimulatorConfig] = None,
    ) -> "SimulationRequest":
        """
        Build a request from raw caller input.

        Parameters
        ----------
        number_of_games : int, optional
            Requested games; None or <= 0 means the configured default
        number_of_threads : int, optional
            Requested threads; None or <= 0 means the configured default
        config : SimulatorConfig, optional
            Defaults and limits (SETTINGS if None)

        Returns
        -------
        SimulationRequest
            Request with defaults applied and maxima clamped

        Raises
        ------
        InvalidSimulationRequest
            In strict mode, if a supplied count is not positive
        """
        config = config or SETTINGS

        trials = cls._coerce(
            "number_of_games", number_of_games, config.default_trial_count, config.strict
        )
        threads = cls._coerce(
            "number_of_threads", number_of_threads, config.default_thread_count, config.strict
        )

        return cls(total_trials=trials, thread_count=threads).clamped(config)

    def clamped(self, config: Optional[SimulatorConfig] = None) -> "SimulationRequest":
        """
        Return this request with counts above the configured maxima cut down.

        Trials are capped at max_trial_count and threads at the core ceiling.
        Returns self when both are already within limits.
        """
        config = config or SETTINGS
        trials = self.total_trials
        threads = self.thread_count

        if trials > config.max_trial_count:
            logger.warning(
                f"number_of_games={trials:,} exceeds maximum, clamping to {config.max_trial_count:,}"
            )
            trials = config.max_trial_count

        thread_ceiling = config.max_thread_count
        if threads > thread_ceiling:
            logger.warning(
                f"number_of_threads={threads} exceeds core ceiling, clamping to {thread_ceiling}"
            )
            threads = thread_ceiling

        if trials == self.total_trials and threads == self.thread_count:
            return self
        return SimulationRequest(total_trials=trials, thread_count=threads)

    @staticmethod
    def _coerce(name: str, value: Optional[int], default: int, strict: bool) -> int:
        if value is None:
            return default
        value = int(value)
        if value > 0:
            return value
        if strict:
            raise InvalidSimulationRequest(f"{name} must be > 0, got {value}")
        logger.warning(f"{name}={value} is not positive, using default {default:,}")
        return default


@dataclass(frozen=True)
class SimulationResult:
    """
    Totals for a completed simulation run.

    Attributes
    ----------
    total_games_played : int
        Games simulated
    total_threads_used : int
        Worker threads the run was allowed to use
    total_wins_with_stay : int
        Games won by keeping the first pick
    total_wins_with_switch : int
        Games won by switching doors
    start_time : datetime
        UTC time the run started
    end_time : datetime
        UTC time the run finished

    Examples
    --------
    >>> result = SimulationResult(total_games_played=3, total_wins_with_stay=1,
    ...                           total_wins_with_switch=2)
    >>> round(result.win_ratio_with_switch, 3)
    0.667
    """

    total_games_played: int = 0
    total_threads_used: int = 0
    total_wins_with_stay: int = 0
    total_wins_with_switch: int = 0
    start_time: datetime = field(default_factory=utc_now)
    end_time: datetime = None  # type: ignore[assignment]  # Set in __post_init__

    def __post_init__(self) -> None:
        # Frozen dataclass workaround: use object.__setattr__
        if self.end_time is None:
            object.__setattr__(self, "end_time", self.start_time)

    @property
    def duration_seconds(self) -> float:
        """Wall-clock length of the run."""
        return (self.end_time - self.start_time).total_seconds()

    @property
    def win_ratio_with_stay(self) -> float:
        """Share of games won by staying (0 if no games were played)."""
        if self.total_games_played <= 0:
            return 0.0
        return self.total_wins_with_stay / self.total_games_played

    @property
    def win_ratio_with_switch(self) -> float:
        """Share of games won by switching (0 if no games were played)."""
        if self.total_games_played <= 0:
            return 0.0
        return self.total_wins_with_switch / self.total_games_played

    def wins(self, strategy: Strategy) -> int:
        """Games won by the given strategy."""
        if strategy is Strategy.STAY:
            return self.total_wins_with_stay
        return self.total_wins_with_switch

    def win_ratio(self, strategy: Strategy) -> float:
        """Share of games won by the given strategy (0 if no games were played)."""
        if strategy is Strategy.STAY:
            return self.win_ratio_with_stay
        return self.win_ratio_with_switch

    def standard_error(self, strategy: Strategy) -> float:
        """
        Standard error of a strategy's win ratio.

        [T1] Binomial proportion: sqrt(p(1-p)/N). Zero when no games were played.
        """
        n = self.total_games_played
        if n <= 0:
            return 0.0
        p = self.win_ratio(strategy)
        return float(np.sqrt(p * (1.0 - p) / n))

    def confidence_interval(
        self, strategy: Strategy, confidence: float = 0.95
    ) -> tuple[float, float]:
        """
        Normal-approximation confidence interval for a win ratio, clipped to [0, 1].

        Parameters
        ----------
        strategy : Strategy
            Strategy to report on
        confidence : float, default 0.95
            Two-sided confidence level in (0, 1)
        """
        if not 0.0 < confidence < 1.0:
            raise ValueError(f"CRITICAL: confidence must be in (0, 1), got {confidence}")

        z = float(stats.norm.ppf(0.5 + confidence / 2.0))
        p = self.win_ratio(strategy)
        half_width = z * self.standard_error(strategy)
        return max(0.0, p - half_width), min(1.0, p + half_width)

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view for JSON output and logging."""
        return {
            "total_games_played": self.total_games_played,
            "total_threads_used": self.total_threads_used,
            "total_wins_with_stay": self.total_wins_with_stay,
            "total_wins_with_switch": self.total_wins_with_switch,
            "win_ratio_with_stay": self.win_ratio_with_stay,
            "win_ratio_with_switch": self.win_ratio_with_switch,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "duration_seconds": self.duration_seconds,
        }
