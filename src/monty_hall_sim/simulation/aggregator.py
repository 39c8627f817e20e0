"""
Running win totals and per-chunk progress notification.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from monty_hall_sim.simulation.dispatcher import BatchResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressEvent:
    """
    Progress after one chunk.

    Attributes
    ----------
    completed_trials : int
        Trials aggregated so far (cumulative)
    elapsed_seconds : float
        Seconds since the run started
    """

    completed_trials: int
    elapsed_seconds: float


ProgressHandler = Callable[[ProgressEvent], None]


class Aggregator:
    """Sums batch results into run totals. Totals never decrease."""

    def __init__(self) -> None:
        self.total_wins_with_stay = 0
        self.total_wins_with_switch = 0
        self.total_games = 0
        self.batches = 0

    def add(self, batch: BatchResult) -> None:
        if batch.wins_stay < 0 or batch.wins_switch < 0:
            raise ValueError(
                f"CRITICAL: batch wins must be >= 0, got "
                f"stay={batch.wins_stay}, switch={batch.wins_switch}"
            )
        self.total_wins_with_stay += batch.wins_stay
        self.total_wins_with_switch += batch.wins_switch
        self.total_games += batch.games
        self.batches += 1


class ProgressNotifier:
    """
    Single-subscriber progress callback.

    The handler runs synchronously on the orchestrating thread, so a slow
    handler delays the start of the next chunk. Errors raised by the handler
    propagate to the caller of the run.
    """

    def __init__(self) -> None:
        self._handler: Optional[ProgressHandler] = None

    def subscribe(self, handler: Optional[ProgressHandler]) -> None:
        """Register handler, replacing any previous one. None unsubscribes."""
        self._handler = handler

    @property
    def has_subscriber(self) -> bool:
        return self._handler is not None

    def notify(self, completed_trials: int, elapsed_seconds: float) -> None:
        if self._handler is None:
            return
        self._handler(
            ProgressEvent(completed_trials=completed_trials, elapsed_seconds=elapsed_seconds)
        )
