"""
Chunk scheduler for very large trial counts.

Splits a total trial count into sequential chunks of at most
max_trials_per_loop trials, so no more than one chunk is ever in flight.

State machine:
    IDLE -> RUNNING -> AGGREGATED -> RUNNING ... -> DONE
"""

from enum import Enum
from typing import Iterator

from monty_hall_sim.errors import SchedulerStateError


class SchedulerState(Enum):
    """Position of the scheduler in the chunk loop."""

    IDLE = "idle"
    RUNNING = "running"
    AGGREGATED = "aggregated"
    DONE = "done"


def plan_chunks(total_trials: int, max_trials_per_loop: int) -> Iterator[int]:
    """
    Yield chunk sizes that sum exactly to total_trials.

    Examples
    --------
    >>> list(plan_chunks(2_500, 1_000))
    [1000, 1000, 500]
    """
    if total_trials < 0:
        raise ValueError(f"CRITICAL: total_trials must be >= 0, got {total_trials}")
    if max_trials_per_loop <= 0:
        raise ValueError(f"CRITICAL: max_trials_per_loop must be > 0, got {max_trials_per_loop}")

    remaining = total_trials
    while remaining > 0:
        chunk = min(remaining, max_trials_per_loop)
        yield chunk
        remaining -= chunk


class ChunkScheduler:
    """
    Drives the chunk loop one chunk at a time.

    The orchestrator calls next_chunk(), runs and aggregates that many trials,
    then calls mark_aggregated(). The next chunk cannot be requested until
    the current one has been aggregated.

    Parameters
    ----------
    total_trials : int
        Trials to schedule in total
    max_trials_per_loop : int
        Largest chunk handed out

    Examples
    --------
    >>> scheduler = ChunkScheduler(2_500, 1_000)
    >>> while not scheduler.done:
    ...     size = scheduler.next_chunk()
    ...     completed = scheduler.mark_aggregated()
    >>> scheduler.completed
    2500
    """

    def __init__(self, total_trials: int, max_trials_per_loop: int):
        if total_trials < 0:
            raise ValueError(f"CRITICAL: total_trials must be >= 0, got {total_trials}")
        if max_trials_per_loop <= 0:
            raise ValueError(
                f"CRITICAL: max_trials_per_loop must be > 0, got {max_trials_per_loop}"
            )

        self.total_trials = total_trials
        self.max_trials_per_loop = max_trials_per_loop
        self._remaining = total_trials
        self._current = 0
        self._chunks_dispatched = 0
        self._state = SchedulerState.IDLE if total_trials > 0 else SchedulerState.DONE

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def remaining(self) -> int:
        """Trials not yet aggregated."""
        return self._remaining

    @property
    def completed(self) -> int:
        """Trials aggregated so far."""
        return self.total_trials - self._remaining

    @property
    def chunks_dispatched(self) -> int:
        return self._chunks_dispatched

    @property
    def done(self) -> bool:
        return self._state is SchedulerState.DONE

    def next_chunk(self) -> int:
        """
        Start the next chunk and return its size.

        Raises
        ------
        SchedulerStateError
            If a chunk is still running or every trial is already scheduled
        """
        if self._state not in (SchedulerState.IDLE, SchedulerState.AGGREGATED):
            raise SchedulerStateError(
                f"Cannot start a chunk while scheduler is {self._state.value}"
            )

        self._current = min(self._remaining, self.max_trials_per_loop)
        self._chunks_dispatched += 1
        self._state = SchedulerState.RUNNING
        return self._current

    def mark_aggregated(self) -> int:
        """
        Record that the running chunk has been aggregated.

        Returns
        -------
        int
            Cumulative trials completed, including this chunk
        """
        if self._state is not SchedulerState.RUNNING:
            raise SchedulerStateError(
                f"No running chunk to aggregate (scheduler is {self._state.value})"
            )

        self._remaining -= self._current
        self._current = 0
        self._state = SchedulerState.DONE if self._remaining == 0 else SchedulerState.AGGREGATED
        return self.completed
