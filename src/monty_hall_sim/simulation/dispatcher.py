"""
Parallel batch dispatcher.

Runs one batch of independent games across a bounded thread pool:
- The batch is split into at most max_concurrency work units
- Each unit draws from its own thread's generator (no generator locking)
- Units fold their wins into two shared WinCounters, one add per unit
- Counters are read and reset after every batch

A failure inside any game is fatal to the batch and the run.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed, wait
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from monty_hall_sim.config.settings import VECTOR_BLOCK_SIZE
from monty_hall_sim.errors import SimulationExecutionError
from monty_hall_sim.simulation.game import GameOutcome, play_round, play_rounds
from monty_hall_sim.simulation.random_source import RandomSource
from monty_hall_sim.simulation.scheduler import plan_chunks

logger = logging.getLogger(__name__)

GameFn = Callable[[np.random.Generator], GameOutcome]

#: Games a unit plays between checks for a failed sibling unit
ABORT_CHECK_INTERVAL = 65_536


@dataclass(frozen=True)
class BatchResult:
    """
    Win totals for one dispatched batch.

    Attributes
    ----------
    wins_stay : int
        Games won by keeping the first pick
    wins_switch : int
        Games won by switching doors
    games : int
        Games played in the batch
    """

    wins_stay: int
    wins_switch: int
    games: int = 0


class WinCounter:
    """Thread-safe, add-only counter shared by the workers of a batch."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def add(self, amount: int) -> None:
        if amount < 0:
            raise ValueError(f"CRITICAL: win counts only grow, got {amount}")
        with self._lock:
            self._value += amount

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0


def partition(size: int, n_units: int) -> list[int]:
    """
    Split size trials into at most n_units near-equal work units.

    Examples
    --------
    >>> partition(10, 3)
    [4, 3, 3]
    """
    if size < 0:
        raise ValueError(f"CRITICAL: size must be >= 0, got {size}")
    if n_units <= 0:
        raise ValueError(f"CRITICAL: n_units must be > 0, got {n_units}")

    n_units = min(n_units, size)
    if n_units == 0:
        return []
    base, extra = divmod(size, n_units)
    return [base + 1 if i < extra else base for i in range(n_units)]


class ParallelDispatcher:
    """
    Executes batches of games on a thread pool.

    Use as a context manager so the pool is shut down when the run ends.

    Parameters
    ----------
    max_workers : int
        Size of the thread pool
    random_source : RandomSource, optional
        Per-thread generator provider (new one if None)
    vectorized : bool, default False
        Play games with the NumPy block kernel
    vector_block_size : int
        Games per block in vectorized mode
    game : callable, optional
        Single-game function, defaults to play_round

    Examples
    --------
    >>> with ParallelDispatcher(max_workers=4) as dispatcher:
    ...     result = dispatcher.run_batch(10_000, max_concurrency=4)
    >>> result.wins_stay + result.wins_switch
    10000
    """

    def __init__(
        self,
        max_workers: int,
        random_source: Optional[RandomSource] = None,
        vectorized: bool = False,
        vector_block_size: int = VECTOR_BLOCK_SIZE,
        game: Optional[GameFn] = None,
    ):
        if max_workers <= 0:
            raise ValueError(f"CRITICAL: max_workers must be > 0, got {max_workers}")

        self.max_workers = max_workers
        self.random_source = random_source or RandomSource()
        self.vectorized = vectorized
        self.vector_block_size = vector_block_size
        self.game = game or play_round

        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="monty-hall"
        )
        self._wins_stay = WinCounter()
        self._wins_switch = WinCounter()
        self._abort = threading.Event()

    def __enter__(self) -> "ParallelDispatcher":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        """Shut down the pool, dropping units that have not started."""
        self._executor.shutdown(wait=True, cancel_futures=True)

    def _run_unit(self, n_games: int) -> None:
        """Play n_games on the current worker thread and publish the wins."""
        rng = self.random_source.get()
        wins_stay = 0
        wins_switch = 0

        step = self.vector_block_size if self.vectorized else ABORT_CHECK_INTERVAL
        game = self.game

        for block in plan_chunks(n_games, step):
            # A sibling unit failed; the batch is already lost
            if self._abort.is_set():
                return
            if self.vectorized:
                stay, switch = play_rounds(rng, block)
                wins_stay += stay
                wins_switch += switch
                continue
            for _ in range(block):
                outcome = game(rng)
                if outcome.won_by_staying:
                    wins_stay += 1
                if outcome.won_by_switching:
                    wins_switch += 1

        self._wins_stay.add(wins_stay)
        self._wins_switch.add(wins_switch)

    def run_batch(self, size: int, max_concurrency: Optional[int] = None) -> BatchResult:
        """
        Play size independent games and return the batch win totals.

        Parameters
        ----------
        size : int
            Games in the batch
        max_concurrency : int, optional
            Cap on concurrently active work units (defaults to pool size)

        Returns
        -------
        BatchResult
            Summed wins for each strategy

        Raises
        ------
        SimulationExecutionError
            If any game raises; remaining units are cancelled
        """
        if size < 0:
            raise ValueError(f"CRITICAL: batch size must be >= 0, got {size}")
        concurrency = min(max_concurrency or self.max_workers, self.max_workers)
        if concurrency <= 0:
            raise ValueError(f"CRITICAL: max_concurrency must be > 0, got {max_concurrency}")

        units = partition(size, concurrency)
        logger.debug(f"Dispatching {size:,} games as {len(units)} units")
        self._abort.clear()

        try:
            future_to_unit = {
                self._executor.submit(self._run_unit, n_games): n_games
                for n_games in units
            }

            for future in as_completed(future_to_unit):
                try:
                    future.result()
                except Exception as e:
                    self._abort.set()
                    for pending in future_to_unit:
                        pending.cancel()
                    # Running units stop at their next abort check; wait before the counters reset
                    wait(future_to_unit)
                    logger.error(
                        f"Work unit of {future_to_unit[future]:,} games failed: {e}"
                    )
                    raise SimulationExecutionError(
                        f"Batch of {size:,} games aborted: {e}"
                    ) from e

            return BatchResult(
                wins_stay=self._wins_stay.value,
                wins_switch=self._wins_switch.value,
                games=size,
            )
        finally:
            self._wins_stay.reset()
            self._wins_switch.reset()
