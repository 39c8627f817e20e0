"""
Monty Hall simulation engine.

Orchestrates a run:
1. Normalise the request (defaults for non-positive input, clamp maxima)
2. Loop over chunks from the ChunkScheduler
3. Dispatch each chunk to the ParallelDispatcher
4. Fold the batch into the Aggregator
5. Fire the progress callback
6. Assemble the SimulationResult

The call blocks until every chunk has run. Chunks run strictly one after
another; games within a chunk run concurrently.
"""

import logging
import time
from datetime import timedelta
from typing import Optional

from monty_hall_sim.config.settings import SETTINGS, SimulatorConfig
from monty_hall_sim.simulation.aggregator import Aggregator, ProgressHandler, ProgressNotifier
from monty_hall_sim.simulation.dispatcher import ParallelDispatcher
from monty_hall_sim.simulation.random_source import RandomSource
from monty_hall_sim.simulation.results import SimulationRequest, SimulationResult, utc_now
from monty_hall_sim.simulation.scheduler import ChunkScheduler

logger = logging.getLogger(__name__)


class SimulationEngine:
    """
    Runs Monty Hall simulations and reports aggregate results.

    Parameters
    ----------
    config : SimulatorConfig, optional
        Defaults and limits captured for the engine's lifetime (SETTINGS if None)
    random_source : RandomSource, optional
        Per-thread generator provider; a fresh one per run if None

    Examples
    --------
    >>> engine = SimulationEngine()
    >>> engine.on_progress(lambda e: print(e.completed_trials))
    >>> result = engine.run_simulation(100_000, 2)
    100000
    >>> result.total_games_played
    100000
    """

    def __init__(
        self,
        config: Optional[SimulatorConfig] = None,
        random_source: Optional[RandomSource] = None,
    ):
        self.config = config or SETTINGS
        self.random_source = random_source
        self._notifier = ProgressNotifier()

    def on_progress(self, handler: Optional[ProgressHandler]) -> None:
        """
        Subscribe to per-chunk progress (one subscriber; None unsubscribes).

        The handler is called on the thread running the simulation, after each
        chunk is aggregated. A blocking handler delays the next chunk.
        """
        self._notifier.subscribe(handler)

    def run_simulation(
        self,
        number_of_games: Optional[int] = None,
        number_of_threads: Optional[int] = None,
    ) -> SimulationResult:
        """
        Run Monty Hall games and score both strategies.

        Parameters
        ----------
        number_of_games : int, optional
            Games to play. None or <= 0 uses the default; above the maximum is clamped.
        number_of_threads : int, optional
            Worker threads. None or <= 0 uses the default; above the core ceiling is clamped.

        Returns
        -------
        SimulationResult
            Totals, timing and derived ratios

        Raises
        ------
        InvalidSimulationRequest
            Strict mode only, for non-positive input
        SimulationExecutionError
            If any game fails; no partial result is returned
        """
        request = SimulationRequest.normalize(number_of_games, number_of_threads, self.config)
        return self.run(request)

    def run(self, request: SimulationRequest) -> SimulationResult:
        """
        Run a request, clamping it to this engine's limits first.

        Requests from run_simulation() are already within limits; a request
        built directly is cut down to max_trial_count and the core ceiling.
        """
        config = self.config
        request = request.clamped(config)
        scheduler = ChunkScheduler(request.total_trials, config.max_trials_per_loop)
        aggregator = Aggregator()
        random_source = self.random_source or RandomSource(seed=config.seed)

        logger.info(
            f"Starting simulation: {request.total_trials:,} games on "
            f"{request.thread_count} thread(s)"
        )

        start_time = utc_now()
        started = time.perf_counter()

        with ParallelDispatcher(
            max_workers=request.thread_count,
            random_source=random_source,
            vectorized=config.vectorized,
            vector_block_size=config.vector_block_size,
        ) as dispatcher:
            while not scheduler.done:
                chunk = scheduler.next_chunk()
                batch = dispatcher.run_batch(chunk, request.thread_count)
                aggregator.add(batch)
                completed = scheduler.mark_aggregated()

                elapsed = time.perf_counter() - started
                logger.debug(
                    f"Chunk {scheduler.chunks_dispatched}: {completed:,}/"
                    f"{request.total_trials:,} games in {elapsed:.3f}s"
                )
                self._notifier.notify(completed, elapsed)

        elapsed = time.perf_counter() - started
        result = SimulationResult(
            total_games_played=scheduler.completed,
            total_threads_used=request.thread_count,
            total_wins_with_stay=aggregator.total_wins_with_stay,
            total_wins_with_switch=aggregator.total_wins_with_switch,
            start_time=start_time,
            end_time=start_time + timedelta(seconds=elapsed),
        )

        logger.info(
            f"Completed {result.total_games_played:,} games in {elapsed:.3f}s "
            f"(stay {result.win_ratio_with_stay:.5f}, switch {result.win_ratio_with_switch:.5f})"
        )
        return result


def run_simulation(
    number_of_games: Optional[int] = None,
    number_of_threads: Optional[int] = None,
    config: Optional[SimulatorConfig] = None,
    on_progress: Optional[ProgressHandler] = None,
) -> SimulationResult:
    """
    Convenience function: run one simulation with a throwaway engine.

    Examples
    --------
    >>> result = run_simulation(30_000)
    >>> result.total_wins_with_stay + result.total_wins_with_switch
    30000
    """
    engine = SimulationEngine(config=config)
    engine.on_progress(on_progress)
    return engine.run_simulation(number_of_games, number_of_threads)
