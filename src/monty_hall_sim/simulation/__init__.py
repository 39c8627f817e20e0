"""
Parallel Monte Carlo engine for the Monty Hall problem.

Provides:
- Per-thread random generators
- Single-game and vectorized game kernels
- Chunk scheduling for very large trial counts
- Thread-pool batch dispatch and aggregation
- The SimulationEngine orchestrator
"""

from monty_hall_sim.simulation.aggregator import (
    Aggregator,
    ProgressEvent,
    ProgressNotifier,
)
from monty_hall_sim.simulation.dispatcher import (
    BatchResult,
    ParallelDispatcher,
    WinCounter,
    partition,
)
from monty_hall_sim.simulation.engine import SimulationEngine, run_simulation
from monty_hall_sim.simulation.game import (
    Door,
    GameOutcome,
    pick_door_excluding,
    play_round,
    play_rounds,
)
from monty_hall_sim.simulation.random_source import RandomSource
from monty_hall_sim.simulation.results import (
    SimulationRequest,
    SimulationResult,
    Strategy,
)
from monty_hall_sim.simulation.scheduler import (
    ChunkScheduler,
    SchedulerState,
    plan_chunks,
)

__all__ = [
    # Randomness
    "RandomSource",
    # Game
    "Door",
    "GameOutcome",
    "pick_door_excluding",
    "play_round",
    "play_rounds",
    # Scheduling
    "ChunkScheduler",
    "SchedulerState",
    "plan_chunks",
    # Dispatch
    "BatchResult",
    "ParallelDispatcher",
    "WinCounter",
    "partition",
    # Aggregation
    "Aggregator",
    "ProgressEvent",
    "ProgressNotifier",
    # Engine
    "SimulationEngine",
    "SimulationRequest",
    "SimulationResult",
    "Strategy",
    "run_simulation",
]
