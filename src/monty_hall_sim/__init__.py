"""
monty-hall-sim: Parallel Monte Carlo estimates for the Monty Hall problem.

Quick Start
-----------
>>> from monty_hall_sim import SimulationEngine
>>> engine = SimulationEngine()
>>> result = engine.run_simulation(number_of_games=100_000, number_of_threads=2)
>>> print(f"stay={result.win_ratio_with_stay:.3f} switch={result.win_ratio_with_switch:.3f}")

See Also
--------
- monty_hall_sim.cli for the command-line front end

Version: 1.0.0
"""

__version__ = "1.0.0"

# =============================================================================
# Engine - Primary API
# =============================================================================
from monty_hall_sim.simulation.engine import SimulationEngine, run_simulation
from monty_hall_sim.simulation.results import SimulationRequest, SimulationResult, Strategy
from monty_hall_sim.simulation.aggregator import ProgressEvent

# =============================================================================
# Configuration
# =============================================================================
from monty_hall_sim.config.settings import SETTINGS, SimulatorConfig, max_thread_count

# =============================================================================
# Errors
# =============================================================================
from monty_hall_sim.errors import (
    InvalidSimulationRequest,
    SchedulerStateError,
    SimulationExecutionError,
)

__all__ = [
    # Version
    "__version__",
    # Engine
    "SimulationEngine",
    "SimulationRequest",
    "SimulationResult",
    "Strategy",
    "ProgressEvent",
    "run_simulation",
    # Config
    "SETTINGS",
    "SimulatorConfig",
    "max_thread_count",
    # Errors
    "InvalidSimulationRequest",
    "SchedulerStateError",
    "SimulationExecutionError",
]
