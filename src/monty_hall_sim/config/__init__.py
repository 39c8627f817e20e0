"""
Immutable configuration and test tolerances.

See: settings.py for engine defaults and limits
See: tolerances.py for CLT-derived win ratio tolerances
"""

from monty_hall_sim.config.settings import (
    DEFAULT_THREAD_COUNT,
    DEFAULT_TRIAL_COUNT,
    MAX_TRIAL_COUNT,
    MAX_TRIALS_PER_LOOP,
    SETTINGS,
    SimulatorConfig,
    max_thread_count,
)

__all__ = [
    "DEFAULT_THREAD_COUNT",
    "DEFAULT_TRIAL_COUNT",
    "MAX_TRIAL_COUNT",
    "MAX_TRIALS_PER_LOOP",
    "SETTINGS",
    "SimulatorConfig",
    "max_thread_count",
]
