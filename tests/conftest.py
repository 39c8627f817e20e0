"""
Centralized pytest fixtures for the monty-hall-sim test suite.

Fixture Categories:
1. Configuration - Small-chunk and vectorized engine configs
2. Randomness - Seeded generators for deterministic game tests
3. Engines - Pre-built SimulationEngine instances
4. Progress - Recording progress subscriber
"""

from dataclasses import dataclass, field

import numpy as np
import pytest

from monty_hall_sim.config.settings import SimulatorConfig
from monty_hall_sim.simulation.aggregator import ProgressEvent
from monty_hall_sim.simulation.engine import SimulationEngine

# =============================================================================
# CONSTANTS
# =============================================================================

BENCHMARK_SEED = 42


# =============================================================================
# CONFIGURATION
# =============================================================================

@pytest.fixture
def default_config() -> SimulatorConfig:
    """Library defaults with environment overrides pinned off."""
    return SimulatorConfig(
        default_trial_count=100_000,
        max_trials_per_loop=1_000_000_000,
        vectorized=False,
    )


@pytest.fixture
def small_chunk_config() -> SimulatorConfig:
    """Chunks of 1,000 trials so multi-chunk runs stay fast."""
    return SimulatorConfig(
        default_trial_count=100_000,
        max_trials_per_loop=1_000,
        vectorized=False,
    )


@pytest.fixture
def vectorized_config() -> SimulatorConfig:
    """Vectorized kernel with small blocks to exercise block boundaries."""
    return SimulatorConfig(
        default_trial_count=100_000,
        max_trials_per_loop=1_000_000_000,
        vectorized=True,
        vector_block_size=4_096,
    )


# =============================================================================
# RANDOMNESS
# =============================================================================

@pytest.fixture
def fixed_seed() -> int:
    """Standard seed for reproducible tests."""
    return BENCHMARK_SEED


@pytest.fixture
def reproducible_rng(fixed_seed: int) -> np.random.Generator:
    """Seeded generator for single-game tests."""
    return np.random.default_rng(fixed_seed)


# =============================================================================
# ENGINES
# =============================================================================

@pytest.fixture
def engine(default_config: SimulatorConfig) -> SimulationEngine:
    return SimulationEngine(config=default_config)


@pytest.fixture
def vectorized_engine(vectorized_config: SimulatorConfig) -> SimulationEngine:
    return SimulationEngine(config=vectorized_config)


# =============================================================================
# PROGRESS
# =============================================================================

@dataclass
class ProgressRecorder:
    """Progress subscriber that keeps every event it receives."""

    events: list[ProgressEvent] = field(default_factory=list)

    def __call__(self, event: ProgressEvent) -> None:
        self.events.append(event)

    @property
    def completed(self) -> list[int]:
        return [event.completed_trials for event in self.events]


@pytest.fixture
def progress_recorder() -> ProgressRecorder:
    return ProgressRecorder()
