"""
Frozen configuration settings for the Monty Hall simulator.

All configuration is immutable (frozen dataclasses) so an engine captures one
consistent set of defaults and limits for its whole lifetime.
Environment variables override a few defaults, resolved once at construction.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

# =============================================================================
# Engine Limits
# =============================================================================

#: Trials run when the caller asks for none (or a non-positive count)
DEFAULT_TRIAL_COUNT = 100_000

#: Worker threads used when the caller asks for none (or a non-positive count)
DEFAULT_THREAD_COUNT = 1

#: Largest accepted trial count: int64 max - 1
MAX_TRIAL_COUNT = 2**63 - 2

#: Upper bound on trials dispatched in a single chunk
MAX_TRIALS_PER_LOOP = 1_000_000_000

#: Share of logical cores the engine may occupy
CORE_FRACTION = 0.75

#: Games evaluated per NumPy allocation in vectorized mode
VECTOR_BLOCK_SIZE = 65_536


# =============================================================================
# Environment Resolution
# =============================================================================

def _env_int(name: str) -> Optional[int]:
    """Read an integer environment variable, None if unset or blank."""
    raw = os.environ.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw.replace("_", ""))
    except ValueError as e:
        raise ValueError(f"CRITICAL: {name} must be an integer, got {raw!r}") from e


def _resolve_default_trials() -> int:
    """
    Resolve the default trial count.

    Priority:
    1. MONTY_HALL_DEFAULT_TRIALS environment variable (if set)
    2. DEFAULT_TRIAL_COUNT
    """
    value = _env_int("MONTY_HALL_DEFAULT_TRIALS")
    return DEFAULT_TRIAL_COUNT if value is None else value


def _resolve_trials_per_loop() -> int:
    """Resolve chunk size from MONTY_HALL_TRIALS_PER_LOOP, else MAX_TRIALS_PER_LOOP."""
    value = _env_int("MONTY_HALL_TRIALS_PER_LOOP")
    return MAX_TRIALS_PER_LOOP if value is None else value


def _resolve_vectorized() -> bool:
    return os.environ.get("MONTY_HALL_VECTORIZED", "").lower() in ("1", "true", "yes")


def _resolve_seed() -> Optional[int]:
    return _env_int("MONTY_HALL_SEED")


def logical_core_count() -> int:
    """Number of logical cores visible to this process (at least 1)."""
    return os.cpu_count() or 1


# =============================================================================
# Simulator Configuration
# =============================================================================

@dataclass(frozen=True)
class SimulatorConfig:
    """
    Immutable simulator configuration.

    Attributes
    ----------
    default_trial_count : int
        Trials substituted for a non-positive request.
        Override with MONTY_HALL_DEFAULT_TRIALS.
    default_thread_count : int
        Threads substituted for a non-positive request
    max_trial_count : int
        Trial requests above this are clamped down
    max_trials_per_loop : int
        Chunk size cap; bounds how many trials are in flight at once.
        Override with MONTY_HALL_TRIALS_PER_LOOP.
    core_fraction : float
        Fraction of logical cores usable as worker threads
    vectorized : bool
        Play games with the NumPy block kernel instead of one at a time.
        Override with MONTY_HALL_VECTORIZED=1.
    vector_block_size : int
        Games per NumPy allocation in vectorized mode
    strict : bool
        Raise InvalidSimulationRequest for non-positive inputs instead of
        silently substituting defaults
    seed : int, optional
        Base entropy mixed into every per-thread generator seed.
        Override with MONTY_HALL_SEED.
    use_environment : bool
        Resolve unset fields from the MONTY_HALL_* variables. When False,
        unset fields take the module defaults.
    """

    default_trial_count: int = None  # type: ignore[assignment]  # Set in __post_init__
    default_thread_count: int = DEFAULT_THREAD_COUNT
    max_trial_count: int = MAX_TRIAL_COUNT
    max_trials_per_loop: int = None  # type: ignore[assignment]  # Set in __post_init__
    core_fraction: float = CORE_FRACTION
    vectorized: bool = None  # type: ignore[assignment]  # Set in __post_init__
    vector_block_size: int = VECTOR_BLOCK_SIZE
    strict: bool = False
    seed: Optional[int] = None
    use_environment: bool = True

    def __post_init__(self) -> None:
        """Resolve environment defaults and validate limits."""
        env = self.use_environment
        # Frozen dataclass workaround: use object.__setattr__
        if self.default_trial_count is None:
            object.__setattr__(
                self,
                "default_trial_count",
                _resolve_default_trials() if env else DEFAULT_TRIAL_COUNT,
            )
        if self.max_trials_per_loop is None:
            object.__setattr__(
                self,
                "max_trials_per_loop",
                _resolve_trials_per_loop() if env else MAX_TRIALS_PER_LOOP,
            )
        if self.vectorized is None:
            object.__setattr__(self, "vectorized", _resolve_vectorized() if env else False)
        if self.seed is None and env:
            object.__setattr__(self, "seed", _resolve_seed())

        if self.default_trial_count <= 0:
            raise ValueError(
                f"CRITICAL: default_trial_count must be > 0, got {self.default_trial_count}"
            )
        if self.default_thread_count <= 0:
            raise ValueError(
                f"CRITICAL: default_thread_count must be > 0, got {self.default_thread_count}"
            )
        if self.max_trial_count <= 0:
            raise ValueError(f"CRITICAL: max_trial_count must be > 0, got {self.max_trial_count}")
        if self.max_trials_per_loop <= 0:
            raise ValueError(
                f"CRITICAL: max_trials_per_loop must be > 0, got {self.max_trials_per_loop}"
            )
        if not 0.0 < self.core_fraction <= 1.0:
            raise ValueError(
                f"CRITICAL: core_fraction must be in (0, 1], got {self.core_fraction}"
            )
        if self.vector_block_size <= 0:
            raise ValueError(
                f"CRITICAL: vector_block_size must be > 0, got {self.vector_block_size}"
            )
        if self.seed is not None and self.seed < 0:
            raise ValueError(f"CRITICAL: seed must be >= 0, got {self.seed}")

    @property
    def max_thread_count(self) -> int:
        """Thread ceiling: floor(core_fraction * logical cores), at least 1."""
        return max_thread_count(self)


def max_thread_count(config: Optional[SimulatorConfig] = None) -> int:
    """
    Compute the worker-thread ceiling.

    [T1] floor(3 * cores / 4) leaves headroom for the host system.
    Never less than 1, so single-core hosts can still run.
    """
    fraction = CORE_FRACTION if config is None else config.core_fraction
    return max(1, int(logical_core_count() * fraction))


# =============================================================================
# Global Settings Instance
# =============================================================================

def _load_settings() -> SimulatorConfig:
    """
    Build the process-wide defaults without failing at import time.

    Invalid MONTY_HALL_* overrides are logged and ignored here; constructing
    SimulatorConfig() directly still raises for them.
    """
    try:
        return SimulatorConfig()
    except ValueError as e:
        logger.warning(f"Ignoring MONTY_HALL_* overrides for SETTINGS: {e}")
        return SimulatorConfig(use_environment=False)


SETTINGS = _load_settings()
