"""
Centralized tolerance framework for simulated win ratios.

All tolerances are derived from the binomial standard error, not ad hoc tuning.

Tolerance Tiers:
    Tier 1 (Exact): Deterministic bookkeeping (counts, chunk sums)
    Tier 2 (Stochastic): CLT-derived bounds on win ratios
    Tier 3 (Legacy): Fixed 0.33 / 0.66 +/- 0.02 bands for default-size runs

References:
    [T1] Selvin (1975) "A Problem in Probability", The American Statistician
    [T1] Binomial proportion standard error: sqrt(p(1 - p) / N)
"""

import numpy as np
from typing import Final

# =============================================================================
# Theoretical Win Probabilities
# =============================================================================

#: [T1] Staying wins iff the first pick hides the car
STAY_WIN_PROBABILITY: Final[float] = 1.0 / 3.0

#: [T1] Switching wins iff the first pick hides a goat
SWITCH_WIN_PROBABILITY: Final[float] = 2.0 / 3.0


# =============================================================================
# Tier 1: Exact Tolerances
# =============================================================================

#: Ratios computed from integer counts; float64 division error only
RATIO_ARITHMETIC_TOLERANCE: Final[float] = 1e-12


# =============================================================================
# Tier 2: Stochastic Tolerances (CLT-Derived)
# =============================================================================


def ratio_tolerance(
    n_trials: int,
    probability: float = STAY_WIN_PROBABILITY,
    confidence: float = 4.0,
) -> float:
    """
    Calculate CLT-derived tolerance for a simulated win ratio.

    [T1] Standard error of a binomial proportion is sqrt(p(1-p)/N).
    4 standard errors keeps false failures below 1 in 15,000 runs.

    Parameters
    ----------
    n_trials : int
        Number of simulated games
    probability : float
        True win probability of the strategy
    confidence : float
        Number of standard errors

    Returns
    -------
    float
        Absolute tolerance on the win ratio

    Examples
    --------
    >>> ratio_tolerance(100_000)
    0.0059...
    """
    if n_trials <= 0:
        raise ValueError(f"CRITICAL: n_trials must be > 0, got {n_trials}")
    return confidence * float(np.sqrt(probability * (1.0 - probability) / n_trials))


#: Ratio tolerance for 10,000 games: 4 * sqrt(2/9 / 1e4) ≈ 0.019
RATIO_10K_TOLERANCE: Final[float] = 0.02

#: Ratio tolerance for 100,000 games: 4 * sqrt(2/9 / 1e5) ≈ 0.006
RATIO_100K_TOLERANCE: Final[float] = 0.006


# =============================================================================
# Tier 3: Legacy Bands
# =============================================================================

#: Band around 0.33 / 0.66 accepted for the default 100,000 game run
DEFAULT_RUN_RATIO_BAND: Final[float] = 0.02


# =============================================================================
# Tolerance Registry (For Dynamic Access)
# =============================================================================

TOLERANCE_REGISTRY: dict[str, float] = {
    "ratio_arithmetic": RATIO_ARITHMETIC_TOLERANCE,
    "ratio_10k": RATIO_10K_TOLERANCE,
    "ratio_100k": RATIO_100K_TOLERANCE,
    "default_run_band": DEFAULT_RUN_RATIO_BAND,
}


def get_tolerance(name: str) -> float:
    """
    Get tolerance by name from registry.

    Raises
    ------
    KeyError
        If tolerance name not found
    """
    if name not in TOLERANCE_REGISTRY:
        available = ", ".join(sorted(TOLERANCE_REGISTRY.keys()))
        raise KeyError(f"Unknown tolerance '{name}'. Available: {available}")
    return TOLERANCE_REGISTRY[name]
