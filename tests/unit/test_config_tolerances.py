"""
Tests for Tolerance Framework - config/tolerances.py.

Verifies theoretical probabilities, CLT-based ratio tolerances
and the tolerance registry.
"""

import math

import pytest

from monty_hall_sim.config.tolerances import (
    DEFAULT_RUN_RATIO_BAND,
    RATIO_100K_TOLERANCE,
    RATIO_10K_TOLERANCE,
    RATIO_ARITHMETIC_TOLERANCE,
    STAY_WIN_PROBABILITY,
    SWITCH_WIN_PROBABILITY,
    TOLERANCE_REGISTRY,
    get_tolerance,
    ratio_tolerance,
)


class TestTheoreticalProbabilities:
    """[T1] Classic Monty Hall probabilities."""

    def test_stay_is_one_third(self) -> None:
        assert STAY_WIN_PROBABILITY == pytest.approx(1 / 3)

    def test_switch_is_two_thirds(self) -> None:
        assert SWITCH_WIN_PROBABILITY == pytest.approx(2 / 3)

    def test_probabilities_sum_to_one(self) -> None:
        assert STAY_WIN_PROBABILITY + SWITCH_WIN_PROBABILITY == pytest.approx(1.0)


class TestRatioTolerance:
    """CLT-derived tolerance sqrt(p(1-p)/N) scaled by confidence."""

    def test_formula(self) -> None:
        expected = 4.0 * math.sqrt((1 / 3) * (2 / 3) / 10_000)
        assert ratio_tolerance(10_000) == pytest.approx(expected)

    def test_shrinks_with_sqrt_n(self) -> None:
        assert ratio_tolerance(400) == pytest.approx(2 * ratio_tolerance(1_600))

    def test_symmetric_in_probability(self) -> None:
        assert ratio_tolerance(1_000, STAY_WIN_PROBABILITY) == pytest.approx(
            ratio_tolerance(1_000, SWITCH_WIN_PROBABILITY)
        )

    def test_named_constants_cover_formula(self) -> None:
        assert RATIO_10K_TOLERANCE >= ratio_tolerance(10_000)
        assert RATIO_100K_TOLERANCE >= ratio_tolerance(100_000) - 1e-12

    def test_default_band_looser_than_clt(self) -> None:
        assert DEFAULT_RUN_RATIO_BAND > ratio_tolerance(100_000)

    def test_invalid_n(self) -> None:
        with pytest.raises(ValueError, match="n_trials"):
            ratio_tolerance(0)


class TestRegistry:
    def test_lookup(self) -> None:
        assert get_tolerance("ratio_arithmetic") == RATIO_ARITHMETIC_TOLERANCE

    def test_all_positive(self) -> None:
        assert all(value > 0 for value in TOLERANCE_REGISTRY.values())

    def test_unknown_name(self) -> None:
        with pytest.raises(KeyError, match="Available"):
            get_tolerance("nope")
