"""Tests for plate-increment rounding."""

import math

import pytest

from progression_engine.math.rounding import round_to_increment


class TestRoundToIncrement:
    def test_exact_multiple_unchanged(self) -> None:
        assert round_to_increment(100.0, 2.5) == 100.0

    def test_rounds_to_nearest(self) -> None:
        assert round_to_increment(101.2, 2.5) == 100.0
        assert round_to_increment(101.3, 2.5) == 102.5

    def test_half_rounds_up(self) -> None:
        # 103.75 is exactly halfway between 102.5 and 105
        assert round_to_increment(103.75, 2.5) == 105.0
        assert round_to_increment(101.25, 2.5) == 102.5
        assert round_to_increment(102.5, 5.0) == 105.0

    def test_whole_number_granularity(self) -> None:
        assert round_to_increment(67.5, 1.0) == 68.0
        assert round_to_increment(66.5, 1.0) == 67.0

    def test_fractional_granularity(self) -> None:
        assert round_to_increment(20.7, 1.25) == 21.25

    def test_zero_and_negative_clamp_to_zero(self) -> None:
        assert round_to_increment(0.0, 2.5) == 0.0
        assert round_to_increment(-3.0, 2.5) == 0.0

    def test_small_weight_can_round_to_zero(self) -> None:
        assert round_to_increment(1.0, 2.5) == 0.0

    def test_weights_beyond_default_decimal_precision(self) -> None:
        assert round_to_increment(1e30, 2.5) == 1e30
        assert round_to_increment(1e308, 1e-300) == 1e308

    def test_infinite_weight_unchanged(self) -> None:
        assert round_to_increment(math.inf, 2.5) == math.inf

    def test_nan_weight_raises(self) -> None:
        with pytest.raises(ValueError):
            round_to_increment(math.nan, 2.5)

    @pytest.mark.parametrize("granularity", [0.0, -1.0])
    def test_invalid_granularity_raises(self, granularity: float) -> None:
        with pytest.raises(ValueError):
            round_to_increment(100.0, granularity)
