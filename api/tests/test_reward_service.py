"""
Tests for review reward calculation.
"""
from decimal import Decimal

import pytest

from ivrit.services.reward_service import calculate_reward


class TestCalculateReward:

    @pytest.mark.parametrize("quality, difficulty, expected", [
        (0, 1, "0.00"),
        (0, 5, "0.00"),
        (4, 1, "0.40"),
        (3, 2, "0.36"),
        (5, 1, "0.50"),
        (5, 5, "0.90"),
    ])
    def test_known_values(self, quality, difficulty, expected):
        assert calculate_reward(quality, difficulty) == Decimal(expected)

    def test_two_decimal_places(self):
        assert calculate_reward(1, 2).as_tuple().exponent == -2

    def test_monotonic_in_quality(self):
        rewards = [calculate_reward(q, 3) for q in range(6)]
        assert rewards == sorted(rewards)

    def test_monotonic_in_difficulty(self):
        rewards = [calculate_reward(4, d) for d in range(1, 6)]
        assert rewards == sorted(rewards)

    def test_below_range_difficulty_is_never_negative(self):
        assert calculate_reward(5, 0) == Decimal("0.40")
        assert calculate_reward(5, -5) == Decimal("0.00")
