"""
Reward calculation for vocabulary reviews.
"""
from decimal import Decimal, ROUND_HALF_UP

COINS_PER_QUALITY_POINT = Decimal("0.1")
DIFFICULTY_STEP = Decimal("0.2")
CENT = Decimal("0.01")


def calculate_reward(quality: int, difficulty_level: int) -> Decimal:
    """
    Coins earned for a review: quality x 0.1, scaled by 1 + (difficulty - 1) x 0.2.

    Rounded half-up to 2 decimal places and never negative, so unusually low
    difficulty values cannot produce a debit.
    """
    base = Decimal(quality) * COINS_PER_QUALITY_POINT
    multiplier = 1 + (Decimal(difficulty_level) - 1) * DIFFICULTY_STEP
    reward = (base * multiplier).quantize(CENT, rounding=ROUND_HALF_UP)
    if reward < 0:
        return Decimal("0.00")
    return reward
