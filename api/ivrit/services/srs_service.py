"""
SRS (Spaced Repetition System) service implementing the SuperMemo-2 algorithm.

Pure functions only: given the current review state of a card and a quality score
they compute the next state. Loading and persisting state is done by the caller.
"""
import math
from datetime import datetime, timedelta
from typing import NamedTuple

from ivrit.core.exceptions import InvalidQuality
from ivrit.utils.time_utils import start_of_day

# SM-2 constants
MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_QUALITY = 3
DEFAULT_EASE_FACTOR = 2.5
MIN_EASE_FACTOR = 1.3
DEFAULT_INTERVAL_DAYS = 1
SECOND_INTERVAL_DAYS = 6


class SchedulingState(NamedTuple):
    """The SM-2 fields carried between reviews."""
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval_days: int = DEFAULT_INTERVAL_DAYS
    repetitions: int = 0


class ScheduleResult(NamedTuple):
    """Outcome of scheduling one review."""
    ease_factor: float
    interval_days: int
    repetitions: int
    next_review_at: datetime


def validate_quality(quality) -> int:
    """
    Check that quality is an integer in [0, 5].

    Raises:
        InvalidQuality: If quality is not an int (bools excluded) or is out of range
    """
    if isinstance(quality, bool) or not isinstance(quality, int):
        raise InvalidQuality(quality)
    if quality < MIN_QUALITY or quality > MAX_QUALITY:
        raise InvalidQuality(quality)
    return quality


def update_ease_factor(ease_factor: float, quality: int) -> float:
    """
    Apply the SM-2 ease adjustment, floored at 1.3 and rounded to 2 decimals.

    Failures still erode the ease factor.
    """
    miss = MAX_QUALITY - quality
    new_ease = ease_factor + (0.1 - miss * (0.08 + miss * 0.02))
    new_ease = max(MIN_EASE_FACTOR, new_ease)
    return round(new_ease, 2)


def calculate_next_review_at(interval_days: int, now: datetime) -> datetime:
    """
    Calculate the next review time with calendar-day granularity.

    The card becomes due at midnight, interval_days after the day of review.
    """
    return start_of_day(now) + timedelta(days=interval_days)


def calculate_sm2(state: SchedulingState, quality: int, now: datetime) -> ScheduleResult:
    """
    Compute the next review state for a card.

    Args:
        state: Current ease factor, interval and repetition count
        quality: Self-assessed recall quality (0 = blackout ... 5 = perfect)
        now: Review time

    Returns:
        ScheduleResult with the new ease factor, interval, repetitions and due time

    Raises:
        InvalidQuality: If quality is not an integer in [0, 5]
    """
    quality = validate_quality(quality)

    if quality >= PASSING_QUALITY:
        if state.repetitions == 0:
            interval_days = DEFAULT_INTERVAL_DAYS
        elif state.repetitions == 1:
            interval_days = SECOND_INTERVAL_DAYS
        else:
            # Half-up rounding, so 2.5 days becomes 3
            interval_days = math.floor(state.interval_days * state.ease_factor + 0.5)
        repetitions = state.repetitions + 1
    else:
        # Failed recall: start the card over
        interval_days = DEFAULT_INTERVAL_DAYS
        repetitions = 0

    interval_days = max(DEFAULT_INTERVAL_DAYS, int(interval_days))
    ease_factor = update_ease_factor(state.ease_factor, quality)

    return ScheduleResult(
        ease_factor=ease_factor,
        interval_days=interval_days,
        repetitions=repetitions,
        next_review_at=calculate_next_review_at(interval_days, now),
    )
