"""
Tests for the SM-2 scheduling functions.
"""
from datetime import datetime

import pytest

from ivrit.core.exceptions import InvalidQuality
from ivrit.services.srs_service import (
    SchedulingState,
    calculate_next_review_at,
    calculate_sm2,
    update_ease_factor,
    validate_quality,
)

NOW = datetime(2024, 3, 10, 14, 30)


class TestCalculateSM2:
    """Validate SM-2 outputs for key quality grades."""

    def test_first_pass_is_one_day(self):
        result = calculate_sm2(SchedulingState(), 4, NOW)
        assert result.repetitions == 1
        assert result.interval_days == 1
        assert result.ease_factor == 2.5

    def test_second_pass_is_six_days(self):
        result = calculate_sm2(SchedulingState(2.5, 1, 1), 4, NOW)
        assert result.repetitions == 2
        assert result.interval_days == 6

    def test_third_pass_multiplies_by_ease(self):
        result = calculate_sm2(SchedulingState(2.5, 6, 2), 4, NOW)
        assert result.repetitions == 3
        assert result.interval_days == 15

    def test_perfect_passes_grow_ease_and_interval(self):
        state = SchedulingState()
        intervals = []
        eases = []
        for _ in range(3):
            result = calculate_sm2(state, 5, NOW)
            intervals.append(result.interval_days)
            eases.append(result.ease_factor)
            state = SchedulingState(result.ease_factor, result.interval_days, result.repetitions)
        assert intervals == [1, 6, 16]
        assert eases == [2.6, 2.7, 2.8]

    def test_interval_rounds_half_up(self):
        result = calculate_sm2(SchedulingState(2.5, 5, 2), 4, NOW)
        assert result.interval_days == 13

    def test_fail_resets_repetitions(self):
        result = calculate_sm2(SchedulingState(2.5, 30, 5), 1, NOW)
        assert result.repetitions == 0
        assert result.interval_days == 1

    def test_fail_still_lowers_ease(self):
        result = calculate_sm2(SchedulingState(2.5, 30, 5), 1, NOW)
        assert result.ease_factor == 1.96

    def test_quality_3_is_passing(self):
        result = calculate_sm2(SchedulingState(), 3, NOW)
        assert result.repetitions == 1
        assert result.ease_factor == 2.36

    def test_quality_2_is_fail(self):
        result = calculate_sm2(SchedulingState(2.5, 10, 3), 2, NOW)
        assert result.repetitions == 0
        assert result.interval_days == 1

    def test_ease_never_below_1_3(self):
        """Repeated blackouts should not push the ease factor below 1.3."""
        state = SchedulingState()
        for _ in range(20):
            result = calculate_sm2(state, 0, NOW)
            state = SchedulingState(result.ease_factor, result.interval_days, result.repetitions)
            assert result.ease_factor >= 1.3
        assert state.ease_factor == 1.3

    def test_next_review_is_midnight_after_interval(self):
        result = calculate_sm2(SchedulingState(2.5, 1, 1), 5, NOW)
        assert result.next_review_at == datetime(2024, 3, 16)

    def test_invalid_quality_raises(self):
        for quality in (6, -1):
            with pytest.raises(InvalidQuality):
                calculate_sm2(SchedulingState(), quality, NOW)


class TestValidateQuality:

    @pytest.mark.parametrize("quality", [0, 1, 2, 3, 4, 5])
    def test_accepts_range(self, quality):
        assert validate_quality(quality) == quality

    @pytest.mark.parametrize("quality", [-1, 6, 2.5, "4", None, True])
    def test_rejects_everything_else(self, quality):
        with pytest.raises(InvalidQuality):
            validate_quality(quality)


class TestHelpers:

    def test_update_ease_factor_perfect(self):
        assert update_ease_factor(2.5, 5) == 2.6

    def test_update_ease_factor_floor(self):
        assert update_ease_factor(1.35, 0) == 1.3

    def test_next_review_drops_time_of_day(self):
        assert calculate_next_review_at(1, datetime(2024, 12, 31, 23, 59)) == datetime(2025, 1, 1)
