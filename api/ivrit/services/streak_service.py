"""
Daily study streak tracking.

The streak counts consecutive UTC days with at least one submitted review. It is
credited at most once per day: the day last credited is stored on the user, so a
second review the same day (or two concurrent first reviews) cannot increment twice.
"""
import logging
from datetime import date, datetime, timedelta
from typing import NamedTuple, Optional
from sqlmodel import Session

from ivrit.models.models import User
from ivrit.services.review_history_service import has_qualifying_event_in_range
from ivrit.utils.time_utils import day_bounds, start_of_day

logger = logging.getLogger(__name__)


class StreakState(NamedTuple):
    streak_days: int
    counted_on: Optional[date]


def evaluate_streak(
    current: StreakState,
    today: date,
    reviewed_today: bool,
    reviewed_yesterday: bool
) -> StreakState:
    """
    Apply the once-per-day streak transition.

    - Reviewed today, already credited today: unchanged.
    - Reviewed today, reviewed (or credited) yesterday: streak + 1.
    - Reviewed today after a gap: the old streak is broken and today starts a new one (1).
    - Not reviewed today or yesterday with a positive streak: lapsed to 0.
    - Otherwise unchanged.
    """
    yesterday = today - timedelta(days=1)
    continued = reviewed_yesterday or current.counted_on == yesterday

    if reviewed_today:
        if current.counted_on == today:
            return current
        if continued:
            return StreakState(current.streak_days + 1, today)
        return StreakState(1, today)

    if not continued and current.streak_days > 0:
        return StreakState(0, current.counted_on)

    return current


def update_user_streak(session: Session, user: User, now: datetime) -> int:
    """
    Re-evaluate a user's streak from their review history and store any change.

    Must run after the current review's event has been flushed, so that "today"
    already qualifies. Does not commit.

    Returns:
        The streak after the transition
    """
    today = start_of_day(now).date()
    today_start, _ = day_bounds(today)
    yesterday_start, _ = day_bounds(today - timedelta(days=1))

    reviewed_today = has_qualifying_event_in_range(session, user.id, today_start, now + timedelta(microseconds=1))
    reviewed_yesterday = has_qualifying_event_in_range(session, user.id, yesterday_start, today_start)

    current = StreakState(user.streak_days, user.streak_counted_on)
    updated = evaluate_streak(current, today, reviewed_today, reviewed_yesterday)

    if updated != current:
        user.streak_days = updated.streak_days
        user.streak_counted_on = updated.counted_on
        session.add(user)
        logger.info(
            f"Streak for user {user.id}: {current.streak_days} -> {updated.streak_days} "
            f"(reviewed_today={reviewed_today}, reviewed_yesterday={reviewed_yesterday})"
        )

    return updated.streak_days
