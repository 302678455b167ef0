"""
Review submission and study statistics.

submit_review is the one write path for scheduling state. Its steps run in a
fixed order inside one transaction:

1. validate the quality score
2. check the user and card exist (nothing is written for a missing card)
3. load the card's review state, locked, or fall back to defaults
4. compute the next state with SM-2 and upsert it
5. compute the reward, append the review event and credit the in-app coins
6. update the daily streak (sees the event appended in step 5)
7. commit

Only then are the best-effort collaborators called: the reminder scheduler and
the external reward ledger. Their failures are logged and recorded, never raised.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import List, NamedTuple, Optional
from sqlmodel import Session

from ivrit.core.config import settings
from ivrit.core.exceptions import UserNotFound
from ivrit.models.models import ReviewEvent, User
from ivrit.services.card_service import get_card
from ivrit.services.ledger_service import RewardLedger, settle_review_reward
from ivrit.services.reminder_service import ReminderScheduler, review_reminder_payload
from ivrit.services.review_history_service import append_review_event, count_events_in_range, list_review_events
from ivrit.services.review_state_service import (
    count_due_review_states,
    count_review_states,
    get_review_state,
    scheduling_state_of,
    upsert_review_state,
)
from ivrit.services.reward_service import calculate_reward
from ivrit.services.srs_service import calculate_sm2, validate_quality
from ivrit.services.streak_service import update_user_streak
from ivrit.utils.locks import KeyedLocks
from ivrit.utils.time_utils import day_bounds, utc_now

logger = logging.getLogger(__name__)

# Serializes writers of one (user, card) review state, and of one user's streak
review_state_locks = KeyedLocks()
user_locks = KeyedLocks()


class ReviewOutcome(NamedTuple):
    coins_earned: Decimal
    next_review_at: datetime
    new_streak: int
    ease_factor: float
    interval_days: int
    repetitions: int
    settlement_status: Optional[str] = None


class StudyStats(NamedTuple):
    total_cards: int
    due_count: int
    reviewed_today: int
    streak_days: int
    total_coins: Decimal
    hebrew_level: int
    next_level_progress: float


def submit_review(
    session: Session,
    user_id: int,
    card_id: int,
    quality: int,
    ledger: RewardLedger,
    reminders: ReminderScheduler,
    now: Optional[datetime] = None
) -> ReviewOutcome:
    """
    Record one review of a card and reschedule it.

    Args:
        session: Database session
        user_id: The learner
        card_id: The reviewed card
        quality: Recall quality, an integer 0-5
        ledger: External reward ledger (best-effort)
        reminders: Reminder scheduler (best-effort)
        now: Review time, defaults to the current UTC time

    Returns:
        ReviewOutcome with coins earned, next due time, streak and new SM-2 state

    Raises:
        InvalidQuality: If quality is not an integer in [0, 5]
        UserNotFound: If the user does not exist
        CardNotFound: If the card is not in the catalog
        ConflictError: If the review state was created concurrently
    """
    quality = validate_quality(quality)
    now = now or utc_now()

    user = session.get(User, user_id)
    if not user:
        raise UserNotFound(user_id)
    card = get_card(session, card_id)

    with review_state_locks.hold((user_id, card_id)), user_locks.hold(user_id):
        try:
            session.refresh(user)
            existing = get_review_state(session, user_id, card_id, for_update=True)
            result = calculate_sm2(scheduling_state_of(existing), quality, now)
            upsert_review_state(session, user_id, card_id, result, now, existing=existing)

            coins_earned = calculate_reward(quality, card.difficulty_level)
            event = append_review_event(session, user_id, card_id, quality, coins_earned, now)
            event_id = event.id

            user.total_coins = Decimal(user.total_coins or 0) + coins_earned
            session.add(user)

            new_streak = update_user_streak(session, user, now)
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Error submitting review for user {user_id}, card {card_id}: {str(e)}")
            raise

    logger.info(
        f"Reviewed card {card_id} for user {user_id} (q={quality}) -> reps={result.repetitions} "
        f"ef={result.ease_factor:.2f} interval={result.interval_days} next={result.next_review_at} "
        f"coins={coins_earned} streak={new_streak}"
    )

    try:
        reminders.schedule_at(result.next_review_at, review_reminder_payload(user_id, card_id))
    except Exception as e:
        # Reminders are fire-and-forget; the review is already recorded
        logger.warning(f"Could not schedule reminder for user {user_id}, card {card_id}: {str(e)}")

    settlement_status = None
    try:
        settlement = settle_review_reward(session, ledger, user_id, event_id, coins_earned)
        if settlement is not None:
            settlement_status = settlement.status
    except Exception as e:
        session.rollback()
        logger.error(f"Could not record reward settlement for review event {event_id}: {str(e)}")

    return ReviewOutcome(
        coins_earned=coins_earned,
        next_review_at=result.next_review_at,
        new_streak=new_streak,
        ease_factor=result.ease_factor,
        interval_days=result.interval_days,
        repetitions=result.repetitions,
        settlement_status=settlement_status,
    )


def calculate_level(total_cards: int, cards_per_level: int) -> tuple[int, float]:
    """Hebrew level (starting at 1) and percent progress towards the next one."""
    level = 1 + total_cards // cards_per_level
    progress = (total_cards % cards_per_level) / cards_per_level * 100
    return level, progress


def get_study_stats(session: Session, user_id: int, now: Optional[datetime] = None) -> StudyStats:
    """
    Summary of a user's study: cards started, cards due, reviews today and streak.

    Raises:
        UserNotFound: If the user does not exist
    """
    user = session.get(User, user_id)
    if not user:
        raise UserNotFound(user_id)
    now = now or utc_now()

    total_cards = count_review_states(session, user_id)
    due_count = count_due_review_states(session, user_id, now)
    today_start, today_end = day_bounds(now.date())
    reviewed_today = count_events_in_range(session, user_id, today_start, today_end)
    hebrew_level, next_level_progress = calculate_level(total_cards, settings.cards_per_level)

    return StudyStats(
        total_cards=total_cards,
        due_count=due_count,
        reviewed_today=reviewed_today,
        streak_days=user.streak_days,
        total_coins=Decimal(user.total_coins or 0),
        hebrew_level=hebrew_level,
        next_level_progress=next_level_progress,
    )


def get_reward_history(session: Session, user_id: int, limit: int = 50) -> List[ReviewEvent]:
    """
    The user's most recent reviews and their rewards.

    Raises:
        UserNotFound: If the user does not exist
    """
    if not session.get(User, user_id):
        raise UserNotFound(user_id)
    return list_review_events(session, user_id, limit)
