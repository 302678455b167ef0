"""
Persistence of per-user, per-card review state.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple
from sqlmodel import Session, select, func
from sqlalchemy.exc import IntegrityError

from ivrit.core.exceptions import ConflictError
from ivrit.models.models import HebrewCard, ReviewState
from ivrit.services.srs_service import (
    DEFAULT_EASE_FACTOR,
    DEFAULT_INTERVAL_DAYS,
    ScheduleResult,
    SchedulingState,
)

logger = logging.getLogger(__name__)


def get_review_state(
    session: Session,
    user_id: int,
    card_id: int,
    for_update: bool = False
) -> Optional[ReviewState]:
    """
    Load the review state for (user_id, card_id), or None if the card was never started.

    With for_update the row is locked until the transaction ends (ignored by SQLite).
    """
    query = select(ReviewState).where(
        ReviewState.user_id == user_id,
        ReviewState.card_id == card_id
    )
    if for_update:
        query = query.with_for_update()
    return session.exec(query).first()


def scheduling_state_of(review_state: Optional[ReviewState]) -> SchedulingState:
    """SM-2 fields of a stored state, or the defaults for a card never seen."""
    if review_state is None:
        return SchedulingState()
    return SchedulingState(
        ease_factor=float(review_state.ease_factor),
        interval_days=review_state.interval_days,
        repetitions=review_state.repetitions,
    )


def upsert_review_state(
    session: Session,
    user_id: int,
    card_id: int,
    result: ScheduleResult,
    reviewed_at: datetime,
    existing: Optional[ReviewState] = None
) -> ReviewState:
    """
    Write a scheduling result for (user_id, card_id), creating the row if needed.

    The caller passes the row it loaded (if any) so the update applies to the same
    state the result was computed from. A row created concurrently by another
    writer violates the (user_id, card_id) unique constraint.

    Raises:
        ConflictError: If another writer created the row first
    """
    review_state = existing
    if review_state is None:
        review_state = ReviewState(user_id=user_id, card_id=card_id)

    review_state.ease_factor = result.ease_factor
    review_state.interval_days = result.interval_days
    review_state.repetitions = result.repetitions
    review_state.next_review_at = result.next_review_at
    review_state.last_reviewed_at = reviewed_at
    session.add(review_state)

    try:
        session.flush()
    except IntegrityError as e:
        logger.warning(f"Concurrent creation of review state for user {user_id}, card {card_id}: {e}")
        raise ConflictError(
            f"Review state for card {card_id} was modified concurrently, please retry"
        ) from e

    return review_state


def create_initial_review_state(
    session: Session,
    user_id: int,
    card_id: int,
    now: datetime
) -> ReviewState:
    """Start a card for a user: default ease and interval, due immediately."""
    review_state = ReviewState(
        user_id=user_id,
        card_id=card_id,
        ease_factor=DEFAULT_EASE_FACTOR,
        interval_days=DEFAULT_INTERVAL_DAYS,
        repetitions=0,
        next_review_at=now,
        last_reviewed_at=None,
    )
    session.add(review_state)
    return review_state


def list_due_review_states(
    session: Session,
    user_id: int,
    now: datetime,
    limit: int
) -> List[Tuple[ReviewState, HebrewCard]]:
    """
    Review states due at now, most overdue first, joined with their cards.

    Args:
        session: Database session
        user_id: The learner
        now: Query time; states with next_review_at <= now are due
        limit: Maximum number of rows to return

    Returns:
        (ReviewState, HebrewCard) pairs ordered by next_review_at, then id
    """
    query = (
        select(ReviewState, HebrewCard)
        .join(HebrewCard, HebrewCard.id == ReviewState.card_id)
        .where(
            ReviewState.user_id == user_id,
            ReviewState.next_review_at <= now
        )
        .order_by(ReviewState.next_review_at, ReviewState.id)  # type: ignore
        .limit(limit)
    )
    return [(state, card) for state, card in session.exec(query).all()]


def count_review_states(session: Session, user_id: int) -> int:
    """Number of cards the user has started."""
    query = select(func.count(ReviewState.id)).where(ReviewState.user_id == user_id)
    return session.exec(query).one()


def count_due_review_states(session: Session, user_id: int, now: datetime) -> int:
    """Number of the user's cards due at now."""
    query = select(func.count(ReviewState.id)).where(
        ReviewState.user_id == user_id,
        ReviewState.next_review_at <= now
    )
    return session.exec(query).one()
