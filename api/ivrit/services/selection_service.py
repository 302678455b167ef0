"""
Selection of cards to study: cards due for review and cards never seen.
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple
from sqlmodel import Session
from sqlalchemy.exc import IntegrityError

from ivrit.core.exceptions import ConflictError, UserNotFound, ValidationError
from ivrit.models.models import HebrewCard, ReviewState, User
from ivrit.services.card_service import list_cards_excluding_reviewed_by_difficulty
from ivrit.services.review_state_service import create_initial_review_state, list_due_review_states
from ivrit.utils.time_utils import utc_now

logger = logging.getLogger(__name__)


def _validate_request(session: Session, user_id: int, limit: int) -> None:
    if limit < 0:
        raise ValidationError("limit must be >= 0")
    if not session.get(User, user_id):
        raise UserNotFound(user_id)


def list_due_cards(
    session: Session,
    user_id: int,
    limit: int,
    now: Optional[datetime] = None
) -> List[Tuple[ReviewState, HebrewCard]]:
    """
    Cards due for review, most overdue first. Read-only.

    Raises:
        ValidationError: If limit is negative
        UserNotFound: If the user does not exist
    """
    _validate_request(session, user_id, limit)
    now = now or utc_now()

    due = list_due_review_states(session, user_id, now, limit)
    logger.info(f"Found {len(due)} due card(s) for user {user_id}")
    return due


def list_new_cards(
    session: Session,
    user_id: int,
    limit: int,
    now: Optional[datetime] = None,
    reserve: bool = True
) -> List[Tuple[HebrewCard, Optional[ReviewState]]]:
    """
    Cards the user has never started, easiest first.

    With reserve (the default) each returned card is started for the user: an
    initial review state is created, due immediately, so the card will show up
    among the due cards from now on. Without reserve the listing has no side
    effects and the card is started by its first review instead.

    Returns:
        (card, review state) pairs; the state is None when not reserving

    Raises:
        ValidationError: If limit is negative
        UserNotFound: If the user does not exist
        ConflictError: If a concurrent request started one of the cards first
    """
    _validate_request(session, user_id, limit)
    now = now or utc_now()

    cards = list_cards_excluding_reviewed_by_difficulty(session, user_id, limit)
    if not reserve:
        return [(card, None) for card in cards]

    selected = []
    for card in cards:
        review_state = create_initial_review_state(session, user_id, card.id, now)
        selected.append((card, review_state))

    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"Concurrent start of new cards for user {user_id}: {e}")
        raise ConflictError("New cards were started concurrently, please retry") from e

    for _, review_state in selected:
        session.refresh(review_state)

    logger.info(f"Started {len(selected)} new card(s) for user {user_id}")
    return selected
