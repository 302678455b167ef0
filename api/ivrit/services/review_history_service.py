"""
Append-only review history.
"""
from datetime import datetime
from decimal import Decimal
from typing import List
from sqlmodel import Session, select, func

from ivrit.models.models import ReviewEvent


def append_review_event(
    session: Session,
    user_id: int,
    card_id: int,
    quality: int,
    coins_earned: Decimal,
    reviewed_at: datetime
) -> ReviewEvent:
    """Record one submitted review. Events are never updated afterwards."""
    event = ReviewEvent(
        user_id=user_id,
        card_id=card_id,
        quality=quality,
        coins_earned=coins_earned,
        reviewed_at=reviewed_at,
    )
    session.add(event)
    session.flush()  # Flush so range queries in the same transaction see it
    return event


def has_qualifying_event_in_range(
    session: Session,
    user_id: int,
    start: datetime,
    end: datetime
) -> bool:
    """True if the user submitted any review in [start, end), whatever its quality."""
    query = (
        select(ReviewEvent.id)
        .where(
            ReviewEvent.user_id == user_id,
            ReviewEvent.reviewed_at >= start,
            ReviewEvent.reviewed_at < end
        )
        .limit(1)
    )
    return session.exec(query).first() is not None


def count_events_in_range(
    session: Session,
    user_id: int,
    start: datetime,
    end: datetime
) -> int:
    """Number of reviews the user submitted in [start, end)."""
    query = select(func.count(ReviewEvent.id)).where(
        ReviewEvent.user_id == user_id,
        ReviewEvent.reviewed_at >= start,
        ReviewEvent.reviewed_at < end
    )
    return session.exec(query).one()


def list_review_events(session: Session, user_id: int, limit: int) -> List[ReviewEvent]:
    """The user's most recent reviews with the coins each earned."""
    query = (
        select(ReviewEvent)
        .where(ReviewEvent.user_id == user_id)
        .order_by(ReviewEvent.reviewed_at.desc(), ReviewEvent.id.desc())  # type: ignore
        .limit(limit)
    )
    return list(session.exec(query).all())
