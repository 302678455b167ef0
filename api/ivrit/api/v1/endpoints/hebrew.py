"""
Hebrew vocabulary endpoints: study queues, review submission, stats and catalog.
"""
# pyright: reportAttributeAccessIssue=false
# pyright: reportCallIssue=false
# pyright: reportArgumentType=false
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import Optional
import logging

from ivrit.core.config import settings
from ivrit.core.database import get_session
from ivrit.core.dependencies import get_reminder_scheduler, get_reward_ledger
from ivrit.models.models import HebrewCard, ReviewState
from ivrit.schemas.card import (
    CardResponse,
    CardsResponse,
    CategoryResponse,
    CreateCardRequest,
    StudyCardResponse,
    StudyCardsResponse,
)
from ivrit.schemas.review import (
    RewardEventResponse,
    RewardHistoryResponse,
    StudyStatsResponse,
    SubmitReviewRequest,
    SubmitReviewResponse,
)
from ivrit.services.card_service import CARD_CATEGORIES, create_card, list_cards
from ivrit.services.ledger_service import RewardLedger
from ivrit.services.reminder_service import ReminderScheduler
from ivrit.services.review_service import get_reward_history, get_study_stats, submit_review
from ivrit.services.selection_service import list_due_cards, list_new_cards

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/hebrew", tags=["hebrew"])


def _study_card(card: HebrewCard, review_state: Optional[ReviewState]) -> StudyCardResponse:
    response = StudyCardResponse.model_validate(card, from_attributes=True)
    if review_state is not None:
        response.ease_factor = review_state.ease_factor
        response.interval_days = review_state.interval_days
        response.repetitions = review_state.repetitions
        response.next_review_at = review_state.next_review_at
        response.last_reviewed_at = review_state.last_reviewed_at
    return response


@router.get("/review-cards", response_model=StudyCardsResponse)
async def get_review_cards(
    user_id: int,
    limit: int = Query(default=settings.default_due_limit),
    session: Session = Depends(get_session)
):
    """Get the user's cards due for review, most overdue first."""
    due = list_due_cards(session, user_id, limit)
    return StudyCardsResponse(
        cards=[_study_card(card, review_state) for review_state, card in due]
    )


@router.get("/new-cards", response_model=StudyCardsResponse)
async def get_new_cards(
    user_id: int,
    limit: int = Query(default=settings.default_new_limit),
    reserve: bool = True,
    session: Session = Depends(get_session)
):
    """
    Get cards the user has never studied, easiest first.

    By default the returned cards are started for the user (they join the review
    queue immediately). Pass reserve=false to preview without starting them.
    """
    selected = list_new_cards(session, user_id, limit, reserve=reserve)
    return StudyCardsResponse(
        cards=[_study_card(card, review_state) for card, review_state in selected]
    )


@router.post("/review", response_model=SubmitReviewResponse, status_code=status.HTTP_200_OK)
async def post_review(
    request: SubmitReviewRequest,
    session: Session = Depends(get_session),
    ledger: RewardLedger = Depends(get_reward_ledger),
    reminders: ReminderScheduler = Depends(get_reminder_scheduler)
):
    """
    Submit a review of one card.

    Reschedules the card with SM-2, credits coins and updates the daily streak.
    Reward settlement and the reminder are best-effort and may lag.
    """
    outcome = submit_review(
        session,
        request.user_id,
        request.card_id,
        request.quality,
        ledger=ledger,
        reminders=reminders
    )
    return SubmitReviewResponse(**outcome._asdict())


@router.get("/stats", response_model=StudyStatsResponse)
async def get_stats(
    user_id: int,
    session: Session = Depends(get_session)
):
    """Get the user's study statistics."""
    stats = get_study_stats(session, user_id)
    return StudyStatsResponse(**stats._asdict())


@router.get("/rewards", response_model=RewardHistoryResponse)
async def get_rewards(
    user_id: int,
    limit: int = Query(default=50, ge=1, le=500),
    session: Session = Depends(get_session)
):
    """Get the user's recent reviews and the coins each earned, newest first."""
    events = get_reward_history(session, user_id, limit)
    return RewardHistoryResponse(
        events=[RewardEventResponse.model_validate(event) for event in events]
    )


@router.get("/cards", response_model=CardsResponse)
async def get_cards(
    category: Optional[str] = None,
    session: Session = Depends(get_session)
):
    """Get catalog cards, optionally filtered by category. Sorted easiest first."""
    cards = list_cards(session, category)
    return CardsResponse(cards=[CardResponse.model_validate(card) for card in cards])


@router.post("/cards", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
async def post_card(
    request: CreateCardRequest,
    session: Session = Depends(get_session)
):
    """Add a card to the catalog."""
    card = create_card(
        session,
        word_hebrew=request.word_hebrew,
        word_english=request.word_english,
        transliteration=request.transliteration,
        difficulty_level=request.difficulty_level,
        category=request.category,
        gematria_value=request.gematria_value,
        audio_url=request.audio_url
    )
    return CardResponse.model_validate(card)


@router.get("/categories", response_model=list[CategoryResponse])
async def get_categories():
    """Get the available Hebrew learning categories."""
    return [CategoryResponse(**category) for category in CARD_CATEGORIES]
