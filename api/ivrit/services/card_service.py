"""
Card catalog service for the Hebrew vocabulary deck.
"""
import logging
from typing import List, Optional
from sqlmodel import Session, select

from ivrit.core.exceptions import CardNotFound, ValidationError
from ivrit.models.models import HebrewCard, ReviewState

logger = logging.getLogger(__name__)


# Learning categories offered to clients
CARD_CATEGORIES = [
    {"id": "vocabulary", "name": "Vocabulary", "description": "Basic Hebrew words"},
    {"id": "biblical", "name": "Biblical Terms", "description": "Words from Torah and Tanakh"},
    {"id": "modern", "name": "Modern Hebrew", "description": "Contemporary vocabulary"},
    {"id": "prayers", "name": "Prayer Vocabulary", "description": "Words used in Israelite prayers"},
    {"id": "holidays", "name": "Holiday Terms", "description": "Festival and holiday vocabulary"},
    {"id": "family", "name": "Family Terms", "description": "Family relationship words"},
    {"id": "numbers", "name": "Numbers", "description": "Hebrew numerals and counting"},
    {"id": "colors", "name": "Colors", "description": "Color vocabulary"},
    {"id": "time", "name": "Time", "description": "Days, months, seasons"},
    {"id": "food", "name": "Food & Kosher", "description": "Food-related vocabulary"},
]


def get_card(session: Session, card_id: int) -> HebrewCard:
    """
    Look up a card in the catalog.

    Raises:
        CardNotFound: If no card has this id
    """
    card = session.get(HebrewCard, card_id)
    if not card:
        raise CardNotFound(card_id)
    return card


def list_cards(session: Session, category: Optional[str] = None) -> List[HebrewCard]:
    """List catalog cards, easiest first, optionally restricted to one category."""
    query = select(HebrewCard)
    if category:
        query = query.where(HebrewCard.category == category)
    query = query.order_by(HebrewCard.difficulty_level, HebrewCard.id)  # type: ignore
    return list(session.exec(query).all())


def list_cards_excluding_reviewed_by_difficulty(
    session: Session,
    user_id: int,
    limit: int
) -> List[HebrewCard]:
    """
    Cards the user has no review state for, ordered by ascending difficulty.

    Args:
        session: Database session
        user_id: The learner
        limit: Maximum number of cards to return

    Returns:
        Up to limit cards, easiest first (ties broken by card id)
    """
    started_card_ids = select(ReviewState.card_id).where(ReviewState.user_id == user_id)
    query = (
        select(HebrewCard)
        .where(HebrewCard.id.not_in(started_card_ids))  # type: ignore[union-attr]
        .order_by(HebrewCard.difficulty_level, HebrewCard.id)  # type: ignore
        .limit(limit)
    )
    return list(session.exec(query).all())


def create_card(
    session: Session,
    word_hebrew: str,
    word_english: str,
    transliteration: str,
    difficulty_level: int,
    category: str,
    gematria_value: Optional[int] = None,
    audio_url: Optional[str] = None,
) -> HebrewCard:
    """
    Add a card to the catalog.

    Raises:
        ValidationError: If a required text field is blank
    """
    fields = {
        "word_hebrew": word_hebrew,
        "word_english": word_english,
        "transliteration": transliteration,
        "category": category,
    }
    for name, value in fields.items():
        if not value or not value.strip():
            raise ValidationError(f"{name} must not be empty")

    card = HebrewCard(
        word_hebrew=word_hebrew.strip(),
        word_english=word_english.strip(),
        transliteration=transliteration.strip(),
        difficulty_level=difficulty_level,
        category=category.strip().lower(),
        gematria_value=gematria_value,
        audio_url=audio_url,
    )
    session.add(card)
    session.commit()
    session.refresh(card)

    logger.info(f"Created card {card.id} ({card.word_english!r}, difficulty={card.difficulty_level})")
    return card
