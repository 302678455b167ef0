"""
Hebrew card schemas.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


class CardResponse(BaseModel):
    """Catalog card response schema."""
    id: int
    word_hebrew: str
    word_english: str
    transliteration: str
    difficulty_level: int
    category: str
    gematria_value: Optional[int] = None
    audio_url: Optional[str] = None

    class Config:
        from_attributes = True


class CreateCardRequest(BaseModel):
    """Request schema for adding a card to the catalog."""
    word_hebrew: str = Field(..., min_length=1, description="Word in Hebrew script")
    word_english: str = Field(..., min_length=1, description="English translation")
    transliteration: str = Field(..., min_length=1, description="Latin transliteration")
    difficulty_level: int = Field(1, description="Difficulty, usually 1 (easiest) to 5")
    category: str = Field(..., min_length=1, description="Category id, e.g. 'biblical'")
    gematria_value: Optional[int] = Field(None, description="Numeric value of the word's letters")
    audio_url: Optional[str] = Field(None, description="Pronunciation audio URL")

    class Config:
        json_schema_extra = {
            "example": {
                "word_hebrew": "שָׁלוֹם",
                "word_english": "peace",
                "transliteration": "shalom",
                "difficulty_level": 1,
                "category": "vocabulary",
                "gematria_value": 376
            }
        }


class CardsResponse(BaseModel):
    """Response schema for card lists."""
    cards: List[CardResponse]


class CategoryResponse(BaseModel):
    id: str
    name: str
    description: str


class StudyCardResponse(CardResponse):
    """A card together with the user's scheduling state for it."""
    ease_factor: float = 2.5
    interval_days: int = 1
    repetitions: int = 0
    next_review_at: Optional[datetime] = None
    last_reviewed_at: Optional[datetime] = None


class StudyCardsResponse(BaseModel):
    cards: List[StudyCardResponse]
