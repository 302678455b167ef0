"""
HebrewCard model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, DateTime
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime
from ivrit.utils.time_utils import utc_now

if TYPE_CHECKING:
    from ivrit.models.review_state import ReviewState


class HebrewCard(SQLModel, table=True):
    """HebrewCard table - the vocabulary catalog."""
    __tablename__ = "hebrew_card"

    id: Optional[int] = Field(default=None, primary_key=True)
    word_hebrew: str
    word_english: str
    transliteration: str
    difficulty_level: int = Field(default=1, index=True)  # Observed range 1-5, not clamped
    category: str = Field(index=True)
    gematria_value: Optional[int] = None
    audio_url: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))

    # Relationships
    review_states: List["ReviewState"] = Relationship(back_populates="card")
