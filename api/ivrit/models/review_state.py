"""
ReviewState model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, DateTime, UniqueConstraint
from typing import Optional, TYPE_CHECKING
from datetime import datetime
from ivrit.utils.time_utils import utc_now

if TYPE_CHECKING:
    from ivrit.models.hebrew_card import HebrewCard
    from ivrit.models.user import User


class ReviewState(SQLModel, table=True):
    """ReviewState table - SM-2 scheduling state for one user and one card."""
    __tablename__ = "review_state"
    __table_args__ = (
        UniqueConstraint("user_id", "card_id", name="uq_review_state_user_card"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    card_id: int = Field(foreign_key="hebrew_card.id")
    ease_factor: float = Field(default=2.5)  # Never below 1.3
    interval_days: int = Field(default=1)  # Never below 1
    repetitions: int = Field(default=0)
    next_review_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False, index=True))
    last_reviewed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))

    # Relationships
    user: "User" = Relationship(back_populates="review_states")
    card: "HebrewCard" = Relationship(back_populates="review_states")
