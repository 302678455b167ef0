"""
User model.
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import Column, DateTime
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime, date
from decimal import Decimal
from ivrit.utils.time_utils import utc_now

if TYPE_CHECKING:
    from ivrit.models.review_state import ReviewState


class User(SQLModel, table=True):
    """User table - local record of a learner's streak and in-app coins."""
    __tablename__ = "user"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(unique=True, index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))

    # Daily streak
    streak_days: int = Field(default=0)
    streak_counted_on: Optional[date] = None  # Last day that was credited to the streak

    # In-app coin count (external settlement may lag behind)
    total_coins: Decimal = Field(default=Decimal("0"), max_digits=12, decimal_places=2)

    # Relationships
    review_states: List["ReviewState"] = Relationship(back_populates="user")
