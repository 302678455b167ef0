"""
ReviewEvent model.
"""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime
from typing import Optional
from datetime import datetime
from decimal import Decimal
from ivrit.utils.time_utils import utc_now


class ReviewEvent(SQLModel, table=True):
    """ReviewEvent table - append-only log of submitted reviews."""
    __tablename__ = "review_event"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    card_id: int = Field(foreign_key="hebrew_card.id")
    quality: int  # 0-5
    coins_earned: Decimal = Field(default=Decimal("0"), max_digits=10, decimal_places=2)
    reviewed_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False, index=True))
