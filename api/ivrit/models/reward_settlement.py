"""
RewardSettlement model.
"""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime
from typing import Optional
from datetime import datetime
from decimal import Decimal
from ivrit.models.enums import SettlementStatus
from ivrit.utils.time_utils import utc_now


class RewardSettlement(SQLModel, table=True):
    """RewardSettlement table - record of crediting a review reward to the external ledger."""
    __tablename__ = "reward_settlement"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    review_event_id: int = Field(foreign_key="review_event.id", unique=True)
    amount: Decimal = Field(max_digits=10, decimal_places=2)
    reason: str
    status: str = Field(default=SettlementStatus.PENDING.value, index=True)
    attempts: int = Field(default=0)
    last_error: Optional[str] = None
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
    settled_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
