"""
ReviewReminder model.
"""
from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime
from typing import Optional
from datetime import datetime
from ivrit.models.enums import ReminderStatus
from ivrit.utils.time_utils import utc_now


class ReviewReminder(SQLModel, table=True):
    """ReviewReminder table - durable queue of review nudges."""
    __tablename__ = "review_reminder"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    card_id: int = Field(foreign_key="hebrew_card.id")
    remind_at: datetime = Field(sa_column=Column(DateTime, nullable=False, index=True))
    status: str = Field(default=ReminderStatus.PENDING.value, index=True)
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime, nullable=False))
    sent_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
