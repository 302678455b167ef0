"""
User schemas.
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime, date
from decimal import Decimal


class CreateUserRequest(BaseModel):
    """Request schema for registering a learner."""
    username: str = Field(..., min_length=1, max_length=50, description="Username")


class UserResponse(BaseModel):
    """User response schema."""
    id: int
    username: str
    created_at: datetime
    streak_days: int = 0
    streak_counted_on: Optional[date] = None
    total_coins: Decimal = Decimal("0")

    class Config:
        from_attributes = True
