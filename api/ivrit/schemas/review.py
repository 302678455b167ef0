"""
Review submission and statistics schemas.
"""
from pydantic import BaseModel, Field, StrictInt
from typing import List, Optional
from datetime import datetime
from decimal import Decimal


class SubmitReviewRequest(BaseModel):
    """Request to record one review of a card."""
    user_id: int = Field(..., description="User ID")
    card_id: int = Field(..., description="Reviewed card ID")
    # Strict: "4", 4.0 and true are rejected rather than coerced
    quality: StrictInt = Field(..., description="Recall quality: integer 0 (blackout) to 5 (perfect)")

    class Config:
        json_schema_extra = {
            "example": {
                "user_id": 1,
                "card_id": 42,
                "quality": 4
            }
        }


class SubmitReviewResponse(BaseModel):
    """Outcome of a review: reward, next due time and updated streak."""
    coins_earned: Decimal = Field(..., description="Coins credited for this review")
    next_review_at: datetime = Field(..., description="When the card is due again")
    new_streak: int = Field(..., description="Consecutive study days after this review")
    ease_factor: float
    interval_days: int
    repetitions: int
    settlement_status: Optional[str] = Field(
        None, description="External reward settlement: settled, failed, skipped, or null when nothing to settle"
    )


class StudyStatsResponse(BaseModel):
    """Summary of a user's study progress."""
    total_cards: int
    due_count: int
    reviewed_today: int
    streak_days: int
    total_coins: Decimal
    hebrew_level: int
    next_level_progress: float


class RewardEventResponse(BaseModel):
    """One past review and the coins it earned."""
    id: int
    card_id: int
    quality: int
    coins_earned: Decimal
    reviewed_at: datetime

    class Config:
        from_attributes = True


class RewardHistoryResponse(BaseModel):
    events: List[RewardEventResponse]
