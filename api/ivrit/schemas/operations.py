"""
Schemas for operational endpoints: settlement retries and reminder dispatch.
"""
from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from datetime import datetime
from decimal import Decimal


class SettlementResponse(BaseModel):
    id: int
    user_id: int
    review_event_id: int
    amount: Decimal
    status: str
    attempts: int
    last_error: Optional[str] = None
    settled_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class RetrySettlementsResponse(BaseModel):
    """Result of re-attempting failed reward settlements."""
    retried_count: int
    settled_count: int
    settlements: List[SettlementResponse]


class DispatchRemindersResponse(BaseModel):
    """Reminders that became due and were handed off for delivery."""
    dispatched_count: int
    reminders: List[Dict[str, Any]]
