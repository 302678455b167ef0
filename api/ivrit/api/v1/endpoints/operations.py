"""
Operational endpoints, meant to be called by a scheduler (cron or worker).
"""
from fastapi import APIRouter, Depends, Query
from sqlmodel import Session
import logging

from ivrit.core.database import get_session
from ivrit.core.dependencies import get_reminder_scheduler, get_reward_ledger
from ivrit.models.models import SettlementStatus
from ivrit.schemas.operations import (
    DispatchRemindersResponse,
    RetrySettlementsResponse,
    SettlementResponse,
)
from ivrit.services.ledger_service import RewardLedger, retry_failed_settlements
from ivrit.services.reminder_service import ReminderScheduler
from ivrit.utils.time_utils import utc_now

logger = logging.getLogger(__name__)

router = APIRouter(tags=["operations"])


@router.post("/settlements/retry", response_model=RetrySettlementsResponse)
async def retry_settlements(
    limit: int = Query(default=50, ge=1, le=1000),
    session: Session = Depends(get_session),
    ledger: RewardLedger = Depends(get_reward_ledger)
):
    """Re-attempt reward settlements that failed, oldest first."""
    retried = retry_failed_settlements(session, ledger, limit=limit)
    return RetrySettlementsResponse(
        retried_count=len(retried),
        settled_count=sum(1 for s in retried if s.status == SettlementStatus.SETTLED.value),
        settlements=[SettlementResponse.model_validate(s) for s in retried]
    )


@router.post("/reminders/dispatch", response_model=DispatchRemindersResponse)
async def dispatch_reminders(
    reminders: ReminderScheduler = Depends(get_reminder_scheduler)
):
    """
    Hand off review reminders that are due.

    Returns the reminder payloads; delivering them (push, e-mail, chat) is up to the caller.
    """
    due = reminders.dispatch_due(utc_now())
    return DispatchRemindersResponse(dispatched_count=len(due), reminders=due)
