"""
FastAPI dependencies for the external collaborators of the review flow.

Endpoints receive these through Depends so tests can override them.
"""
from functools import lru_cache
from sqlmodel import Session

from ivrit.core.database import engine
from ivrit.services.ledger_service import RewardLedger, build_reward_ledger
from ivrit.services.reminder_service import DatabaseReminderScheduler, ReminderScheduler


@lru_cache()
def get_reward_ledger() -> RewardLedger:
    """Reward ledger for the configured environment."""
    return build_reward_ledger()


@lru_cache()
def get_reminder_scheduler() -> ReminderScheduler:
    """Database-backed reminder queue on the application engine."""
    return DatabaseReminderScheduler(lambda: Session(engine))
