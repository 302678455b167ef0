"""
Settlement of review rewards with the external token ledger.

Settlement is best-effort: the in-app coin count is credited with the review, and
each attempt to credit the external ledger is recorded in RewardSettlement so that
failed attempts can be retried later (at-least-once).
"""
import logging
from decimal import Decimal
from typing import List, Optional
import requests
from sqlmodel import Session, select

from ivrit.core.config import settings
from ivrit.core.exceptions import SettlementFailure
from ivrit.models.models import RewardSettlement, SettlementStatus
from ivrit.utils.time_utils import utc_now

logger = logging.getLogger(__name__)

REVIEW_REWARD_REASON = "hebrew_review"


class RewardLedger:
    """Capability to credit coins to a user's external balance."""

    #: False when credits are accepted but go nowhere
    enabled = True

    def credit_reward(self, user_id: int, amount: Decimal, reason: str) -> None:
        """
        Credit amount to user_id.

        Raises:
            SettlementFailure: If the ledger did not accept the credit
        """
        raise NotImplementedError


class NullRewardLedger(RewardLedger):
    """Ledger used when no external settlement is wired; accepts and drops credits."""

    enabled = False

    def credit_reward(self, user_id: int, amount: Decimal, reason: str) -> None:
        logger.debug(f"No reward ledger configured, not settling {amount} for user {user_id}")


class HttpRewardLedger(RewardLedger):
    """Ledger reached over HTTP: POST {base_url}/rewards/mint."""

    def __init__(self, base_url: str, api_key: str = "", timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        logger.info(f"HttpRewardLedger initialized for {self.base_url}. API key present: {bool(self.api_key)}")

    def credit_reward(self, user_id: int, amount: Decimal, reason: str) -> None:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload = {
            "user_id": user_id,
            "amount": str(amount),
            "reason": reason,
        }

        try:
            response = requests.post(
                f"{self.base_url}/rewards/mint",
                json=payload,
                headers=headers,
                timeout=self.timeout
            )
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise SettlementFailure(f"Reward ledger rejected credit of {amount} for user {user_id}: {e}") from e

        logger.info(f"Settled {amount} coins for user {user_id} ({reason})")


def build_reward_ledger() -> RewardLedger:
    """Ledger for the configured environment: HTTP if REWARD_LEDGER_URL is set, else a no-op."""
    if settings.reward_ledger_url:
        return HttpRewardLedger(
            settings.reward_ledger_url,
            api_key=settings.reward_ledger_api_key,
            timeout=settings.reward_ledger_timeout_seconds,
        )
    return NullRewardLedger()


def _attempt_settlement(ledger: RewardLedger, settlement: RewardSettlement) -> None:
    """
    Try one credit and record the outcome on the settlement row.

    Any error from the ledger marks the row failed so it stays retryable;
    SettlementFailure is the expected one, anything else is logged with traceback.
    """
    settlement.attempts += 1
    try:
        ledger.credit_reward(settlement.user_id, Decimal(settlement.amount), settlement.reason)
    except Exception as e:
        settlement.status = SettlementStatus.FAILED.value
        settlement.last_error = f"{type(e).__name__}: {e}"
        logger.warning(
            f"Settlement {settlement.id} failed (attempt {settlement.attempts}) "
            f"for user {settlement.user_id}: {e}",
            exc_info=not isinstance(e, SettlementFailure)
        )
        return

    if ledger.enabled:
        settlement.status = SettlementStatus.SETTLED.value
        settlement.settled_at = utc_now()
    else:
        settlement.status = SettlementStatus.SKIPPED.value
    settlement.last_error = None


def settle_review_reward(
    session: Session,
    ledger: RewardLedger,
    user_id: int,
    review_event_id: int,
    amount: Decimal,
    reason: str = REVIEW_REWARD_REASON
) -> Optional[RewardSettlement]:
    """
    Record and attempt settlement of one review's reward. Ledger errors are recorded, never raised.

    Zero rewards are not settled.

    Returns:
        The settlement row, or None if there was nothing to settle
    """
    if amount <= 0:
        return None

    settlement = RewardSettlement(
        user_id=user_id,
        review_event_id=review_event_id,
        amount=amount,
        reason=reason,
    )
    session.add(settlement)
    session.flush()

    _attempt_settlement(ledger, settlement)
    session.add(settlement)
    session.commit()
    session.refresh(settlement)
    return settlement


def retry_failed_settlements(session: Session, ledger: RewardLedger, limit: int = 50) -> List[RewardSettlement]:
    """
    Re-attempt settlements that previously failed, oldest first.

    Returns:
        The settlement rows that were retried, with their new status
    """
    failed = session.exec(
        select(RewardSettlement)
        .where(RewardSettlement.status == SettlementStatus.FAILED.value)
        .order_by(RewardSettlement.created_at, RewardSettlement.id)  # type: ignore
        .limit(limit)
    ).all()

    if not failed:
        return []

    for settlement in failed:
        _attempt_settlement(ledger, settlement)
        session.add(settlement)

    session.commit()
    settled_count = sum(1 for s in failed if s.status == SettlementStatus.SETTLED.value)
    logger.info(f"Retried {len(failed)} failed settlement(s), {settled_count} settled")
    return list(failed)
