"""
Review reminder scheduling.

The review flow only needs "nudge this user about this card at time T". Two
schedulers satisfy that: an in-process heap (single worker, tests) and a
database-backed queue that an external worker drains through dispatch_due().
"""
import heapq
import itertools
import logging
from datetime import datetime
from threading import Lock
from typing import Any, Callable, Dict, List, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ivrit.core.exceptions import ReminderSchedulingFailure
from ivrit.models.models import ReminderStatus, ReviewReminder
from ivrit.utils.time_utils import utc_now

logger = logging.getLogger(__name__)

REVIEW_REMINDER_KIND = "review-reminder"


def review_reminder_payload(user_id: int, card_id: int) -> Dict[str, Any]:
    return {"kind": REVIEW_REMINDER_KIND, "user_id": user_id, "card_id": card_id}


class ReminderScheduler:
    """Port for scheduling a reminder at a future time."""

    def schedule_at(self, when: datetime, payload: Dict[str, Any]) -> None:
        """
        Schedule payload for delivery at when.

        Raises:
            ReminderSchedulingFailure: If the reminder could not be queued
        """
        raise NotImplementedError

    def dispatch_due(self, now: datetime) -> List[Dict[str, Any]]:
        """Remove and return the payloads whose time has come."""
        raise NotImplementedError


class InMemoryReminderScheduler(ReminderScheduler):
    """Heap-ordered reminders held in process memory; lost on restart."""

    def __init__(self):
        self._lock = Lock()
        self._heap: List[Tuple[datetime, int, Dict[str, Any]]] = []
        self._counter = itertools.count()

    def schedule_at(self, when: datetime, payload: Dict[str, Any]) -> None:
        with self._lock:
            heapq.heappush(self._heap, (when, next(self._counter), dict(payload)))
        logger.debug(f"Queued in-memory reminder at {when}: {payload}")

    def dispatch_due(self, now: datetime) -> List[Dict[str, Any]]:
        due = []
        with self._lock:
            while self._heap and self._heap[0][0] <= now:
                _, _, payload = heapq.heappop(self._heap)
                due.append(payload)
        return due

    def pending(self) -> List[Tuple[datetime, Dict[str, Any]]]:
        """Pending reminders in firing order."""
        with self._lock:
            return [(when, payload) for when, _, payload in sorted(self._heap, key=lambda item: item[:2])]


class DatabaseReminderScheduler(ReminderScheduler):
    """
    Durable reminders stored in the review_reminder table.

    Only the latest reminder per (user, card) stays pending: scheduling a new one
    cancels the previous, since a fresh review moves the card's due date.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def schedule_at(self, when: datetime, payload: Dict[str, Any]) -> None:
        user_id = payload["user_id"]
        card_id = payload["card_id"]

        try:
            with self.session_factory() as session:
                superseded = session.exec(
                    select(ReviewReminder).where(
                        ReviewReminder.user_id == user_id,
                        ReviewReminder.card_id == card_id,
                        ReviewReminder.status == ReminderStatus.PENDING.value
                    )
                ).all()
                for reminder in superseded:
                    reminder.status = ReminderStatus.CANCELLED.value
                    session.add(reminder)

                session.add(ReviewReminder(user_id=user_id, card_id=card_id, remind_at=when))
                session.commit()
        except SQLAlchemyError as e:
            raise ReminderSchedulingFailure(
                f"Could not schedule reminder for user {user_id}, card {card_id}: {e}"
            ) from e

        logger.info(f"Scheduled reminder for user {user_id}, card {card_id} at {when}")

    def dispatch_due(self, now: datetime) -> List[Dict[str, Any]]:
        with self.session_factory() as session:
            due = session.exec(
                select(ReviewReminder)
                .where(
                    ReviewReminder.status == ReminderStatus.PENDING.value,
                    ReviewReminder.remind_at <= now
                )
                .order_by(ReviewReminder.remind_at, ReviewReminder.id)  # type: ignore
            ).all()

            payloads = []
            sent_at = utc_now()
            for reminder in due:
                reminder.status = ReminderStatus.SENT.value
                reminder.sent_at = sent_at
                session.add(reminder)
                payload = review_reminder_payload(reminder.user_id, reminder.card_id)
                payload["remind_at"] = reminder.remind_at.isoformat()
                payloads.append(payload)
            session.commit()

        if payloads:
            logger.info(f"Dispatched {len(payloads)} review reminder(s) due by {now}")
        return payloads
