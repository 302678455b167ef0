"""
Tests for review reminder schedulers.
"""
from datetime import datetime, timedelta

import pytest
from sqlmodel import Session, select

from ivrit.core.database import build_engine
from ivrit.core.exceptions import ReminderSchedulingFailure
from ivrit.models.models import ReminderStatus, ReviewReminder
from ivrit.services.reminder_service import (
    DatabaseReminderScheduler,
    InMemoryReminderScheduler,
    review_reminder_payload,
)

T0 = datetime(2024, 3, 11)


class TestInMemoryReminderScheduler:

    def test_dispatches_in_time_order(self):
        scheduler = InMemoryReminderScheduler()
        scheduler.schedule_at(T0 + timedelta(days=6), review_reminder_payload(1, 2))
        scheduler.schedule_at(T0, review_reminder_payload(1, 1))
        scheduler.schedule_at(T0 + timedelta(days=30), review_reminder_payload(1, 3))

        due = scheduler.dispatch_due(T0 + timedelta(days=7))
        assert [p["card_id"] for p in due] == [1, 2]
        assert len(scheduler.pending()) == 1

    def test_nothing_due(self):
        scheduler = InMemoryReminderScheduler()
        scheduler.schedule_at(T0, review_reminder_payload(1, 1))
        assert scheduler.dispatch_due(T0 - timedelta(seconds=1)) == []


class TestDatabaseReminderScheduler:

    @pytest.fixture
    def scheduler(self, engine):
        return DatabaseReminderScheduler(lambda: Session(engine))

    def test_schedule_and_dispatch(self, scheduler, session, user, cards):
        scheduler.schedule_at(T0, review_reminder_payload(user.id, cards[0].id))

        assert scheduler.dispatch_due(T0 - timedelta(hours=1)) == []
        due = scheduler.dispatch_due(T0)
        assert due == [{
            "kind": "review-reminder",
            "user_id": user.id,
            "card_id": cards[0].id,
            "remind_at": T0.isoformat(),
        }]
        # Already sent
        assert scheduler.dispatch_due(T0 + timedelta(days=1)) == []

    def test_new_reminder_supersedes_pending_one(self, scheduler, session, user, cards):
        scheduler.schedule_at(T0, review_reminder_payload(user.id, cards[0].id))
        scheduler.schedule_at(T0 + timedelta(days=6), review_reminder_payload(user.id, cards[0].id))

        statuses = sorted(r.status for r in session.exec(select(ReviewReminder)).all())
        assert statuses == [ReminderStatus.CANCELLED.value, ReminderStatus.PENDING.value]
        assert scheduler.dispatch_due(T0 + timedelta(days=1)) == []

    def test_storage_error_becomes_scheduling_failure(self):
        # Engine without the review_reminder table
        bare_engine = build_engine("sqlite://")
        scheduler = DatabaseReminderScheduler(lambda: Session(bare_engine))

        with pytest.raises(ReminderSchedulingFailure):
            scheduler.schedule_at(T0, review_reminder_payload(1, 1))
