import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

# Settings refuse to load without a database URL
os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

from ivrit.core.database import build_engine, get_session
from ivrit.core.dependencies import get_reminder_scheduler, get_reward_ledger
from ivrit.core.exceptions import SettlementFailure
from ivrit.main import app
from ivrit.models.models import HebrewCard, User
from ivrit.services.ledger_service import RewardLedger
from ivrit.services.reminder_service import InMemoryReminderScheduler


class RecordingLedger(RewardLedger):
    """Ledger that remembers credits and can be told to reject them."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.credits = []

    def credit_reward(self, user_id, amount, reason):
        if self.fail:
            raise SettlementFailure("ledger unavailable")
        self.credits.append((user_id, amount, reason))


class CrashingLedger(RecordingLedger):
    """Ledger whose client fails with something other than SettlementFailure."""

    def credit_reward(self, user_id, amount, reason):
        raise RuntimeError("connection pool exhausted")


class BrokenReminderScheduler(InMemoryReminderScheduler):
    def schedule_at(self, when, payload):
        raise RuntimeError("queue unavailable")


@pytest.fixture
def engine():
    engine = build_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def user(session):
    user = User(username="miriam")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def cards(session):
    """Five catalog cards, inserted out of difficulty order."""
    rows = [
        HebrewCard(word_hebrew="תּוֹרָה", word_english="teaching", transliteration="torah",
                   difficulty_level=3, category="biblical"),
        HebrewCard(word_hebrew="שָׁלוֹם", word_english="peace", transliteration="shalom",
                   difficulty_level=1, category="vocabulary"),
        HebrewCard(word_hebrew="בְּרֵאשִׁית", word_english="in the beginning", transliteration="bereshit",
                   difficulty_level=5, category="biblical"),
        HebrewCard(word_hebrew="תּוֹדָה", word_english="thank you", transliteration="todah",
                   difficulty_level=1, category="vocabulary"),
        HebrewCard(word_hebrew="לֶחֶם", word_english="bread", transliteration="lechem",
                   difficulty_level=2, category="food"),
    ]
    for card in rows:
        session.add(card)
    session.commit()
    for card in rows:
        session.refresh(card)
    return rows


@pytest.fixture
def ledger():
    return RecordingLedger()


@pytest.fixture
def reminders():
    return InMemoryReminderScheduler()


@pytest.fixture
def now():
    return datetime(2024, 3, 10, 14, 30)


@pytest.fixture
def client(engine, ledger, reminders):
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_reward_ledger] = lambda: ledger
    app.dependency_overrides[get_reminder_scheduler] = lambda: reminders
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()

