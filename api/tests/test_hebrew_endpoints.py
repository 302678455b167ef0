"""
Tests for the HTTP API.
"""
from datetime import datetime
from decimal import Decimal

import pytest

PREFIX = "/api/v1"


@pytest.fixture
def user_id(client):
    response = client.post(f"{PREFIX}/users", json={"username": "david"})
    assert response.status_code == 201
    return response.json()["id"]


@pytest.fixture
def card_ids(client):
    ids = []
    for hebrew, english, translit, difficulty in [
        ("שָׁלוֹם", "peace", "shalom", 1),
        ("מַיִם", "water", "mayim", 1),
        ("שַׁבָּת", "Sabbath", "shabbat", 2),
    ]:
        response = client.post(f"{PREFIX}/hebrew/cards", json={
            "word_hebrew": hebrew,
            "word_english": english,
            "transliteration": translit,
            "difficulty_level": difficulty,
            "category": "Vocabulary",
        })
        assert response.status_code == 201
        ids.append(response.json()["id"])
    return ids


class TestHealth:

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}


class TestUsers:

    def test_create_and_read(self, client, user_id):
        body = client.get(f"{PREFIX}/users/{user_id}").json()
        assert body["username"] == "david"
        assert body["streak_days"] == 0

    def test_duplicate_username_conflicts(self, client, user_id):
        response = client.post(f"{PREFIX}/users", json={"username": "david"})
        assert response.status_code == 409
        assert response.json()["type"] == "ConflictError"

    def test_unknown_user(self, client):
        response = client.get(f"{PREFIX}/users/404")
        assert response.status_code == 404
        assert response.json()["type"] == "UserNotFound"


class TestCatalog:

    def test_categories(self, client):
        categories = client.get(f"{PREFIX}/hebrew/categories").json()
        assert "biblical" in [c["id"] for c in categories]

    def test_cards_filtered_by_category(self, client, card_ids):
        cards = client.get(f"{PREFIX}/hebrew/cards", params={"category": "vocabulary"}).json()["cards"]
        assert [c["id"] for c in cards] == card_ids
        assert client.get(f"{PREFIX}/hebrew/cards", params={"category": "food"}).json()["cards"] == []

    def test_blank_card_rejected(self, client):
        response = client.post(f"{PREFIX}/hebrew/cards", json={
            "word_hebrew": "  ",
            "word_english": "nothing",
            "transliteration": "x",
            "category": "vocabulary",
        })
        assert response.status_code == 400


class TestStudyFlow:

    def test_new_cards_then_review(self, client, reminders, user_id, card_ids):
        new_cards = client.get(f"{PREFIX}/hebrew/new-cards", params={"user_id": user_id, "limit": 2}).json()["cards"]
        assert [c["id"] for c in new_cards] == card_ids[:2]
        assert all(c["repetitions"] == 0 for c in new_cards)

        due = client.get(f"{PREFIX}/hebrew/review-cards", params={"user_id": user_id}).json()["cards"]
        assert {c["id"] for c in due} == set(card_ids[:2])

        response = client.post(f"{PREFIX}/hebrew/review", json={
            "user_id": user_id,
            "card_id": card_ids[0],
            "quality": 4,
        })
        assert response.status_code == 200
        body = response.json()
        assert Decimal(body["coins_earned"]) == Decimal("0.40")
        assert body["interval_days"] == 1
        assert body["repetitions"] == 1
        assert body["new_streak"] == 1
        assert body["settlement_status"] == "settled"
        assert len(reminders.pending()) == 1

        due = client.get(f"{PREFIX}/hebrew/review-cards", params={"user_id": user_id}).json()["cards"]
        assert [c["id"] for c in due] == [card_ids[1]]

        stats = client.get(f"{PREFIX}/hebrew/stats", params={"user_id": user_id}).json()
        assert stats["total_cards"] == 2
        assert stats["due_count"] == 1
        assert stats["reviewed_today"] == 1
        assert stats["streak_days"] == 1
        assert Decimal(stats["total_coins"]) == Decimal("0.40")
        assert stats["hebrew_level"] == 1

        rewards = client.get(f"{PREFIX}/hebrew/rewards", params={"user_id": user_id}).json()["events"]
        assert [e["card_id"] for e in rewards] == [card_ids[0]]

    def test_preview_does_not_reserve(self, client, user_id, card_ids):
        client.get(f"{PREFIX}/hebrew/new-cards", params={"user_id": user_id, "reserve": "false"})
        due = client.get(f"{PREFIX}/hebrew/review-cards", params={"user_id": user_id}).json()["cards"]
        assert due == []

    def test_invalid_quality_is_400(self, client, user_id, card_ids):
        response = client.post(f"{PREFIX}/hebrew/review", json={
            "user_id": user_id,
            "card_id": card_ids[0],
            "quality": 7,
        })
        assert response.status_code == 400
        assert response.json()["type"] == "InvalidQuality"

    @pytest.mark.parametrize("quality", ["4", 4.0, True, 4.5, None])
    def test_non_integer_quality_is_rejected(self, client, user_id, card_ids, quality):
        response = client.post(f"{PREFIX}/hebrew/review", json={
            "user_id": user_id,
            "card_id": card_ids[0],
            "quality": quality,
        })
        assert response.status_code == 422

        stats = client.get(f"{PREFIX}/hebrew/stats", params={"user_id": user_id}).json()
        assert stats["reviewed_today"] == 0
        assert stats["total_cards"] == 0

    def test_missing_card_is_404(self, client, user_id):
        response = client.post(f"{PREFIX}/hebrew/review", json={
            "user_id": user_id,
            "card_id": 12345,
            "quality": 4,
        })
        assert response.status_code == 404
        assert response.json()["type"] == "CardNotFound"

    def test_bad_limit_is_400(self, client, user_id):
        response = client.get(f"{PREFIX}/hebrew/review-cards", params={"user_id": user_id, "limit": -1})
        assert response.status_code == 400


class TestOperations:

    def test_retry_settlements(self, client, ledger, user_id, card_ids):
        ledger.fail = True
        review = client.post(f"{PREFIX}/hebrew/review", json={
            "user_id": user_id,
            "card_id": card_ids[0],
            "quality": 5,
        }).json()
        assert review["settlement_status"] == "failed"

        ledger.fail = False
        body = client.post(f"{PREFIX}/settlements/retry").json()
        assert body["retried_count"] == 1
        assert body["settled_count"] == 1

    def test_dispatch_reminders(self, client, reminders):
        reminders.schedule_at(datetime(2000, 1, 1), {"kind": "review-reminder", "user_id": 1, "card_id": 1})

        body = client.post(f"{PREFIX}/reminders/dispatch").json()
        assert body["dispatched_count"] == 1
        assert body["reminders"][0]["card_id"] == 1
