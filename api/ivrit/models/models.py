"""
Models module - re-exports all models.

Importing this module registers every table with SQLModel metadata.
"""
from ivrit.models.enums import SettlementStatus, ReminderStatus
from ivrit.models.hebrew_card import HebrewCard
from ivrit.models.user import User
from ivrit.models.review_state import ReviewState
from ivrit.models.review_event import ReviewEvent
from ivrit.models.reward_settlement import RewardSettlement
from ivrit.models.review_reminder import ReviewReminder

__all__ = [
    'SettlementStatus',
    'ReminderStatus',
    'HebrewCard',
    'User',
    'ReviewState',
    'ReviewEvent',
    'RewardSettlement',
    'ReviewReminder',
]
