"""
Models package.
"""
from ivrit.models.models import (
    SettlementStatus,
    ReminderStatus,
    HebrewCard,
    User,
    ReviewState,
    ReviewEvent,
    RewardSettlement,
    ReviewReminder,
)

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
