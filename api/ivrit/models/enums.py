"""
Model enums.
"""
from enum import Enum


class SettlementStatus(str, Enum):
    """Outcome of crediting a reward to the external ledger."""
    PENDING = "pending"
    SETTLED = "settled"
    FAILED = "failed"
    SKIPPED = "skipped"  # No ledger configured


class ReminderStatus(str, Enum):
    """Lifecycle of a scheduled review reminder."""
    PENDING = "pending"
    SENT = "sent"
    CANCELLED = "cancelled"
