"""
Time helpers.

All timestamps are stored as naive UTC datetimes; day boundaries are UTC midnights.
"""
from datetime import datetime, date, timedelta, timezone


def utc_now() -> datetime:
    """Current time as a naive UTC datetime."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def start_of_day(value: datetime) -> datetime:
    """Midnight at the start of the day containing value."""
    return datetime(value.year, value.month, value.day)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Return [midnight, next midnight) for a calendar day."""
    start = datetime(day.year, day.month, day.day)
    return start, start + timedelta(days=1)
