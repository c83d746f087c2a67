"""
Billing-period arithmetic on local wall-clock time.

Both boundaries are naive local datetimes, so a month is always days * 24
hours; a DST change inside the month does not add or remove an hour.
"""

from datetime import datetime
from typing import Optional

SECONDS_PER_HOUR = 3600


def start_of_month(now: datetime) -> datetime:
    return datetime(now.year, now.month, 1)


def start_of_next_month(now: datetime) -> datetime:
    if now.month == 12:
        return datetime(now.year + 1, 1, 1)
    return datetime(now.year, now.month + 1, 1)


def hours_elapsed_this_month(now: Optional[datetime] = None) -> int:
    """Whole hours from midnight on the 1st up to now."""
    now = _local(now)
    return int((now - start_of_month(now)).total_seconds() // SECONDS_PER_HOUR)


def hours_in_month(now: Optional[datetime] = None) -> int:
    now = _local(now)
    return int((start_of_next_month(now) - start_of_month(now)).total_seconds() // SECONDS_PER_HOUR)


def _local(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now()
    # aware datetimes are moved to local time and compared as wall clock
    if now.tzinfo is not None:
        return now.astimezone().replace(tzinfo=None)
    return now
