"""Datetime utilities for timezone-aware timestamps and calendar dates.

Timestamps are always stored in UTC. Business rules that talk about "today"
(plan expiry, daily counts) use the local calendar date of the configured
``TIMEZONE``.

Usage:
    from libs.common.datetime_utils import utc_now

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from libs.common.config import get_settings


def utc_now() -> datetime:
    """Return timezone-aware UTC datetime.

    Always use this for timestamps in the database.
    """
    return datetime.now(timezone.utc)


def local_tz() -> ZoneInfo:
    return ZoneInfo(get_settings().TIMEZONE)


def local_today(now: Optional[datetime] = None) -> date:
    """Return the calendar date in the configured timezone."""
    now = now or utc_now()
    return now.astimezone(local_tz()).date()


def start_of_local_day(day: date) -> datetime:
    """Return the UTC instant at which ``day`` begins locally."""
    return datetime.combine(day, time.min, tzinfo=local_tz()).astimezone(timezone.utc)


def start_of_local_month(day: date) -> datetime:
    return start_of_local_day(day.replace(day=1))


def add_months(start: date, months: int) -> date:
    """
    Add months while keeping day in valid range (e.g., Jan 31 + 1 month => Feb 28/29).
    """
    y = start.year + (start.month - 1 + months) // 12
    m = (start.month - 1 + months) % 12 + 1
    # last day of target month
    if m == 12:
        next_month = date(y + 1, 1, 1)
    else:
        next_month = date(y, m + 1, 1)
    last_day = next_month - timedelta(days=1)
    day = min(start.day, last_day.day)
    return date(y, m, day)
