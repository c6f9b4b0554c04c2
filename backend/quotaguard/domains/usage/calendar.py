"""Billing period calendar.

A billing period is a calendar month in one fixed reference timezone. Its key
is the first day of that month, which is also the ``month`` column of
``usage_tracking``.
"""

from datetime import date, datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from quotaguard.domains.usage.protocols import BillingCalendarProtocol


class BillingCalendar(BillingCalendarProtocol):
    """Maps instants to period keys in the configured billing timezone."""

    def __init__(self, tz_name: str = "UTC") -> None:
        """Initialize with an IANA timezone name."""
        self._tz = ZoneInfo(tz_name)

    @property
    def timezone(self) -> ZoneInfo:
        """Reference timezone of the calendar."""
        return self._tz

    def current_period(self, now: Optional[datetime] = None) -> date:
        """Period key for *now* (defaults to the current instant)."""
        return self.period_for(now or datetime.now(timezone.utc))

    def period_for(self, instant: datetime) -> date:
        """Period key containing *instant*. Naive datetimes are read as UTC."""
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=timezone.utc)
        local = instant.astimezone(self._tz)
        return date(local.year, local.month, 1)

    def next_period(self, period: date) -> date:
        """Key of the period following *period*."""
        if period.month == 12:
            return date(period.year + 1, 1, 1)
        return date(period.year, period.month + 1, 1)

    def period_start(self, period: date) -> datetime:
        """First instant of *period*."""
        return datetime(period.year, period.month, 1, tzinfo=self._tz)

    def period_end(self, period: date) -> datetime:
        """First instant after *period* (exclusive bound)."""
        return self.period_start(self.next_period(period))

    @staticmethod
    def is_period_key(value: date) -> bool:
        """Whether *value* is a valid period key (first day of a month)."""
        return value.day == 1
