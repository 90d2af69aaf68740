"""
Business Calendar
=================

Business-day arithmetic for audit and dispute SLA windows.

Business days are Monday through Friday in America/New_York. No holiday
calendar is consulted here. Every operation normalizes its inputs to the
reference zone before reasoning about days, weekdays or 5 PM.

Accepted instants:
- aware ``datetime``: converted to the reference zone
- naive ``datetime``: wall-clock time in the reference zone
- ``date``: midnight of that date in the reference zone
"""

from datetime import date, datetime, time, timedelta, timezone
from functools import lru_cache
from typing import Callable, Collection, Optional, Union
from zoneinfo import ZoneInfo

from src.core.exceptions import ValidationException

REFERENCE_TIMEZONE = ZoneInfo("America/New_York")
DEADLINE_TIME = time(17, 0)
BUSINESS_WEEKDAYS = frozenset({1, 2, 3, 4, 5})  # ISO weekdays, Monday..Friday

Instant = Union[datetime, date]
Clock = Callable[[], datetime]


def system_clock() -> datetime:
    """Current instant from the host clock, in the reference zone."""
    return datetime.now(tz=REFERENCE_TIMEZONE)


def is_business_date(day: date) -> bool:
    return day.isoweekday() in BUSINESS_WEEKDAYS


def _is_after(left: datetime, right: datetime) -> bool:
    # Same-tzinfo comparisons use wall time and ignore fold; compare in UTC.
    return left.astimezone(timezone.utc) > right.astimezone(timezone.utc)


def _require_business_days(business_days: int) -> int:
    if isinstance(business_days, bool) or not isinstance(business_days, int):
        raise ValidationException(
            "business_days must be an integer",
            {"business_days": repr(business_days)}
        )
    if business_days < 0:
        raise ValidationException(
            "business_days cannot be negative",
            {"business_days": business_days}
        )
    return business_days


class BusinessCalendar:
    """
    Stateless business-day calculator anchored to America/New_York.

    The only input that is not an argument is "now", read from ``clock``.
    Pass a fixed clock to get deterministic results::

        calendar = BusinessCalendar(clock=lambda: datetime(2025, 1, 8, 14, 0))
    """

    def __init__(self, clock: Optional[Clock] = None):
        self._clock = clock or system_clock

    @property
    def timezone(self) -> ZoneInfo:
        """Reference zone used by every operation."""
        return REFERENCE_TIMEZONE

    def to_reference_zone(self, instant: Instant) -> datetime:
        """
        Normalize an instant to an aware datetime in the reference zone.

        Idempotent. Wall times inside a spring-forward gap resolve forward
        (02:30 becomes 03:30 EDT); repeated fall-back times follow ``fold``.

        Raises:
            ValidationException: instant is None or not a date/datetime
        """
        if instant is None:
            raise ValidationException("instant is required")

        if isinstance(instant, datetime):
            if instant.tzinfo is None or instant.utcoffset() is None:
                instant = instant.replace(tzinfo=REFERENCE_TIMEZONE)
            # astimezone is a no-op for an identical tzinfo; go through UTC
            # so gap times resolve.
            return instant.astimezone(timezone.utc).astimezone(REFERENCE_TIMEZONE)

        if isinstance(instant, date):
            return self.to_reference_zone(datetime.combine(instant, time.min))

        raise ValidationException(
            f"Unsupported instant type: {type(instant).__name__}",
            {"type": type(instant).__name__}
        )

    def now(self) -> datetime:
        """Current instant in the reference zone, read from the injected clock."""
        return self.to_reference_zone(self._clock())

    def is_business_day(self, instant: Instant) -> bool:
        """True when the instant falls on Monday..Friday in the reference zone."""
        return is_business_date(self.to_reference_zone(instant).date())

    def add_business_days(
        self,
        start: Instant,
        business_days: int,
        skip: Optional[Collection[date]] = None
    ) -> datetime:
        """
        Advance ``start`` by N business days, keeping its time of day.

        The start day itself never counts. Weekend days are stepped over
        without being counted. Zero returns the normalized start.

        Args:
            start: Instant to count from
            business_days: Non-negative number of business days
            skip: Extra dates (reference zone) that are stepped over like
                weekends, e.g. a campaign's holidays

        Returns:
            Aware datetime on the last business day reached
        """
        current = self.to_reference_zone(start)
        remaining = _require_business_days(business_days)
        if remaining == 0:
            return current

        skip = skip or ()
        day = current.date()
        while remaining > 0:
            day += timedelta(days=1)
            if is_business_date(day) and day not in skip:
                remaining -= 1

        return self._on_day(current, day)

    def get_business_days_between(self, start: Instant, end: Instant) -> int:
        """
        Count business days in the inclusive range [start day, end day].

        Order-independent. Fri -> Mon is 2, a single business day is 1.
        """
        start_day = self.to_reference_zone(start).date()
        end_day = self.to_reference_zone(end).date()
        if start_day > end_day:
            start_day, end_day = end_day, start_day

        total_days = (end_day - start_day).days + 1
        full_weeks, extra_days = divmod(total_days, 7)
        count = full_weeks * len(BUSINESS_WEEKDAYS)
        for offset in range(extra_days):
            if is_business_date(start_day + timedelta(days=offset)):
                count += 1
        return count

    def get_business_day_deadline(self, start: Instant, business_days: int) -> datetime:
        """
        SLA cutoff: N business days after ``start`` at 17:00 reference time.

        The offset of the result follows the deadline date, not the start.
        With zero days and a weekend start, the cutoff moves to the next
        business day.
        """
        day = self.add_business_days(start, business_days).date()
        while not is_business_date(day):
            day += timedelta(days=1)
        return datetime.combine(day, DEADLINE_TIME, tzinfo=REFERENCE_TIMEZONE)

    def is_deadline_passed(self, deadline: Instant, now: Optional[Instant] = None) -> bool:
        """True only when now is strictly after the deadline."""
        return _is_after(self._current(now), self.to_reference_zone(deadline))

    def get_remaining_business_days(self, deadline: Instant, now: Optional[Instant] = None) -> int:
        """
        Business days left until ``deadline``, counting today.

        A deadline later today gives 1. A passed deadline gives 0.
        """
        current = self._current(now)
        deadline_at = self.to_reference_zone(deadline)
        if _is_after(current, deadline_at):
            return 0
        return self.get_business_days_between(current, deadline_at)

    def _current(self, now: Optional[Instant]) -> datetime:
        if now is None:
            return self.now()
        return self.to_reference_zone(now)

    def _on_day(self, current: datetime, day: date) -> datetime:
        """Same wall-clock time as ``current`` on ``day``, with that day's offset."""
        moved = current.replace(year=day.year, month=day.month, day=day.day)
        return self.to_reference_zone(moved)


@lru_cache()
def get_business_calendar() -> BusinessCalendar:
    """Returns the cached calendar bound to the system clock."""
    return BusinessCalendar()
