from datetime import datetime, timezone
from zoneinfo import ZoneInfo

ET = ZoneInfo("America/New_York")


def et(*args) -> datetime:
    """Aware datetime in America/New_York."""
    return datetime(*args, tzinfo=ET)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def fixed_clock(instant: datetime):
    return lambda: instant
