"""
Time source for expiry and recency checks.

Services take a Clock instead of calling datetime.now() directly so that
redemption expiry and "active this week" windows can be pinned in tests.
"""
from datetime import datetime, timedelta, timezone


class Clock:
    """Returns the current instant as an aware UTC datetime."""

    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock(Clock):

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock(Clock):
    """Clock frozen at a given instant. Used by tests."""

    def __init__(self, instant: datetime):
        self.instant = ensure_aware(instant)

    def now(self) -> datetime:
        return self.instant

    def advance(self, **delta) -> None:
        self.instant = self.instant + timedelta(**delta)


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse a Supabase timestamp (ISO string or datetime) into an aware datetime."""
    if isinstance(value, datetime):
        return ensure_aware(value)

    # Handle both ISO formats with and without timezone
    return ensure_aware(datetime.fromisoformat(value.replace("Z", "+00:00")))
