"""Tests for the clock and timestamp parsing."""
from datetime import datetime, timezone, timedelta

from app.core.clock import FixedClock, SystemClock, parse_timestamp


def test_system_clock_is_aware():
    assert SystemClock().now().tzinfo is not None


def test_fixed_clock_advance():
    clock = FixedClock(datetime(2024, 1, 1))

    clock.advance(days=2, hours=3)

    assert clock.now() == datetime(2024, 1, 3, 3, tzinfo=timezone.utc)


def test_parse_timestamp_formats():
    expected = datetime(2024, 1, 1, 10, 30, tzinfo=timezone.utc)

    assert parse_timestamp("2024-01-01T10:30:00Z") == expected
    assert parse_timestamp("2024-01-01T10:30:00+00:00") == expected
    assert parse_timestamp("2024-01-01T16:00:00+05:30") == expected
    assert parse_timestamp("2024-01-01T10:30:00") == expected
    assert parse_timestamp(datetime(2024, 1, 1, 10, 30)) == expected


def test_parse_timestamp_keeps_offset():
    parsed = parse_timestamp("2024-01-01T16:00:00+05:30")
    assert parsed.utcoffset() == timedelta(hours=5, minutes=30)
