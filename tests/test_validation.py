from datetime import datetime, timedelta

import pytest

from timeclock.services.errors import DurationTooLong, FutureTime, InvalidRange, TooFarInPast
from timeclock.services.validation import backdate_limit, validate_session_times

NOW = datetime(2026, 3, 4, 12, 0, 0)
DAY_MS = 24 * 60 * 60 * 1000


def test_returns_wall_clock_duration() -> None:
    clock_in = NOW - timedelta(hours=3)

    assert validate_session_times(clock_in, clock_in + timedelta(hours=2), now=NOW) == 2 * 60 * 60 * 1000


def test_equal_times_are_an_invalid_range() -> None:
    with pytest.raises(InvalidRange):
        validate_session_times(NOW - timedelta(hours=1), NOW - timedelta(hours=1), now=NOW)


def test_reversed_times_are_an_invalid_range() -> None:
    with pytest.raises(InvalidRange):
        validate_session_times(NOW - timedelta(hours=1), NOW - timedelta(hours=2), now=NOW)


def test_range_is_checked_before_future_times() -> None:
    with pytest.raises(InvalidRange):
        validate_session_times(NOW + timedelta(hours=2), NOW + timedelta(hours=1), now=NOW)


def test_future_clock_in_is_rejected() -> None:
    with pytest.raises(FutureTime, match="Clock in"):
        validate_session_times(NOW + timedelta(minutes=1), NOW + timedelta(hours=1), now=NOW)


def test_future_clock_out_is_rejected() -> None:
    with pytest.raises(FutureTime, match="Clock out"):
        validate_session_times(NOW - timedelta(hours=1), NOW + timedelta(milliseconds=1), now=NOW)


def test_exactly_twenty_four_hours_is_allowed() -> None:
    assert validate_session_times(NOW - timedelta(hours=24), NOW, now=NOW) == DAY_MS


def test_one_millisecond_over_twenty_four_hours_is_rejected() -> None:
    with pytest.raises(DurationTooLong):
        validate_session_times(NOW - timedelta(hours=24, milliseconds=1), NOW, now=NOW)


def test_clock_in_older_than_a_year_is_rejected() -> None:
    clock_in = datetime(2025, 3, 4, 11, 59, 59)

    with pytest.raises(TooFarInPast):
        validate_session_times(clock_in, clock_in + timedelta(hours=1), now=NOW)


def test_clock_in_exactly_a_year_back_is_allowed() -> None:
    clock_in = datetime(2025, 3, 4, 12, 0, 0)

    assert validate_session_times(clock_in, clock_in + timedelta(minutes=30), now=NOW) == 30 * 60 * 1000


def test_backdate_limit_handles_leap_day() -> None:
    assert backdate_limit(datetime(2028, 2, 29, 8, 0), 1) == datetime(2027, 2, 28, 8, 0)
