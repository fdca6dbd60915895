from __future__ import annotations

from datetime import datetime, timedelta

from ..config import get_settings
from .clock import as_naive_utc, elapsed_ms, utc_now
from .errors import DurationTooLong, FutureTime, InvalidRange, TooFarInPast


def validate_session_times(clock_in: datetime, clock_out: datetime, *, now: datetime | None = None) -> int:
    """Check manually supplied session times and return the duration in milliseconds.

    Manual entries carry no break record, so the duration is the plain wall-clock span.
    """
    settings = get_settings()
    now = as_naive_utc(now) if now else utc_now()
    clock_in = as_naive_utc(clock_in)
    clock_out = as_naive_utc(clock_out)

    duration = elapsed_ms(clock_in, clock_out)
    if duration <= 0:
        raise InvalidRange()
    if clock_in > now:
        raise FutureTime("Clock in time cannot be in the future")
    if clock_out > now:
        raise FutureTime("Clock out time cannot be in the future")
    if clock_out - clock_in > timedelta(hours=settings.max_session_hours):
        raise DurationTooLong(f"Session cannot be longer than {settings.max_session_hours} hours")
    if clock_in < backdate_limit(now, settings.max_backdate_years):
        raise TooFarInPast()
    return duration


def backdate_limit(now: datetime, years: int) -> datetime:
    """Earliest accepted clock-in: the same calendar date ``years`` back (Feb 29 falls to Feb 28)."""
    try:
        return now.replace(year=now.year - years)
    except ValueError:
        return now.replace(year=now.year - years, day=28)
