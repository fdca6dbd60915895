from __future__ import annotations

import calendar
import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..config import get_settings
from .clock import utc_now

logger = logging.getLogger(__name__)

END_OF_WEEK = time(23, 59, 59, 999000)
END_OF_MONTH = time(23, 59, 59)


@dataclass(frozen=True)
class TimeWindow:
    """A reporting window. Bounds are naive UTC; ``end`` is exclusive unless ``end_inclusive``."""

    local_start: datetime
    local_end: datetime
    start_utc: datetime
    end_utc: datetime
    end_inclusive: bool = True

    def contains(self, timestamp: datetime) -> bool:
        if timestamp < self.start_utc:
            return False
        return timestamp <= self.end_utc if self.end_inclusive else timestamp < self.end_utc


def resolve_timezone(name: str | None) -> ZoneInfo:
    default = get_settings().default_timezone
    try:
        return ZoneInfo(name or default)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown timezone %r; using %s", name, default)
        return ZoneInfo(default)


def local_date(target: date | datetime | None, tz: ZoneInfo) -> date:
    """The calendar date of ``target`` in ``tz``. Naive datetimes are read as UTC."""
    if target is None:
        target = utc_now()
    if not isinstance(target, datetime):
        return target
    if target.tzinfo is None:
        target = target.replace(tzinfo=timezone.utc)
    return target.astimezone(tz).date()


def day_window(target: date | datetime | None, tz: ZoneInfo) -> TimeWindow:
    day = local_date(target, tz)
    start = datetime.combine(day, time.min, tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tz)
    return _window(start, end, end_inclusive=False)


def week_start_date(target: date | datetime | None, tz: ZoneInfo) -> date:
    day = local_date(target, tz)
    # Weeks start on Sunday; date.weekday() counts from Monday.
    return day - timedelta(days=sunday_index(day))


def week_window(target: date | datetime | None, tz: ZoneInfo) -> TimeWindow:
    sunday = week_start_date(target, tz)
    start = datetime.combine(sunday, time.min, tz)
    end = datetime.combine(sunday + timedelta(days=6), END_OF_WEEK, tz)
    return _window(start, end, end_inclusive=True)


def week_id(target: date | datetime | None, tz: ZoneInfo) -> str:
    return week_start_date(target, tz).isoformat()


def month_window(target: date | datetime | None, tz: ZoneInfo) -> TimeWindow:
    day = local_date(target, tz)
    last_day = calendar.monthrange(day.year, day.month)[1]
    start = datetime.combine(day.replace(day=1), time.min, tz)
    end = datetime.combine(day.replace(day=last_day), END_OF_MONTH, tz)
    return _window(start, end, end_inclusive=True)


def sunday_index(day: date) -> int:
    """Day of week with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7


def to_local(timestamp: datetime, tz: ZoneInfo) -> datetime:
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(tz)


def _window(start: datetime, end: datetime, *, end_inclusive: bool) -> TimeWindow:
    return TimeWindow(
        local_start=start,
        local_end=end,
        start_utc=start.astimezone(timezone.utc).replace(tzinfo=None),
        end_utc=end.astimezone(timezone.utc).replace(tzinfo=None),
        end_inclusive=end_inclusive,
    )
