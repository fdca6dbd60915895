from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime
from zoneinfo import ZoneInfo

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..constants import MS_PER_HOUR, NO_PROJECT_LABEL
from ..models import Project, User, WeeklyReport, WorkSession
from ..schemas.report import PeriodReport, ProjectBreakdown, ProjectTotal, TodayReport, WeeklyStats
from ..schemas.session import ActiveSessionRead
from . import clock
from .user_settings import get_hourly_rate
from .windows import (
    TimeWindow,
    day_window,
    month_window,
    resolve_timezone,
    sunday_index,
    to_local,
    week_id,
    week_window,
)

logger = logging.getLogger(__name__)

Target = date | datetime | None


def earnings(total_ms: int, hourly_rate: float) -> float:
    """Unrounded earnings for ``total_ms`` of work; rounding is left to the display layer."""
    return (total_ms / MS_PER_HOUR) * (hourly_rate or 0.0)


def total_duration(sessions: Iterable[WorkSession]) -> int:
    return sum(session.duration_ms for session in sessions)


def daily_breakdown(sessions: Iterable[WorkSession], tz: ZoneInfo) -> list[int]:
    """Seven buckets, Sunday first, keyed by the local weekday of each clock-in."""
    buckets = [0] * 7
    for session in sessions:
        buckets[sunday_index(to_local(session.clock_in, tz).date())] += session.duration_ms
    return buckets


def build_project_breakdown(projects: Iterable[Project], sessions: Iterable[WorkSession]) -> ProjectBreakdown:
    totals = {project.id: ProjectTotal(id=project.id, name=project.name) for project in projects}
    no_project = ProjectTotal(id=None, name=NO_PROJECT_LABEL)
    for session in sessions:
        bucket = totals.get(session.project_id, no_project) if session.project_id is not None else no_project
        bucket.total_ms += session.duration_ms
        bucket.session_count += 1

    ranked = sorted(totals.values(), key=lambda item: (-item.total_ms, item.name))
    entries = sorted([*ranked, no_project], key=lambda item: -item.total_ms)
    return ProjectBreakdown(projects=ranked, no_project=no_project, entries=entries)


def get_today_report(db: Session, user_id: int, *, now: datetime | None = None) -> TodayReport:
    tz = user_timezone(db, user_id)
    window = day_window(now, tz)
    report = _period_report(db, user_id, window)
    active = clock.get_active_session(db, user_id)
    return TodayReport(
        **report.model_dump(),
        active=ActiveSessionRead.model_validate(active) if active else None,
    )


def get_weekly_report(db: Session, user_id: int, target: Target = None) -> WeeklyStats:
    tz = user_timezone(db, user_id)
    window = week_window(target, tz)
    sessions = sessions_in_window(db, user_id, window)
    total_ms = total_duration(sessions)
    return WeeklyStats(
        start=window.local_start,
        end=window.local_end,
        week_id=week_id(target, tz),
        session_count=len(sessions),
        total_ms=total_ms,
        earnings=earnings(total_ms, get_hourly_rate(db, user_id)),
        daily_breakdown=daily_breakdown(sessions, tz),
    )


def get_monthly_report(db: Session, user_id: int, target: Target = None) -> PeriodReport:
    tz = user_timezone(db, user_id)
    return _period_report(db, user_id, month_window(target, tz))


def get_project_breakdown(
    db: Session,
    user_id: int,
    start: datetime | None = None,
    end: datetime | None = None,
) -> ProjectBreakdown:
    query = db.query(WorkSession).filter(WorkSession.user_id == user_id)
    if start:
        query = query.filter(WorkSession.clock_in >= clock.as_naive_utc(start))
    if end:
        query = query.filter(WorkSession.clock_in <= clock.as_naive_utc(end))
    projects = db.query(Project).filter(Project.user_id == user_id).all()
    return build_project_breakdown(projects, query.all())


def generate_weekly_report(db: Session, user_id: int, target: Target = None) -> WeeklyReport:
    """Snapshot the week containing ``target``. A week is snapshotted at most once per user."""
    tz = user_timezone(db, user_id)
    key = week_id(target, tz)
    existing = _find_snapshot(db, user_id, key)
    if existing:
        return existing

    window = week_window(target, tz)
    sessions = sessions_in_window(db, user_id, window)
    total_ms = total_duration(sessions)
    snapshot = WeeklyReport(
        user_id=user_id,
        week_id=key,
        week_start=window.start_utc,
        week_end=window.end_utc,
        total_ms=total_ms,
        session_count=len(sessions),
        earnings=earnings(total_ms, get_hourly_rate(db, user_id)),
    )
    db.add(snapshot)
    try:
        db.commit()
    except IntegrityError:
        # Another request stored the same week first; theirs is the snapshot.
        db.rollback()
        return _find_snapshot(db, user_id, key)
    db.refresh(snapshot)
    logger.info("Generated weekly report %s for user %s", key, user_id)
    return snapshot


def find_weekly_report(db: Session, user_id: int, target: Target = None) -> WeeklyReport | None:
    return _find_snapshot(db, user_id, week_id(target, user_timezone(db, user_id)))


def list_weekly_reports(db: Session, user_id: int, limit: int = 12) -> list[WeeklyReport]:
    return (
        db.query(WeeklyReport)
        .filter(WeeklyReport.user_id == user_id)
        .order_by(WeeklyReport.week_start.desc())
        .limit(limit)
        .all()
    )


def sessions_in_window(db: Session, user_id: int, window: TimeWindow) -> list[WorkSession]:
    query = db.query(WorkSession).filter(
        WorkSession.user_id == user_id,
        WorkSession.clock_in >= window.start_utc,
    )
    if window.end_inclusive:
        query = query.filter(WorkSession.clock_in <= window.end_utc)
    else:
        query = query.filter(WorkSession.clock_in < window.end_utc)
    return query.order_by(WorkSession.clock_in.asc()).all()


def user_timezone(db: Session, user_id: int) -> ZoneInfo:
    tz_name = db.query(User.timezone).filter(User.id == user_id).scalar()
    return resolve_timezone(tz_name)


def _period_report(db: Session, user_id: int, window: TimeWindow) -> PeriodReport:
    sessions = sessions_in_window(db, user_id, window)
    total_ms = total_duration(sessions)
    return PeriodReport(
        start=window.local_start,
        end=window.local_end,
        session_count=len(sessions),
        total_ms=total_ms,
        earnings=earnings(total_ms, get_hourly_rate(db, user_id)),
    )


def _find_snapshot(db: Session, user_id: int, key: str) -> WeeklyReport | None:
    return (
        db.query(WeeklyReport)
        .filter(WeeklyReport.user_id == user_id, WeeklyReport.week_id == key)
        .one_or_none()
    )
