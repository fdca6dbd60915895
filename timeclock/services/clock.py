from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..models import ActiveSession, WorkSession
from . import projects as project_service
from .errors import AlreadyClockedIn, InvalidRange, NotClockedIn

logger = logging.getLogger(__name__)

_ONE_MS = timedelta(milliseconds=1)


@dataclass(frozen=True)
class BreakState:
    is_on_break: bool
    break_start: Optional[datetime]
    break_time_ms: int


def utc_now() -> datetime:
    """Current time as naive UTC, the representation stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def elapsed_ms(start: datetime, end: datetime) -> int:
    return (as_naive_utc(end) - as_naive_utc(start)) // _ONE_MS


def effective_break_ms(active: ActiveSession, at: datetime) -> int:
    """Break time accrued by ``active`` as of ``at``, folding in a break that is still open."""
    total = active.break_time_ms or 0
    if active.is_on_break and active.break_start is not None:
        total += max(0, elapsed_ms(active.break_start, at))
    return total


def get_active_session(db: Session, user_id: int) -> ActiveSession | None:
    return _load_active(db, user_id)


def clock_in(db: Session, user_id: int, project_id: int | None = None, *, now: datetime | None = None) -> ActiveSession:
    now = as_naive_utc(now) if now else utc_now()
    if project_id is not None:
        project_service.get_project(db, user_id, project_id)

    # The primary key on user_id rejects a second active row, even under concurrent requests.
    try:
        db.execute(
            insert(ActiveSession).values(
                user_id=user_id,
                clock_in=now,
                project_id=project_id,
                break_time_ms=0,
                is_on_break=False,
                break_start=None,
            )
        )
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.info("Rejected clock-in for user %s: already clocked in", user_id)
        raise AlreadyClockedIn() from exc

    logger.info("User %s clocked in at %s (project=%s)", user_id, now.isoformat(), project_id)
    return _load_active(db, user_id)


def toggle_break(db: Session, user_id: int, *, now: datetime | None = None) -> BreakState:
    now = as_naive_utc(now) if now else utc_now()
    active = _load_active(db, user_id, lock=True)
    if active is None:
        raise NotClockedIn()

    if active.is_on_break:
        break_time = effective_break_ms(active, now)
        values = {"is_on_break": False, "break_start": None, "break_time_ms": break_time}
        state = BreakState(is_on_break=False, break_start=None, break_time_ms=break_time)
    else:
        values = {"is_on_break": True, "break_start": now}
        state = BreakState(is_on_break=True, break_start=now, break_time_ms=active.break_time_ms or 0)

    updated = (
        db.query(ActiveSession)
        .filter(ActiveSession.user_id == user_id, ActiveSession.is_on_break == bool(active.is_on_break))
        .update(values, synchronize_session=False)
    )
    if not updated:
        db.rollback()
        raise NotClockedIn()
    db.commit()

    logger.info(
        "User %s %s break (accrued %s ms)",
        user_id,
        "started" if state.is_on_break else "ended",
        state.break_time_ms,
    )
    return state


def clock_out(db: Session, user_id: int, notes: str | None = None, *, now: datetime | None = None) -> WorkSession:
    now = as_naive_utc(now) if now else utc_now()
    active = _load_active(db, user_id, lock=True)
    if active is None:
        raise NotClockedIn()

    total_break = effective_break_ms(active, now)
    duration = elapsed_ms(active.clock_in, now) - total_break
    if duration <= 0:
        db.rollback()
        raise InvalidRange("Session has no working time to record")

    # Deleting the active row and recording the completed one share a transaction.
    deleted = (
        db.query(ActiveSession)
        .filter(ActiveSession.user_id == user_id, ActiveSession.clock_in == active.clock_in)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise NotClockedIn()

    session = WorkSession(
        user_id=user_id,
        clock_in=active.clock_in,
        clock_out=now,
        duration_ms=duration,
        project_id=active.project_id,
        notes=notes or None,
    )
    db.add(session)
    db.commit()
    db.refresh(session)

    logger.info("User %s clocked out: %s ms worked, %s ms on break", user_id, duration, total_break)
    return session


def _load_active(db: Session, user_id: int, *, lock: bool = False) -> ActiveSession | None:
    query = db.query(ActiveSession).populate_existing().filter(ActiveSession.user_id == user_id)
    if lock:
        query = query.with_for_update(of=ActiveSession)
    return query.one_or_none()
