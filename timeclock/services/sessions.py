from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from ..models import WorkSession
from . import projects as project_service
from .clock import as_naive_utc
from .errors import NotFound
from .validation import validate_session_times

logger = logging.getLogger(__name__)

UNSET = object()


def list_sessions(
    db: Session,
    user_id: int,
    *,
    start: datetime | None = None,
    end: datetime | None = None,
    limit: int = 100,
    offset: int = 0,
) -> list[WorkSession]:
    query = db.query(WorkSession).filter(WorkSession.user_id == user_id)
    if start:
        query = query.filter(WorkSession.clock_in >= as_naive_utc(start))
    if end:
        query = query.filter(WorkSession.clock_in <= as_naive_utc(end))
    return query.order_by(WorkSession.clock_in.desc()).offset(offset).limit(limit).all()


def get_session(db: Session, user_id: int, session_id: int) -> WorkSession:
    session = (
        db.query(WorkSession)
        .filter(WorkSession.id == session_id, WorkSession.user_id == user_id)
        .one_or_none()
    )
    if not session:
        raise NotFound("Session not found")
    return session


def create_session(
    db: Session,
    user_id: int,
    clock_in: datetime,
    clock_out: datetime,
    project_id: int | None = None,
    notes: str | None = None,
    *,
    now: datetime | None = None,
) -> WorkSession:
    duration = validate_session_times(clock_in, clock_out, now=now)
    if project_id is not None:
        project_service.get_project(db, user_id, project_id)

    session = WorkSession(
        user_id=user_id,
        clock_in=as_naive_utc(clock_in),
        clock_out=as_naive_utc(clock_out),
        duration_ms=duration,
        project_id=project_id,
        notes=notes or None,
    )
    db.add(session)
    db.commit()
    db.refresh(session)
    logger.info("User %s added a manual session %s (%s ms)", user_id, session.id, duration)
    return session


def update_session(
    db: Session,
    user_id: int,
    session_id: int,
    *,
    clock_in: datetime | None = None,
    clock_out: datetime | None = None,
    project_id=UNSET,
    notes=UNSET,
    now: datetime | None = None,
) -> WorkSession:
    """Edit a completed session. Omitted fields keep their stored values; the duration is recomputed."""
    session = get_session(db, user_id, session_id)
    new_clock_in = as_naive_utc(clock_in) if clock_in else session.clock_in
    new_clock_out = as_naive_utc(clock_out) if clock_out else session.clock_out
    duration = validate_session_times(new_clock_in, new_clock_out, now=now)

    if project_id is not UNSET and project_id is not None:
        project_service.get_project(db, user_id, project_id)

    session.clock_in = new_clock_in
    session.clock_out = new_clock_out
    session.duration_ms = duration
    if project_id is not UNSET:
        session.project_id = project_id
    if notes is not UNSET:
        session.notes = notes
    db.commit()
    db.refresh(session)
    logger.info("User %s updated session %s (%s ms)", user_id, session.id, duration)
    return session


def delete_session(db: Session, user_id: int, session_id: int) -> None:
    deleted = (
        db.query(WorkSession)
        .filter(WorkSession.id == session_id, WorkSession.user_id == user_id)
        .delete(synchronize_session=False)
    )
    if not deleted:
        db.rollback()
        raise NotFound("Session not found")
    db.commit()
