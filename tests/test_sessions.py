from datetime import datetime, timedelta

import pytest

from timeclock.models import WorkSession
from timeclock.services import projects as project_service
from timeclock.services import sessions as session_service
from timeclock.services.errors import DurationTooLong, NotFound

NOW = datetime(2026, 3, 4, 18, 0, 0)
HOUR_MS = 60 * 60 * 1000


def test_create_session_records_wall_clock_duration(db, make_user, make_project) -> None:
    user = make_user()
    project = make_project(user, "Support")

    session = session_service.create_session(
        db, user.id, NOW - timedelta(hours=4), NOW - timedelta(hours=1), project.id, "backfill", now=NOW
    )

    assert session.duration_ms == 3 * HOUR_MS
    assert session.project_name == "Support"
    assert session.notes == "backfill"


def test_create_session_rejects_invalid_times_without_writing(db, make_user) -> None:
    user = make_user()

    with pytest.raises(DurationTooLong):
        session_service.create_session(db, user.id, NOW - timedelta(hours=30), NOW, now=NOW)

    assert db.query(WorkSession).count() == 0


def test_update_with_same_values_recomputes_duration(db, make_user) -> None:
    user = make_user()
    created = session_service.create_session(db, user.id, NOW - timedelta(hours=5), NOW - timedelta(hours=3), now=NOW)

    updated = session_service.update_session(
        db, user.id, created.id, clock_in=created.clock_in, clock_out=created.clock_out, now=NOW
    )

    assert updated.duration_ms == 2 * HOUR_MS
    assert updated.duration_ms == (updated.clock_out - updated.clock_in) // timedelta(milliseconds=1)


def test_update_replaces_break_aware_duration(db, make_user, add_session) -> None:
    user = make_user()
    stored = add_session(user, NOW - timedelta(hours=2), 120)
    stored.duration_ms = 90 * 60_000
    db.commit()

    updated = session_service.update_session(db, user.id, stored.id, clock_out=NOW - timedelta(minutes=30), now=NOW)

    assert updated.duration_ms == 90 * 60_000
    assert updated.clock_in == NOW - timedelta(hours=2)


def test_update_keeps_omitted_fields_and_clears_explicit_none(db, make_user, make_project) -> None:
    user = make_user()
    project = make_project(user, "Design")
    created = session_service.create_session(
        db, user.id, NOW - timedelta(hours=2), NOW - timedelta(hours=1), project.id, "draft", now=NOW
    )

    kept = session_service.update_session(db, user.id, created.id, notes=None, now=NOW)

    assert kept.project_id == project.id
    assert kept.notes is None

    cleared = session_service.update_session(db, user.id, created.id, project_id=None, now=NOW)
    assert cleared.project_id is None


def test_update_other_users_session_is_not_found(db, make_user) -> None:
    owner = make_user()
    intruder = make_user()
    created = session_service.create_session(db, owner.id, NOW - timedelta(hours=2), NOW - timedelta(hours=1), now=NOW)

    with pytest.raises(NotFound):
        session_service.update_session(db, intruder.id, created.id, notes="mine now", now=NOW)


def test_delete_session(db, make_user, add_session) -> None:
    user = make_user()
    stored = add_session(user, NOW - timedelta(hours=3), 60)

    session_service.delete_session(db, user.id, stored.id)

    assert db.query(WorkSession).count() == 0
    with pytest.raises(NotFound):
        session_service.delete_session(db, user.id, stored.id)


def test_list_sessions_newest_first_with_filters(db, make_user, add_session) -> None:
    user = make_user()
    older = add_session(user, datetime(2026, 3, 1, 9, 0), 60)
    middle = add_session(user, datetime(2026, 3, 2, 9, 0), 60)
    newer = add_session(user, datetime(2026, 3, 3, 9, 0), 60)

    assert [s.id for s in session_service.list_sessions(db, user.id)] == [newer.id, middle.id, older.id]
    filtered = session_service.list_sessions(db, user.id, start=datetime(2026, 3, 2), end=datetime(2026, 3, 2, 23, 59))
    assert [s.id for s in filtered] == [middle.id]
    assert [s.id for s in session_service.list_sessions(db, user.id, limit=1, offset=1)] == [middle.id]


def test_deleting_project_keeps_sessions(db, make_user, make_project, add_session) -> None:
    user = make_user()
    project = make_project(user, "Legacy")
    stored = add_session(user, NOW - timedelta(hours=3), 60, project)

    project_service.delete_project(db, user.id, project.id)

    db.refresh(stored)
    assert stored.project_id is None
    assert db.query(WorkSession).count() == 1
