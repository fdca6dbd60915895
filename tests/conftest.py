import itertools
import os
from datetime import datetime, timedelta

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from timeclock.db import get_db  # noqa: E402
from timeclock.main import app  # noqa: E402
from timeclock.models import Base, Project, User, WorkSession  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def make_user(db):
    counter = itertools.count(1)

    def _make(*, is_admin: bool = False, timezone: str | None = None) -> User:
        n = next(counter)
        user = User(
            username=f"user{n}",
            email=f"user{n}@example.com",
            password_hash="not-a-real-hash",
            is_admin=is_admin,
            timezone=timezone,
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_project(db):
    def _make(user: User, name: str) -> Project:
        project = Project(user_id=user.id, name=name)
        db.add(project)
        db.commit()
        return project

    return _make


@pytest.fixture
def add_session(db):
    """Insert a completed session directly, bypassing the clock engine."""

    def _add(user: User, clock_in: datetime, minutes: int, project: Project | None = None) -> WorkSession:
        session = WorkSession(
            user_id=user.id,
            clock_in=clock_in,
            clock_out=clock_in + timedelta(minutes=minutes),
            duration_ms=minutes * 60_000,
            project_id=project.id if project else None,
        )
        db.add(session)
        db.commit()
        return session

    return _add


@pytest.fixture
def client(session_factory):
    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    yield TestClient(app)
    app.dependency_overrides.clear()
