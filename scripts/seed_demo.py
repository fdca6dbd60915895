"""Seed an admin, a linked employee, projects and a week of sessions into the configured database."""

from datetime import timedelta

from timeclock.db import SessionLocal
from timeclock.models import Project, User
from timeclock.routers.auth import get_password_hash
from timeclock.services import hour_requests, sessions as session_service, user_settings
from timeclock.services.clock import utc_now
from timeclock.services.errors import Conflict

ADMIN_EMAIL = "admin@example.com"
EMPLOYEE_EMAIL = "employee@example.com"
DEFAULT_PASSWORD = "demo1234"
DEMO_PROJECTS = ("Client work", "Internal")


def ensure_user(session, email: str, username: str, is_admin: bool) -> User:
    user = session.query(User).filter(User.email == email).one_or_none()
    if user:
        return user

    user = User(
        username=username,
        email=email,
        password_hash=get_password_hash(DEFAULT_PASSWORD),
        is_admin=is_admin,
    )
    session.add(user)
    session.commit()
    return user


def ensure_project(session, user: User, name: str) -> Project:
    project = session.query(Project).filter(Project.user_id == user.id, Project.name == name).one_or_none()
    if project is None:
        project = Project(user_id=user.id, name=name)
        session.add(project)
        session.commit()
    return project


def seed_sessions(session, user: User, projects: list[Project]) -> int:
    if session_service.list_sessions(session, user.id, limit=1):
        return 0
    now = utc_now().replace(minute=0, second=0, microsecond=0)
    created = 0
    for days_back in range(1, 6):
        start = now - timedelta(days=days_back, hours=8)
        project = projects[days_back % len(projects)]
        session_service.create_session(session, user.id, start, start + timedelta(hours=7, minutes=30), project.id)
        created += 1
    return created


def main() -> None:
    session = SessionLocal()
    try:
        admin = ensure_user(session, ADMIN_EMAIL, "demo-admin", True)
        employee = ensure_user(session, EMPLOYEE_EMAIL, "demo-employee", False)
        try:
            hour_requests.link_employee(session, admin.id, employee.email)
        except Conflict:
            pass
        user_settings.update_settings(session, employee.id, hourly_rate=25.0)
        projects = [ensure_project(session, employee, name) for name in DEMO_PROJECTS]
        created = seed_sessions(session, employee, projects)
        print("Demo data ready:")
        print(f"  Admin login: {ADMIN_EMAIL} / {DEFAULT_PASSWORD}")
        print(f"  Employee login: {EMPLOYEE_EMAIL} / {DEFAULT_PASSWORD} ({created} sessions added)")
    finally:
        session.close()


if __name__ == "__main__":
    main()
