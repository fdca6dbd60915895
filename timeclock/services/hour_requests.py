from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..constants import REQUEST_APPROVED, REQUEST_PENDING, REQUEST_REJECTED
from ..models import AdminEmployee, HourChangeRequest, User, WorkSession
from ..schemas.message import EmployeeRead
from ..schemas.session import ActiveSessionRead
from . import reporting
from .clock import as_naive_utc, get_active_session
from .errors import Conflict, Forbidden, InvalidInput, NotFound
from .validation import validate_session_times

logger = logging.getLogger(__name__)

RESPONSE_STATUSES = {
    "approved": REQUEST_APPROVED,
    "rejected": REQUEST_REJECTED,
    "denied": REQUEST_REJECTED,
}


def link_employee(db: Session, admin_id: int, employee_email: str) -> AdminEmployee:
    _require_admin(db, admin_id)
    employee = db.query(User).filter(User.email == employee_email.lower()).one_or_none()
    if not employee:
        raise NotFound("Employee not found")
    if employee.id == admin_id:
        raise InvalidInput("Admins cannot link themselves")

    link = AdminEmployee(admin_id=admin_id, employee_id=employee.id)
    db.add(link)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise Conflict("Employee already linked") from exc
    logger.info("Admin %s linked employee %s", admin_id, employee.id)
    return link


def list_employees(db: Session, admin_id: int, *, now: datetime | None = None) -> list[EmployeeRead]:
    """Employees linked to the admin, newest link first, each with their live session and week so far."""
    _require_admin(db, admin_id)
    employees = (
        db.query(User)
        .join(AdminEmployee, AdminEmployee.employee_id == User.id)
        .filter(AdminEmployee.admin_id == admin_id)
        .order_by(AdminEmployee.created_at.desc(), AdminEmployee.id.desc())
        .all()
    )
    overview = []
    for employee in employees:
        active = get_active_session(db, employee.id)
        week = reporting.get_weekly_report(db, employee.id, now)
        overview.append(
            EmployeeRead(
                id=employee.id,
                username=employee.username,
                email=employee.email,
                active=ActiveSessionRead.model_validate(active) if active else None,
                week_total_ms=week.total_ms,
                week_session_count=week.session_count,
            )
        )
    return overview


def list_admins(db: Session, employee_id: int) -> list[User]:
    return (
        db.query(User)
        .join(AdminEmployee, AdminEmployee.admin_id == User.id)
        .filter(AdminEmployee.employee_id == employee_id)
        .order_by(AdminEmployee.created_at.desc(), AdminEmployee.id.desc())
        .all()
    )


def request_change(
    db: Session,
    user_id: int,
    session_id: int,
    requested_clock_in: datetime,
    requested_clock_out: datetime,
    message: str | None = None,
    recipient_id: int | None = None,
) -> HourChangeRequest:
    session = db.query(WorkSession).filter(WorkSession.id == session_id).one_or_none()
    if not session:
        raise NotFound("Session not found")
    if session.user_id != user_id:
        raise Forbidden("Not authorized to request changes to this session")

    request = HourChangeRequest(
        sender_id=user_id,
        recipient_id=recipient_id,
        session_id=session_id,
        requested_clock_in=as_naive_utc(requested_clock_in),
        requested_clock_out=as_naive_utc(requested_clock_out),
        message=message or None,
        status=REQUEST_PENDING,
    )
    db.add(request)
    db.commit()
    db.refresh(request)
    return request


def respond(
    db: Session,
    admin_id: int,
    request_id: int,
    status: str,
    response_message: str | None = None,
    *,
    now: datetime | None = None,
) -> HourChangeRequest:
    _require_admin(db, admin_id)
    final_status = RESPONSE_STATUSES.get((status or "").lower())
    if not final_status:
        raise InvalidInput("Valid status (approved/rejected/denied) is required")

    request = db.query(HourChangeRequest).filter(HourChangeRequest.id == request_id).one_or_none()
    if not request:
        raise NotFound("Request not found")
    if request.status != REQUEST_PENDING:
        raise Conflict("Request has already been answered")
    if not _is_linked(db, admin_id, request.sender_id):
        raise Forbidden("Not authorized to respond to this request")

    if final_status == REQUEST_APPROVED:
        session = db.query(WorkSession).filter(WorkSession.id == request.session_id).one_or_none()
        if not session:
            raise NotFound("Session not found")
        # Approved edits follow the manual-entry policy: wall-clock duration, no break deduction.
        session.duration_ms = validate_session_times(
            request.requested_clock_in, request.requested_clock_out, now=now
        )
        session.clock_in = request.requested_clock_in
        session.clock_out = request.requested_clock_out

    request.status = final_status
    request.response_message = response_message or None
    db.commit()
    db.refresh(request)
    logger.info("Admin %s %s hour change request %s", admin_id, final_status, request.id)
    return request


def list_requests(db: Session, user_id: int) -> list[HourChangeRequest]:
    """Requests the user sent, plus those from employees linked to them."""
    employee_ids = db.query(AdminEmployee.employee_id).filter(AdminEmployee.admin_id == user_id)
    return (
        db.query(HourChangeRequest)
        .filter(
            or_(
                HourChangeRequest.sender_id == user_id,
                HourChangeRequest.sender_id.in_(employee_ids.scalar_subquery()),
            )
        )
        .order_by(HourChangeRequest.created_at.desc(), HourChangeRequest.id.desc())
        .all()
    )


def pending_count(db: Session, user_id: int) -> int:
    """Pending requests from employees linked to the user; always 0 for non-admins."""
    user = db.query(User).filter(User.id == user_id).one_or_none()
    if not user or not user.is_admin:
        return 0
    return (
        db.query(HourChangeRequest)
        .join(AdminEmployee, AdminEmployee.employee_id == HourChangeRequest.sender_id)
        .filter(AdminEmployee.admin_id == user_id, HourChangeRequest.status == REQUEST_PENDING)
        .count()
    )


def _require_admin(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).one_or_none()
    if not user or not user.is_admin:
        raise Forbidden("Admin access required")
    return user


def _is_linked(db: Session, admin_id: int, employee_id: int) -> bool:
    return (
        db.query(AdminEmployee.id)
        .filter(AdminEmployee.admin_id == admin_id, AdminEmployee.employee_id == employee_id)
        .first()
        is not None
    )
