from __future__ import annotations

from datetime import date as Date, datetime

from fastapi import APIRouter, Body, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..config import get_settings
from ..db import get_db
from ..schemas.report import GenerateWeeklyRequest, WeeklySnapshotRead
from ..services import reporting
from .auth import require_user

router = APIRouter(prefix="/api/reports", tags=["reports"])


def _report_target(value: datetime | None) -> Date | datetime | None:
    """Naive values from a request are wall time in the user's zone, so only their calendar date counts."""
    if value is not None and value.tzinfo is None:
        return value.date()
    return value


@router.get("/today")
async def today(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    return reporting.get_today_report(db, user_id).model_dump(mode="json")


@router.get("/weekly")
async def weekly(
    date: datetime | None = None,
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    return reporting.get_weekly_report(db, user_id, _report_target(date)).model_dump(mode="json")


@router.get("/monthly")
async def monthly(
    date: datetime | None = None,
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    return reporting.get_monthly_report(db, user_id, _report_target(date)).model_dump(mode="json")


@router.get("/projects")
async def project_breakdown(
    start: datetime | None = None,
    end: datetime | None = None,
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    return reporting.get_project_breakdown(db, user_id, start, end).model_dump(mode="json")


@router.get("/past-weeks")
async def past_weeks(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    rows = reporting.list_weekly_reports(db, user_id, get_settings().weekly_history_limit)
    return {"reports": [WeeklySnapshotRead.model_validate(row).model_dump(mode="json") for row in rows]}


@router.post("/generate-weekly")
async def generate_weekly(
    payload: GenerateWeeklyRequest | None = Body(default=None),
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    target = _report_target(payload.date) if payload else None
    existing_before = reporting.find_weekly_report(db, user_id, target)
    report = reporting.generate_weekly_report(db, user_id, target)
    body = {
        "message": "Report already exists" if existing_before else "Report generated",
        "report": WeeklySnapshotRead.model_validate(report).model_dump(mode="json"),
    }
    return JSONResponse(body, status_code=status.HTTP_200_OK if existing_before else status.HTTP_201_CREATED)
