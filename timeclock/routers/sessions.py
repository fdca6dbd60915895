from datetime import datetime

from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.session import (
    ActiveSessionRead,
    BreakStateRead,
    ClockInRequest,
    ClockOutRequest,
    SessionCreate,
    SessionRead,
    SessionUpdate,
)
from ..services import clock, sessions as session_service
from .auth import require_user

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


def _session_payload(session) -> dict:
    return SessionRead.model_validate(session).model_dump(mode="json")


@router.get("")
async def list_sessions(
    start: datetime | None = None,
    end: datetime | None = None,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    rows = session_service.list_sessions(db, user_id, start=start, end=end, limit=limit, offset=offset)
    return {"sessions": [_session_payload(row) for row in rows]}


@router.get("/active")
async def get_active(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    active = clock.get_active_session(db, user_id)
    return {"active": ActiveSessionRead.model_validate(active).model_dump(mode="json") if active else None}


@router.post("/clock-in", status_code=status.HTTP_201_CREATED)
async def clock_in(
    payload: ClockInRequest | None = Body(default=None),
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    active = clock.clock_in(db, user_id, payload.project_id if payload else None)
    return {"message": "Clocked in", "active": ActiveSessionRead.model_validate(active).model_dump(mode="json")}


@router.post("/clock-out")
async def clock_out(
    payload: ClockOutRequest | None = Body(default=None),
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    session = clock.clock_out(db, user_id, payload.notes if payload else None)
    return {"message": "Clocked out", "session": _session_payload(session)}


@router.post("/break")
async def toggle_break(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    state = clock.toggle_break(db, user_id)
    return {
        "message": "Break started" if state.is_on_break else "Break ended",
        **BreakStateRead.model_validate(state).model_dump(mode="json"),
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_session(
    payload: SessionCreate,
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    session = session_service.create_session(
        db,
        user_id,
        payload.clock_in,
        payload.clock_out,
        payload.project_id,
        payload.notes,
    )
    return {"message": "Session created", "session": _session_payload(session)}


@router.put("/{session_id}")
async def update_session(
    session_id: int,
    payload: SessionUpdate,
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    optional = {
        field: getattr(payload, field)
        for field in ("project_id", "notes")
        if field in payload.model_fields_set
    }
    session = session_service.update_session(
        db,
        user_id,
        session_id,
        clock_in=payload.clock_in,
        clock_out=payload.clock_out,
        **optional,
    )
    return {"message": "Session updated", "session": _session_payload(session)}


@router.delete("/{session_id}")
async def delete_session(session_id: int, user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    session_service.delete_session(db, user_id, session_id)
    return {"message": "Session deleted"}
