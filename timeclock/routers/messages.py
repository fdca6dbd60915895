from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from ..db import get_db
from ..schemas.message import AdminRead, HourChangeCreate, HourChangeRead, HourChangeResponse, LinkEmployeeRequest
from ..services import hour_requests
from .auth import require_user

router = APIRouter(prefix="/api", tags=["messages"])


def _request_payload(row) -> dict:
    return HourChangeRead.model_validate(row).model_dump(mode="json")


@router.get("/messages")
async def list_messages(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    return {"messages": [_request_payload(row) for row in hour_requests.list_requests(db, user_id)]}


@router.get("/messages/admins")
async def list_admins(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    rows = hour_requests.list_admins(db, user_id)
    return {"admins": [AdminRead.model_validate(row).model_dump() for row in rows]}


@router.get("/messages/pending-count")
async def pending_count(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    return {"count": hour_requests.pending_count(db, user_id)}


@router.post("/messages", status_code=status.HTTP_201_CREATED)
async def send_message(payload: HourChangeCreate, user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    row = hour_requests.request_change(
        db,
        user_id,
        payload.session_id,
        payload.requested_clock_in,
        payload.requested_clock_out,
        payload.message,
        payload.recipient_id,
    )
    return {"message": "Request sent successfully", "data": _request_payload(row)}


@router.post("/messages/{request_id}/respond")
async def respond(
    request_id: int,
    payload: HourChangeResponse,
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    row = hour_requests.respond(db, user_id, request_id, payload.status, payload.response_message)
    return {"message": f"Request {row.status} successfully", "data": _request_payload(row)}


@router.post("/admin/employees", status_code=status.HTTP_201_CREATED)
async def link_employee(payload: LinkEmployeeRequest, user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    link = hour_requests.link_employee(db, user_id, payload.email)
    return {"message": "Employee linked", "employee_id": link.employee_id}


@router.get("/admin/employees")
async def list_employees(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    rows = hour_requests.list_employees(db, user_id)
    return {"employees": [row.model_dump(mode="json") for row in rows]}
