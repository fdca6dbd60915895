from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from .session import ActiveSessionRead


class HourChangeCreate(BaseModel):
    session_id: int
    requested_clock_in: datetime
    requested_clock_out: datetime
    message: str | None = Field(default=None, max_length=2000)
    recipient_id: int | None = None


class HourChangeResponse(BaseModel):
    status: str
    response_message: str | None = Field(default=None, max_length=2000)


class HourChangeRead(BaseModel):
    id: int
    sender_id: int
    recipient_id: int | None = None
    session_id: int
    requested_clock_in: datetime
    requested_clock_out: datetime
    message: str | None = None
    status: str
    response_message: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class LinkEmployeeRequest(BaseModel):
    email: EmailStr


class AdminRead(BaseModel):
    id: int
    username: str
    email: EmailStr

    model_config = ConfigDict(from_attributes=True)


class EmployeeRead(AdminRead):
    active: ActiveSessionRead | None = None
    week_total_ms: int = 0
    week_session_count: int = 0
