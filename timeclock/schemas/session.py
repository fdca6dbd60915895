from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ClockInRequest(BaseModel):
    project_id: int | None = None


class ClockOutRequest(BaseModel):
    notes: str | None = Field(default=None, max_length=2000)


class SessionCreate(BaseModel):
    clock_in: datetime
    clock_out: datetime
    project_id: int | None = None
    notes: str | None = Field(default=None, max_length=2000)


class SessionUpdate(BaseModel):
    clock_in: datetime | None = None
    clock_out: datetime | None = None
    project_id: int | None = None
    notes: str | None = Field(default=None, max_length=2000)


class ActiveSessionRead(BaseModel):
    user_id: int
    clock_in: datetime
    project_id: int | None = None
    project_name: str | None = None
    break_time_ms: int = 0
    is_on_break: bool = False
    break_start: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class SessionRead(BaseModel):
    id: int
    user_id: int
    clock_in: datetime
    clock_out: datetime
    duration_ms: int
    project_id: int | None = None
    project_name: str | None = None
    notes: str | None = None
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class BreakStateRead(BaseModel):
    is_on_break: bool
    break_start: datetime | None = None
    break_time_ms: int

    model_config = ConfigDict(from_attributes=True)
