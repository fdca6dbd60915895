from datetime import datetime

from pydantic import BaseModel, ConfigDict

from .session import ActiveSessionRead


class PeriodReport(BaseModel):
    start: datetime
    end: datetime
    session_count: int = 0
    total_ms: int = 0
    earnings: float = 0.0


class TodayReport(PeriodReport):
    active: ActiveSessionRead | None = None


class WeeklyStats(PeriodReport):
    week_id: str
    daily_breakdown: list[int]


class ProjectTotal(BaseModel):
    id: int | None = None
    name: str
    total_ms: int = 0
    session_count: int = 0


class ProjectBreakdown(BaseModel):
    projects: list[ProjectTotal]
    no_project: ProjectTotal
    entries: list[ProjectTotal]


class WeeklySnapshotRead(BaseModel):
    id: int
    user_id: int
    week_id: str
    week_start: datetime
    week_end: datetime
    total_ms: int
    session_count: int
    earnings: float
    generated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class GenerateWeeklyRequest(BaseModel):
    date: datetime | None = None
