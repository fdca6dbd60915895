from sqlalchemy.orm import declarative_base

Base = declarative_base()

from .active_session import ActiveSession  # noqa: E402,F401
from .admin_employee import AdminEmployee  # noqa: E402,F401
from .hour_change_request import HourChangeRequest  # noqa: E402,F401
from .project import Project  # noqa: E402,F401
from .user import User  # noqa: E402,F401
from .user_settings import UserSettings  # noqa: E402,F401
from .weekly_report import WeeklyReport  # noqa: E402,F401
from .work_session import WorkSession  # noqa: E402,F401
