from sqlalchemy import BigInteger, Boolean, Column, DateTime, ForeignKey, Integer, func
from sqlalchemy.orm import relationship

from . import Base


class ActiveSession(Base):
    """The single in-progress session of a user. The primary key on ``user_id`` is the clock-in gate."""

    __tablename__ = "active_sessions"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    clock_in = Column(DateTime, nullable=False)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True)
    break_time_ms = Column(BigInteger, nullable=False, default=0, server_default="0")
    is_on_break = Column(Boolean, nullable=False, default=False, server_default="false")
    break_start = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    project = relationship("Project")

    @property
    def project_name(self) -> str | None:
        return self.project.name if self.project else None
