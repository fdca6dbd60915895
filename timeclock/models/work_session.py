from sqlalchemy import BigInteger, Column, DateTime, ForeignKey, Integer, Text, func
from sqlalchemy.orm import relationship

from . import Base


class WorkSession(Base):
    """A completed clock-in/clock-out interval. ``duration_ms`` excludes break time."""

    __tablename__ = "work_sessions"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    clock_in = Column(DateTime, nullable=False, index=True)
    clock_out = Column(DateTime, nullable=False)
    duration_ms = Column(BigInteger, nullable=False)
    project_id = Column(Integer, ForeignKey("projects.id", ondelete="SET NULL"), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    project = relationship("Project", lazy="joined")

    @property
    def project_name(self) -> str | None:
        return self.project.name if self.project else None
