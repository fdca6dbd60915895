from sqlalchemy import BigInteger, Column, DateTime, Float, ForeignKey, Integer, String, UniqueConstraint, func

from . import Base


class WeeklyReport(Base):
    __tablename__ = "weekly_reports"
    __table_args__ = (UniqueConstraint("user_id", "week_id", name="uq_weekly_reports_user_week"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    week_id = Column(String(20), nullable=False)
    week_start = Column(DateTime, nullable=False)
    week_end = Column(DateTime, nullable=False)
    total_ms = Column(BigInteger, nullable=False)
    session_count = Column(Integer, nullable=False)
    earnings = Column(Float, nullable=False)
    generated_at = Column(DateTime, server_default=func.now())
