from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from . import Base


class HourChangeRequest(Base):
    __tablename__ = "hour_change_requests"

    id = Column(Integer, primary_key=True)
    sender_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    recipient_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    session_id = Column(Integer, ForeignKey("work_sessions.id", ondelete="CASCADE"), nullable=False)
    requested_clock_in = Column(DateTime, nullable=False)
    requested_clock_out = Column(DateTime, nullable=False)
    message = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default="pending", server_default="pending", index=True)
    response_message = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())
