from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, func

from . import Base


class UserSettings(Base):
    __tablename__ = "user_settings"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    hourly_rate = Column(Float, nullable=False, default=0.0, server_default="0")
    text_size = Column(String(20), nullable=False, default="medium", server_default="medium")
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())
