from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint, func

from . import Base


class AdminEmployee(Base):
    __tablename__ = "admin_employees"
    __table_args__ = (UniqueConstraint("admin_id", "employee_id", name="uq_admin_employees_pair"),)

    id = Column(Integer, primary_key=True)
    admin_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    employee_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())
