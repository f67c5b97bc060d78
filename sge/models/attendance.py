"""Attendance model - one row per employee per working day"""
from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, String, Time, UniqueConstraint
from sqlalchemy.orm import relationship

from sge.database import Base, utcnow


class Attendance(Base):
    __tablename__ = "attendances"
    __table_args__ = (UniqueConstraint("employee_id", "date", name="uq_attendances_employee_date"),)

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    clock_in = Column(Time, nullable=True)
    clock_out = Column(Time, nullable=True)
    break_minutes = Column(Integer, nullable=True)
    worked_hours = Column(Float, nullable=False, default=0.0)
    overtime_hours = Column(Float, nullable=False, default=0.0)
    notes = Column(String(1000), nullable=False, default="")
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    employee = relationship("Employee", back_populates="attendances")

    @property
    def employee_name(self) -> str:
        return self.employee.full_name if self.employee else ""
