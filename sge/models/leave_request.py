"""LeaveRequest model and its enums"""
import enum

from sqlalchemy import Column, Date, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from sge.database import Base, utcnow


class LeaveType(str, enum.Enum):
    ANNUAL = "Annual"
    SICK = "Sick"
    MATERNITY = "Maternity"
    PATERNITY = "Paternity"
    PERSONAL = "Personal"
    UNPAID = "Unpaid"


class LeaveStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    CANCELLED = "Cancelled"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class LeaveRequest(Base):
    __tablename__ = "leave_requests"

    id = Column(Integer, primary_key=True, index=True)
    employee_id = Column(Integer, ForeignKey("employees.id", ondelete="CASCADE"), nullable=False, index=True)
    leave_type = Column(
        Enum(LeaveType, native_enum=False, length=20, values_callable=_enum_values), nullable=False
    )
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    days_requested = Column(Integer, nullable=False)  # business days, weekends excluded
    reason = Column(String(1000), nullable=False, default="")
    status = Column(
        Enum(LeaveStatus, native_enum=False, length=20, values_callable=_enum_values),
        nullable=False,
        default=LeaveStatus.PENDING,
        index=True,
    )
    manager_comments = Column(String(1000), nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    reviewed_by = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    # Relationships
    employee = relationship("Employee", back_populates="leave_requests")

    @property
    def employee_name(self) -> str:
        return self.employee.full_name if self.employee else ""
