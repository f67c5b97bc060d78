"""Database models"""
from sge.models.attendance import Attendance
from sge.models.department import Department
from sge.models.employee import Employee
from sge.models.leave_request import LeaveRequest, LeaveStatus, LeaveType
from sge.models.refresh_token import RefreshToken
from sge.models.user import Role, User, user_roles

__all__ = [
    "Attendance",
    "Department",
    "Employee",
    "LeaveRequest",
    "LeaveStatus",
    "LeaveType",
    "RefreshToken",
    "Role",
    "User",
    "user_roles",
]
