"""Repositories - thin SQLAlchemy query wrappers.

Repositories add and flush; committing is left to the calling service so a
whole operation lands in one transaction.
"""
from sge.repositories.attendance_repository import AttendanceRepository
from sge.repositories.department_repository import DepartmentRepository
from sge.repositories.employee_repository import EmployeeRepository
from sge.repositories.leave_request_repository import LeaveRequestRepository
from sge.repositories.refresh_token_repository import RefreshTokenRepository
from sge.repositories.user_repository import UserRepository

__all__ = [
    "AttendanceRepository",
    "DepartmentRepository",
    "EmployeeRepository",
    "LeaveRequestRepository",
    "RefreshTokenRepository",
    "UserRepository",
]
