"""Service layer - one unit of work per public operation"""
from sge.services.attendance_service import AttendanceService
from sge.services.auth_service import AuthResult, AuthService
from sge.services.department_service import DepartmentService
from sge.services.employee_service import EmployeeService
from sge.services.leave_request_service import LeaveRequestService
from sge.services.token_service import TokenService

__all__ = [
    "AttendanceService",
    "AuthResult",
    "AuthService",
    "DepartmentService",
    "EmployeeService",
    "LeaveRequestService",
    "TokenService",
]
