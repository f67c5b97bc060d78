"""Pydantic schemas for request/response validation"""
from sge.schemas.attendance import AttendanceCreate, AttendanceResponse, ClockInOutRequest, MonthlyHoursResponse
from sge.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RefreshRequest,
    RegisterRequest,
    RevokeTokenRequest,
    UpdateUserRequest,
    UserResponse,
)
from sge.schemas.department import DepartmentCreate, DepartmentResponse, DepartmentUpdate
from sge.schemas.employee import EmployeeCreate, EmployeeResponse, EmployeeUpdate
from sge.schemas.leave_request import (
    LeaveRequestCreate,
    LeaveRequestResponse,
    LeaveStatusUpdate,
    RemainingLeaveResponse,
)

__all__ = [
    "AttendanceCreate",
    "AttendanceResponse",
    "AuthResponse",
    "ClockInOutRequest",
    "DepartmentCreate",
    "DepartmentResponse",
    "DepartmentUpdate",
    "EmployeeCreate",
    "EmployeeResponse",
    "EmployeeUpdate",
    "LeaveRequestCreate",
    "LeaveRequestResponse",
    "LeaveStatusUpdate",
    "LoginRequest",
    "MessageResponse",
    "MonthlyHoursResponse",
    "RefreshRequest",
    "RegisterRequest",
    "RemainingLeaveResponse",
    "RevokeTokenRequest",
    "UpdateUserRequest",
    "UserResponse",
]
