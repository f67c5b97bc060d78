"""Domain exceptions.

Every error raised by the service layer derives from :class:`SGEError` and
carries a stable ``error_code`` plus the HTTP status the API should answer
with. ``sge.main`` renders them into the JSON error envelope.
"""
from datetime import date
from typing import Dict, Iterable, List, Optional


class SGEError(Exception):
    """Base class for all SGE errors."""

    error_code: str = "SGE_ERROR"
    status_code: int = 500

    def __init__(self, message: str, error_code: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if error_code is not None:
            self.error_code = error_code
        if status_code is not None:
            self.status_code = status_code


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------

class UserAlreadyExistsError(SGEError):
    error_code = "USER_ALREADY_EXISTS"
    status_code = 409

    def __init__(self, identifier: str, kind: str = "email"):
        super().__init__(f"A user with this {kind} '{identifier}' already exists.")
        self.identifier = identifier
        self.kind = kind


class UserRegistrationError(SGEError):
    error_code = "USER_REGISTRATION_FAILED"
    status_code = 400

    def __init__(self, errors: Iterable[str]):
        self.errors: List[str] = list(errors)
        super().__init__("Registration failed: " + "; ".join(self.errors))


class InvalidCredentialsError(SGEError):
    error_code = "INVALID_CREDENTIALS"
    status_code = 401

    def __init__(self):
        super().__init__("Invalid email or password.")


class UserNotActiveError(SGEError):
    error_code = "USER_NOT_ACTIVE"
    status_code = 403

    def __init__(self):
        super().__init__("User account is deactivated.")


class InvalidRefreshTokenError(SGEError):
    error_code = "INVALID_REFRESH_TOKEN"
    status_code = 401

    def __init__(self):
        super().__init__("Invalid refresh token.")


class InvalidTokenError(SGEError):
    error_code = "INVALID_TOKEN"
    status_code = 401

    def __init__(self, message: str = "Invalid token."):
        super().__init__(message)


class TokenExpiredError(SGEError):
    error_code = "TOKEN_EXPIRED"
    status_code = 401

    def __init__(self):
        super().__init__("Token has expired.")


class ForbiddenError(SGEError):
    error_code = "FORBIDDEN"
    status_code = 403


# ---------------------------------------------------------------------------
# HR domain
# ---------------------------------------------------------------------------

class BusinessRuleError(SGEError):
    status_code = 400

    def __init__(self, message: str, error_code: str = "BUSINESS_RULE_VIOLATION", status_code: int = 400):
        super().__init__(message, error_code, status_code)


class ValidationError(SGEError):
    error_code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, errors: Dict[str, List[str]]):
        super().__init__("One or more validation errors occurred.")
        self.errors = errors

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls({field: [message]})


class EmployeeNotFoundError(SGEError):
    error_code = "EMPLOYEE_NOT_FOUND"
    status_code = 404

    def __init__(self, employee_id: int):
        super().__init__(f"Employee with id {employee_id} not found.")


class DepartmentNotFoundError(SGEError):
    error_code = "DEPARTMENT_NOT_FOUND"
    status_code = 404

    def __init__(self, department_id: int):
        super().__init__(f"Department with id {department_id} not found.")


class LeaveRequestNotFoundError(SGEError):
    error_code = "LEAVE_REQUEST_NOT_FOUND"
    status_code = 404

    def __init__(self, leave_request_id: int):
        super().__init__(f"Leave request with id {leave_request_id} not found.")


class InsufficientLeaveDaysError(SGEError):
    error_code = "INSUFFICIENT_LEAVE_DAYS"
    status_code = 400

    def __init__(self, required_days: int, available_days: int):
        super().__init__(f"Insufficient leave days. Requested: {required_days}, available: {available_days}")


class ConflictingLeaveRequestError(SGEError):
    error_code = "CONFLICTING_LEAVE_REQUEST"
    status_code = 409

    def __init__(self, start_date: date, end_date: date):
        super().__init__(
            f"Conflicting leave detected for the period {start_date:%d/%m/%Y} to {end_date:%d/%m/%Y}"
        )


class InvalidLeaveStatusTransitionError(SGEError):
    error_code = "INVALID_STATUS_TRANSITION"
    status_code = 400

    def __init__(self, current_status: str, new_status: str):
        super().__init__(f"Invalid status transition from '{current_status}' to '{new_status}'")


class AttendanceError(SGEError):
    status_code = 400

    def __init__(self, message: str, error_code: str = "ATTENDANCE_ERROR", status_code: int = 400):
        super().__init__(message, error_code, status_code)


class AlreadyClockedInError(SGEError):
    error_code = "ALREADY_CLOCKED_IN"
    status_code = 409

    def __init__(self, employee_id: int):
        super().__init__(f"Employee {employee_id} has already clocked in.")


class NotClockedInError(SGEError):
    error_code = "NOT_CLOCKED_IN"
    status_code = 400

    def __init__(self, employee_id: int):
        super().__init__(f"Employee {employee_id} has not clocked in.")


class DuplicateDepartmentNameError(SGEError):
    error_code = "DEPARTMENT_NAME_EXISTS"
    status_code = 409

    def __init__(self, name: str):
        super().__init__(f"Department name '{name}' already exists.")


class DuplicateDepartmentCodeError(SGEError):
    error_code = "DEPARTMENT_CODE_EXISTS"
    status_code = 409

    def __init__(self, code: str):
        super().__init__(f"Department code '{code}' already exists.")


class InvalidEmployeeDataError(SGEError):
    error_code = "INVALID_EMPLOYEE_DATA"
    status_code = 400
