"""Leave requests - submission, conflict checks and approval workflow"""
from datetime import date, timedelta
from typing import Dict, FrozenSet, List, Optional

from sqlalchemy.orm import Session

from sge.database import transaction, utcnow
from sge.exceptions import (
    ConflictingLeaveRequestError,
    EmployeeNotFoundError,
    InsufficientLeaveDaysError,
    InvalidLeaveStatusTransitionError,
    LeaveRequestNotFoundError,
    ValidationError,
)
from sge.middleware.monitoring import record_leave_request
from sge.models.leave_request import LeaveRequest, LeaveStatus, LeaveType
from sge.repositories.employee_repository import EmployeeRepository
from sge.repositories.leave_request_repository import LeaveRequestRepository
from sge.schemas.leave_request import LeaveRequestCreate
from sge.utils.logger import logger

ALLOWED_TRANSITIONS: Dict[LeaveStatus, FrozenSet[LeaveStatus]] = {
    LeaveStatus.PENDING: frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED, LeaveStatus.CANCELLED}),
    LeaveStatus.APPROVED: frozenset({LeaveStatus.CANCELLED}),
    LeaveStatus.REJECTED: frozenset(),
    LeaveStatus.CANCELLED: frozenset(),
}

# Statuses that record a manager decision
_REVIEW_STATUSES = frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED})


def business_days(start: date, end: date) -> int:
    """Count Monday-Friday days in [start, end], both ends included."""
    days = 0
    current = start
    while current <= end:
        if current.weekday() < 5:
            days += 1
        current += timedelta(days=1)
    return days


class LeaveRequestService:
    def __init__(
        self,
        db: Session,
        leave_requests: LeaveRequestRepository,
        employees: EmployeeRepository,
        annual_leave_days: int = 25,
    ):
        self.db = db
        self.leave_requests = leave_requests
        self.employees = employees
        self.annual_leave_days = annual_leave_days

    def create(self, data: LeaveRequestCreate, today: Optional[date] = None) -> LeaveRequest:
        today = today or date.today()
        with transaction(self.db):
            if not self.employees.exists(data.employee_id):
                raise EmployeeNotFoundError(data.employee_id)
            if data.end_date < data.start_date:
                raise ValidationError.for_field("end_date", "End date must be on or after the start date.")
            if data.start_date < today:
                raise ValidationError.for_field("start_date", "Start date cannot be in the past.")

            days = business_days(data.start_date, data.end_date)

            if self.has_conflicting_leave(data.employee_id, data.start_date, data.end_date):
                raise ConflictingLeaveRequestError(data.start_date, data.end_date)

            if data.leave_type == LeaveType.ANNUAL:
                available = self.remaining_leave_days(data.employee_id, data.start_date.year)
                if days > available:
                    raise InsufficientLeaveDaysError(days, available)

            now = utcnow()
            leave_request = LeaveRequest(
                employee_id=data.employee_id,
                leave_type=data.leave_type,
                start_date=data.start_date,
                end_date=data.end_date,
                days_requested=days,
                reason=data.reason,
                status=LeaveStatus.PENDING,
                created_at=now,
                updated_at=now,
            )
            self.leave_requests.add(leave_request)

        record_leave_request(LeaveStatus.PENDING.value)
        logger.info(
            f"Leave request submitted: {days} day(s) of {data.leave_type.value}",
            extra={"employee_id": data.employee_id, "action": "create_leave_request"},
        )
        return leave_request

    def get(self, leave_request_id: int) -> LeaveRequest:
        leave_request = self.leave_requests.get(leave_request_id)
        if leave_request is None:
            raise LeaveRequestNotFoundError(leave_request_id)
        return leave_request

    def list(self) -> List[LeaveRequest]:
        return self.leave_requests.list()

    def list_by_employee(self, employee_id: int) -> List[LeaveRequest]:
        return self.leave_requests.list_by_employee(employee_id)

    def list_by_status(self, status: LeaveStatus) -> List[LeaveRequest]:
        return self.leave_requests.list_by_status(status)

    def list_pending(self) -> List[LeaveRequest]:
        return self.list_by_status(LeaveStatus.PENDING)

    def update_status(
        self,
        leave_request_id: int,
        status: LeaveStatus,
        comments: Optional[str] = None,
        reviewer: Optional[str] = None,
    ) -> LeaveRequest:
        with transaction(self.db):
            leave_request = self.get(leave_request_id)
            current = LeaveStatus(leave_request.status)
            if status not in ALLOWED_TRANSITIONS[current]:
                raise InvalidLeaveStatusTransitionError(current.value, status.value)

            now = utcnow()
            leave_request.status = status
            if comments is not None:
                leave_request.manager_comments = comments
            if status in _REVIEW_STATUSES:
                leave_request.reviewed_at = now
                leave_request.reviewed_by = reviewer
            leave_request.updated_at = now
            self.leave_requests.add(leave_request)

        record_leave_request(status.value)
        logger.info(
            f"Leave request {leave_request_id}: {current.value} -> {status.value}",
            extra={"employee_id": leave_request.employee_id, "action": "update_leave_status"},
        )
        return leave_request

    def remaining_leave_days(self, employee_id: int, year: int) -> int:
        if not self.employees.exists(employee_id):
            raise EmployeeNotFoundError(employee_id)

        taken = sum(
            request.days_requested
            for request in self.leave_requests.list_by_employee(employee_id)
            if request.status == LeaveStatus.APPROVED
            and request.leave_type == LeaveType.ANNUAL
            and request.start_date.year == year
        )
        return self.annual_leave_days - taken

    def has_conflicting_leave(
        self,
        employee_id: int,
        start: date,
        end: date,
        exclude_id: Optional[int] = None,
    ) -> bool:
        return bool(self.leave_requests.list_overlapping(employee_id, start, end, exclude_id))
